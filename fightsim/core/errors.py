"""
Error types raised by the fight engine.

Configuration problems (a stat missing from a character, a malformed effect or
attack definition, an unknown name at the data boundary) are fatal to the
single resolution that hits them, and are surfaced as typed errors. Unknown
attacks or targets are not errors: callers receive an empty result instead.
"""


class FightError(Exception):
    """Base class for every error raised by the fight engine."""


class ConfigurationError(FightError, ValueError):
    """Raised when character, attack or effect data is inconsistent."""


class MissingStat(ConfigurationError):
    """Raised when a stat is looked up on a stat model that does not hold it."""

    def __init__(self, stat: object, owner: str = "") -> None:
        self.stat = stat
        self.owner = owner
        where = f" on '{owner}'" if owner else ""
        super().__init__(f"Missing stat '{stat}'{where}")
