"""
Constants and enumerations for the fight engine.

Defines the closed enumerations used throughout the engine: stat kinds,
character kinds and classes, targeting and reach modes, buffer kinds and the
session status. Display names are only converted to enums at the data
boundary, through the ``from_name`` helpers.
"""

from enum import Enum
from typing import Any

from .errors import ConfigurationError


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.value

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: str) -> Any:
        """
        Converts a display name (or member name) into an enum member.

        Args:
            name (str):
                The display name, e.g. "Critical strike", or the member name,
                e.g. "CRITICAL_STRIKE".

        Raises:
            ConfigurationError:
                If the name matches no member.

        Returns:
            The matching enum member.

        """
        for member in cls:
            if name in (member.value, member.name):
                return member
        raise ConfigurationError(f"Unknown {cls.__name__} name: '{name}'")


class StatKind(NiceEnum):
    """Defines every stat a character carries in its stat model."""

    HP = "HP"
    MANA = "Mana"
    VIGOR = "Vigor"
    BERSERK = "Berserk"
    PHYSICAL_ARMOR = "Physical armor"
    MAGICAL_ARMOR = "Magic armor"
    PHYSICAL_POWER = "Physical power"
    MAGICAL_POWER = "Magic power"
    AGGRO = "Aggro"
    SPEED = "Speed"
    CRITICAL_STRIKE = "Critical strike"
    DODGE = "Dodge"
    HP_REGEN = "HP regeneration"
    MANA_REGEN = "Mana regeneration"
    VIGOR_REGEN = "Vigor regeneration"
    BERSERK_RATE = "Berserk rate"
    AGGRO_RATE = "Aggro rate"
    SPEED_REGEN = "Speed regeneration"


# Capped stats and the stat holding their regeneration amount.
REGEN_STATS: dict[StatKind, StatKind] = {
    StatKind.HP: StatKind.HP_REGEN,
    StatKind.MANA: StatKind.MANA_REGEN,
    StatKind.VIGOR: StatKind.VIGOR_REGEN,
    StatKind.BERSERK: StatKind.BERSERK_RATE,
}

# Stats restored by a Reinit effect that does not name a stat.
REINIT_DEFAULT_STATS: tuple[StatKind, ...] = (
    StatKind.HP,
    StatKind.MANA,
    StatKind.VIGOR,
)


class CharacterKind(NiceEnum):
    """Defines the faction of a character."""

    HERO = "Hero"
    BOSS = "Boss"

    @property
    def color(self) -> str:
        """Returns the color string associated with this faction."""
        return {
            CharacterKind.HERO: "bold blue",
            CharacterKind.BOSS: "bold red",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies faction color formatting to a message."""
        return f"[{self.color}]{message}[/]"

    @property
    def opponent(self) -> "CharacterKind":
        """Returns the opposing faction."""
        if self == CharacterKind.HERO:
            return CharacterKind.BOSS
        return CharacterKind.HERO


class CharacterClass(NiceEnum):
    """Defines the combat class of a character."""

    STANDARD = "Standard"
    TANK = "Tank"


class TargetKind(NiceEnum):
    """Defines who an effect is meant for, relative to its launcher."""

    HIMSELF = "Himself"
    ALLY = "Ally"
    ENEMY = "Enemy"


class Reach(NiceEnum):
    """Defines how many characters of the targeted faction are reached."""

    INDIVIDUAL = "Individual"
    ZONE = "Zone"
    RANDOM = "Random"


class AttackTier(NiceEnum):
    """Defines the tier of an attack, derived from its level requirement."""

    STANDARD = "Standard"
    ULTIMATE = "Ultimate"


class BufKind(NiceEnum):
    """Defines the damage/heal buffers a character can carry."""

    DAMAGE_TX = "Damage tx"
    DAMAGE_RX = "Damage rx"
    HEAL_TX = "Heal tx"
    HEAL_RX = "Heal rx"
    HEAL_MULTI = "Heal multi"


class GameStatus(NiceEnum):
    """Defines the states of a combat session."""

    CREATED = "Created"
    START_ROUND = "StartRound"
    END_OF_GAME = "EndOfGame"


def is_opponent(kind1: CharacterKind, kind2: CharacterKind) -> bool:
    """Determines if a character of kind2 is an opponent of one of kind1.

    Args:
        kind1 (CharacterKind): The first character kind.
        kind2 (CharacterKind): The second character kind.

    Returns:
        bool: True if kind2 is an opponent of kind1, False otherwise.

    """
    return kind1 != kind2
