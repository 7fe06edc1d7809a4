"""
Stat model module for the fight engine.

Holds the attributes of a character keyed by stat kind and implements every
mutation the combat rules perform on them: signed deltas, regeneration, buff
and equipment contributions to the maximum, and the overspeed tax.
"""

from typing import Any

from pydantic import BaseModel, Field

from fightsim.core.constants import REGEN_STATS, StatKind
from fightsim.core.errors import MissingStat
from fightsim.core.logging import log_debug
from fightsim.core.utils import sign, trunc_div

from .attribute import Attribute


def signed_delta(current: int, amount: int, is_percent: bool) -> int:
    """
    Computes the change a delta produces on a value.

    A percent delta is ``current * amount / 100``. An absolute delta is
    ``sign(current) * amount``: the sign of the value being changed, not the
    sign of the amount, decides the direction.

    Args:
        current (int):
            The value being changed.
        amount (int):
            The delta, a percentage of current when is_percent is set.
        is_percent (bool):
            Whether amount is a percentage.

    Returns:
        int:
            The signed change to add to current.

    """
    if is_percent:
        return trunc_div(current * amount, 100)
    return sign(current) * amount


class StatModel(BaseModel):
    """
    Per-character attribute storage.

    Attributes:
        owner (str):
            Name of the owning character, used in error messages.
        all_stats (dict[StatKind, Attribute]):
            The attributes of the character.

    """

    owner: str = Field(
        "",
        description="Name of the owning character.",
    )
    all_stats: dict[StatKind, Attribute] = Field(
        default_factory=dict,
        description="The attributes of the character keyed by stat kind.",
    )

    @classmethod
    def from_values(
        cls,
        values: dict[StatKind, int],
        owner: str = "",
        fill_missing: bool = True,
    ) -> "StatModel":
        """
        Builds a stat model from base values.

        Args:
            values (dict[StatKind, int]):
                Base value of each stat.
            owner (str):
                Name of the owning character.
            fill_missing (bool):
                Whether stats absent from values are created with a zero value.

        Returns:
            StatModel:
                The new stat model, with its raw baseline in sync.

        """
        all_stats = {kind: Attribute.from_value(value) for kind, value in values.items()}
        if fill_missing:
            for kind in StatKind:
                all_stats.setdefault(kind, Attribute())
        return cls(owner=owner, all_stats=all_stats)

    def get(self, kind: StatKind) -> Attribute:
        """
        Returns the attribute of a stat.

        Raises:
            MissingStat:
                If the stat model does not hold that stat.

        """
        try:
            return self.all_stats[kind]
        except KeyError:
            raise MissingStat(kind, self.owner) from None

    def current(self, kind: StatKind) -> int:
        """Returns the current value of a stat."""
        return self.get(kind).current

    # === Current value ===

    def shift_current(self, kind: StatKind, delta: int) -> int:
        """
        Adds a delta to the current value of a stat, clamped to [0, max].

        Args:
            kind (StatKind):
                The stat to change.
            delta (int):
                The signed change.

        Returns:
            int:
                The change actually applied after clamping.

        """
        attr = self.get(kind)
        before = attr.current
        attr.current = self._clamp(kind, attr.current + delta, attr.max)
        return attr.current - before

    def apply_delta(self, kind: StatKind, amount: int, is_percent: bool) -> int:
        """
        Applies a delta on the current value of a stat, following
        ``signed_delta``.

        Returns:
            int:
                The change actually applied after clamping.

        """
        attr = self.get(kind)
        return self.shift_current(kind, signed_delta(attr.current, amount, is_percent))

    def reset_current(self, kind: StatKind) -> int:
        """Restores the current value of a stat to its maximum, returns the change."""
        attr = self.get(kind)
        return self.shift_current(kind, attr.max - attr.current)

    # === Regeneration ===

    def apply_regen(self) -> None:
        """
        Applies one turn of regeneration.

        HP, Mana, Vigor and Berserk regenerate up to their maximum. Speed
        regeneration has no cap and raises current, max and max_raw alike. In
        both cases current_raw follows current proportionally.
        """
        for kind, regen_kind in REGEN_STATS.items():
            if kind not in self.all_stats or regen_kind not in self.all_stats:
                continue
            attr = self.all_stats[kind]
            regen = self.all_stats[regen_kind].current
            attr.current = self._clamp(kind, min(attr.max, attr.current + regen), attr.max)
            attr.current_raw = self._rescaled_raw(attr)

        if StatKind.SPEED in self.all_stats and StatKind.SPEED_REGEN in self.all_stats:
            speed = self.all_stats[StatKind.SPEED]
            regen = self.all_stats[StatKind.SPEED_REGEN].current
            speed.max = max(0, speed.max + regen)
            speed.max_raw = max(0, speed.max_raw + regen)
            speed.current = self._clamp(StatKind.SPEED, speed.current + regen, speed.max)
            speed.current_raw = self._rescaled_raw(speed)

    def sync_raw_baseline(self) -> None:
        """Sets the raw values of every stat to its current values."""
        for attr in self.all_stats.values():
            attr.current_raw = attr.current
            attr.max_raw = attr.max

    # === Maximum ===

    def add_buf(self, kind: StatKind, value: int, is_percent: bool) -> None:
        """Adds (or removes, with a negative value) a buff contribution to a stat."""
        attr = self.get(kind)
        if is_percent:
            attr.buf_percent += value
        else:
            attr.buf_value += value
        self.recompute_max(kind)

    def add_equipment(self, kind: StatKind, value: int, is_percent: bool) -> None:
        """Adds (or removes, with a negative value) an equipment contribution to a stat."""
        attr = self.get(kind)
        if is_percent:
            attr.equip_percent += value
        else:
            attr.equip_value += value
        self.recompute_max(kind)

    def recompute_max(self, kind: StatKind) -> None:
        """
        Recomputes the maximum of a stat from its raw maximum and its
        contributions. The current value keeps its ratio to the maximum.
        """
        attr = self.get(kind)
        old_max = attr.max
        new_max = (
            attr.max_raw
            + attr.equip_value
            + attr.buf_value
            + trunc_div(attr.max_raw * (attr.equip_percent + attr.buf_percent), 100)
        )
        new_max = self._clamp(kind, new_max, None)
        if old_max > 0:
            current = trunc_div(attr.current * new_max, old_max)
        else:
            current = new_max
        attr.max = new_max
        attr.current = self._clamp(kind, current, new_max)
        log_debug(
            f"Recomputed max of {kind} for {self.owner}",
            {"old_max": old_max, "new_max": new_max, "current": attr.current},
        )

    def reduce_speed(self, amount: int) -> None:
        """Removes amount from every speed value, saturating at 0."""
        speed = self.get(StatKind.SPEED)
        speed.current = max(0, speed.current - amount)
        speed.max = max(0, speed.max - amount)
        speed.current_raw = max(0, speed.current_raw - amount)
        speed.max_raw = max(0, speed.max_raw - amount)

    # === Helpers ===

    def _clamp(self, kind: StatKind, value: int, upper: int | None) -> int:
        if value < 0:
            log_debug(
                f"Clamped negative {kind} of {self.owner} to 0",
                {"rejected": value},
            )
            return 0
        if upper is not None and value > upper:
            return upper
        return value

    @staticmethod
    def _rescaled_raw(attr: Attribute) -> int:
        if attr.max <= 0:
            return 0
        return trunc_div(attr.max_raw * attr.current, attr.max)

    def model_post_init(self, _: Any) -> None:
        for kind, attr in self.all_stats.items():
            if attr.current < 0 or attr.max < 0:
                raise ValueError(f"Stat {kind} of '{self.owner}' cannot be negative.")
            if attr.current > attr.max:
                raise ValueError(f"Stat {kind} of '{self.owner}' exceeds its maximum.")
