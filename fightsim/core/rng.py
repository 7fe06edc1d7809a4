"""
Seedable random source for the fight engine.

Dodge, critical strikes, random targets and computer choices all draw from a
single ``CombatRng`` owned by the session, so that the same seed and the same
inputs replay the same fight.
"""

import random
from collections.abc import Sequence
from typing import Any, TypeVar

_T = TypeVar("_T")


class CombatRng:
    """Percent rolls and choices backed by a private ``random.Random``."""

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed
        self._random = random.Random(seed)

    def roll_percent(self) -> int:
        """Draws an integer in [0, 100)."""
        return self._random.randrange(100)

    def check_percent(self, probability: int) -> bool:
        """
        Checks a probability expressed in percent.

        Args:
            probability (int):
                Chance of success, 0 never succeeds and 100 always does.

        Returns:
            bool:
                True if the roll succeeds.

        """
        if probability <= 0:
            return False
        if probability >= 100:
            return True
        return self.roll_percent() < probability

    def choice(self, items: Sequence[_T]) -> _T:
        """Picks one element of a non-empty sequence."""
        return self._random.choice(items)

    def getstate(self) -> list[Any]:
        """
        Returns the internal state of the source as nested lists, so that it
        can be stored as JSON.
        """
        version, internal, gauss_next = self._random.getstate()
        return [version, list(internal), gauss_next]

    def setstate(self, state: list[Any]) -> None:
        """Restores a state returned by ``getstate``."""
        version, internal, gauss_next = state
        self._random.setstate((version, tuple(internal), gauss_next))
