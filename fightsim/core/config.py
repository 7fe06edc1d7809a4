"""
Configuration of a combat session.

Every tunable of the engine lives here and is handed explicitly to the
session, which forwards it to the scheduler, the resolver and the effect
engine.
"""

from typing import Any

from pydantic import BaseModel, Field


class CombatConfig(BaseModel):
    """Tunable numbers of the combat rules."""

    speed_threshold: int = Field(
        100,
        description=(
            "Speed difference granting a supplementary action, also the speed "
            "tax paid for it."
        ),
    )
    coeff_crit_dmg: float = Field(
        2.0,
        description="Multiplier applied to HP damage and heals on a critical strike.",
    )
    coeff_crit_stats: float = Field(
        1.5,
        description="Multiplier applied to crit-boosted buffs on a critical strike.",
    )
    block_percent: int = Field(
        90,
        description="Percentage of damage blocked by a tank that is the selected target.",
    )
    nb_turns_sum_aggro: int = Field(
        5,
        description="Number of past turns summed to evaluate a character's aggro.",
    )
    ultimate_level: int = Field(
        13,
        description="Attack level from which an attack belongs to the ultimate tier.",
    )
    seed: int | None = Field(
        default=None,
        description="Seed of the random source, None for a non-reproducible session.",
    )

    def model_post_init(self, _: Any) -> None:
        if self.speed_threshold <= 0:
            raise ValueError("speed_threshold must be a positive integer.")
        if not 0 <= self.block_percent <= 100:
            raise ValueError("block_percent must be between 0 and 100.")
        if self.coeff_crit_dmg < 1 or self.coeff_crit_stats < 1:
            raise ValueError("Critical coefficients cannot reduce the amounts.")
        if self.nb_turns_sum_aggro <= 0:
            raise ValueError("nb_turns_sum_aggro must be a positive integer.")
