"""
Effect module for the fight engine.

Defines the effect carried by an attack (used both as template in the attack
definition and as running instance once registered on a target), the registry
entry tracking who launched it on whom, and the outcome of one application.
"""

from typing import Any

from pydantic import BaseModel, Field

from fightsim.core.constants import Reach, StatKind, TargetKind
from fightsim.core.errors import ConfigurationError
from fightsim.core.utils import build_effect_name

from .effect_type import (
    EffectType,
    is_boosted_by_crit,
    is_launcher_modifier,
    is_percent_type,
    needs_stat,
)


class EffectParam(BaseModel):
    """
    One effect of an attack.

    The same model describes the template held by an attack definition and the
    instance registered on a target when the duration exceeds one turn; the
    instance is a copy of the template whose value already includes the
    critical strike and the repetitions resolved at launch.
    """

    effect_type: EffectType = Field(
        description="The kind of effect.",
    )
    stat: StatKind | None = Field(
        default=None,
        description="The stat the effect acts on, None for effects without stat.",
    )
    value: int = Field(
        0,
        description="The magnitude, a percentage for percent effect types.",
    )
    sub_value: int = Field(
        0,
        description="Secondary magnitude, e.g. the per-turn decrease of DecreaseByTurn.",
    )
    nb_turns: int = Field(
        1,
        description="Duration in turns, effects lasting more than one turn are registered.",
    )
    counter_turn: int = Field(
        0,
        description="Number of turns elapsed since the effect was launched.",
    )
    number_of_applies: int = Field(
        1,
        description="How many times the effect is applied at launch.",
    )
    target: TargetKind = Field(
        TargetKind.ENEMY,
        description="Who the effect is meant for, relative to the launcher.",
    )
    reach: Reach = Field(
        Reach.INDIVIDUAL,
        description="How many characters of the targeted faction are reached.",
    )
    is_crit: bool = Field(
        False,
        description="Whether the instance was amplified by a critical strike.",
    )
    applied_delta: int = Field(
        0,
        description="Accumulated change applied to the stat, reversed when the effect expires.",
    )

    @property
    def is_percent(self) -> bool:
        """Whether the value is a percentage."""
        return is_percent_type(self.effect_type)

    @property
    def can_be_crit_boosted(self) -> bool:
        """Whether a critical strike amplifies the effect."""
        return is_boosted_by_crit(self.effect_type)

    @property
    def is_expired(self) -> bool:
        """Whether the elapsed-turn counter reached the duration."""
        return self.counter_turn >= self.nb_turns

    @property
    def display_name(self) -> str:
        """Returns 'stat-type', or only the type for effects without stat."""
        return build_effect_name(str(self.effect_type), str(self.stat) if self.stat else "")

    def summary_text(self) -> str:
        """Returns '{type}-{stat}: {value}', or '{type}: {value}' without stat."""
        if self.stat is None:
            return f"{self.effect_type}: {self.value}"
        return f"{self.effect_type}-{self.stat}: {self.value}"

    def model_post_init(self, _: Any) -> None:
        if self.nb_turns < 1:
            raise ConfigurationError(
                f"Effect {self.effect_type} must last at least one turn, got {self.nb_turns}."
            )
        if self.number_of_applies < 0:
            raise ConfigurationError("number_of_applies cannot be negative.")
        if needs_stat(self.effect_type) and self.stat is None:
            raise ConfigurationError(f"Effect {self.effect_type} requires a stat.")
        if is_launcher_modifier(self.effect_type):
            if self.value <= 0:
                raise ConfigurationError(
                    f"Effect {self.effect_type} requires a positive value, got {self.value}."
                )
            if self.target != TargetKind.HIMSELF:
                raise ConfigurationError(f"Effect {self.effect_type} must target the launcher.")
        if self.effect_type == EffectType.COOL_DOWN and self.target != TargetKind.HIMSELF:
            raise ConfigurationError("A cool down must target the launcher.")


class GameAtkEffects(BaseModel):
    """Registry entry of an effect running on a target."""

    effect: EffectParam = Field(
        description="The running effect instance.",
    )
    atk_name: str = Field(
        "",
        description="The attack that carried the effect.",
    )
    launcher_name: str = Field(
        "",
        description="The character that launched the attack.",
    )
    target_name: str = Field(
        "",
        description="The character the effect runs on.",
    )
    launch_turn: int = Field(
        0,
        description="The turn during which the attack was launched.",
    )


class EffectOutcome(BaseModel):
    """Result of one effect applied on one target."""

    atk_name: str = ""
    launcher_name: str = ""
    target_name: str = ""
    text: str = Field(
        "",
        description="Display text of the application.",
    )
    full_amount_tx: int = Field(
        0,
        description="Amount computed before the tank block.",
    )
    real_amount_tx: int = Field(
        0,
        description="Amount actually applied on the target.",
    )
    is_crit: bool = False
    is_hp_amount: bool = Field(
        False,
        description="Whether the amounts are HP, positive for a heal.",
    )
    new_effect: EffectParam | None = Field(
        default=None,
        description="The instance registered on the target, None for one-turn effects.",
    )
