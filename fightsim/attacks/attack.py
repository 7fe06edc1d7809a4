"""
Attack definition module for the fight engine.

An attack is a named, levelled list of effects with resource costs and a
targeting rule. Definitions come from the data layer and are never mutated by
a fight.
"""

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from fightsim.core.constants import AttackTier, Reach, StatKind, TargetKind
from fightsim.core.errors import ConfigurationError
from fightsim.core.utils import trunc_div
from fightsim.effects.effect import EffectParam
from fightsim.effects.effect_type import EffectType

if TYPE_CHECKING:
    from fightsim.character.main import Character


class AttackDefinition(BaseModel):
    """
    An attack a character can launch.

    Costs are percentages of the maximum of the corresponding stat of the
    launcher.
    """

    name: str = Field(
        description="The unique name of the attack.",
    )
    level: int = Field(
        1,
        description="The minimum level of the launcher.",
    )
    mana_cost: int = Field(
        0,
        description="Mana cost, in percent of the launcher max Mana.",
    )
    vigor_cost: int = Field(
        0,
        description="Vigor cost, in percent of the launcher max Vigor.",
    )
    berserk_cost: int = Field(
        0,
        description="Berserk cost, in percent of the launcher max Berserk.",
    )
    target: TargetKind = Field(
        TargetKind.ENEMY,
        description="Who the attack is aimed at.",
    )
    reach: Reach = Field(
        Reach.INDIVIDUAL,
        description="How many characters the attack reaches.",
    )
    all_effects: list[EffectParam] = Field(
        default_factory=list,
        description="The effects of the attack, applied in order.",
    )
    aggro: int = Field(
        0,
        description="Aggro generated by each launch.",
    )

    def tier(self, ultimate_level: int) -> AttackTier:
        """Returns the tier of the attack for the given ultimate level."""
        if self.level >= ultimate_level:
            return AttackTier.ULTIMATE
        return AttackTier.STANDARD

    def has_only_heal_effect(self) -> bool:
        """
        Whether the attack only heals: it is not aimed at enemies, has at
        least one positive HP effect and no negative one.
        """
        if self.target == TargetKind.ENEMY:
            return False
        hp_values = [effect.value for effect in self.all_effects if effect.stat == StatKind.HP]
        return any(value > 0 for value in hp_values) and not any(value < 0 for value in hp_values)

    def cost_amounts(self, character: "Character") -> dict[StatKind, int]:
        """Returns the amount of each resource the launch costs to a character."""
        costs: dict[StatKind, int] = {}
        for kind, percent in (
            (StatKind.MANA, self.mana_cost),
            (StatKind.VIGOR, self.vigor_cost),
            (StatKind.BERSERK, self.berserk_cost),
        ):
            if percent > 0:
                costs[kind] = trunc_div(character.stats.get(kind).max * percent, 100)
        return costs

    def can_be_launched(self, character: "Character", ultimate_level: int) -> bool:
        """
        Checks whether a character can launch the attack right now.

        Args:
            character (Character):
                The would-be launcher.
            ultimate_level (int):
                The level from which attacks are ultimates, usable once a game.

        Returns:
            bool:
                False if the launcher is dead or too low level, if a cool down
                of the attack is running, if heal attacks are blocked on the
                launcher, if an ultimate was already used or if a resource is
                short.

        """
        if character.is_dead() or character.level < self.level:
            return False
        for entry in character.effects:
            if (
                entry.atk_name == self.name
                and entry.effect.effect_type == EffectType.COOL_DOWN
                and entry.effect.counter_turn < entry.effect.nb_turns
            ):
                return False
        if character.fight_info.is_heal_atk_blocked and self.has_only_heal_effect():
            return False
        if self.tier(ultimate_level) == AttackTier.ULTIMATE:
            usage = character.stats_in_game.get(self.name)
            if usage is not None and usage.nb_use > 0:
                return False
        for kind, amount in self.cost_amounts(character).items():
            if character.stats.current(kind) < amount:
                return False
        return True

    def model_post_init(self, _: Any) -> None:
        if not self.name:
            raise ConfigurationError("An attack must have a name.")
        if self.level < 0:
            raise ConfigurationError(f"Attack '{self.name}' has a negative level.")
        for cost in (self.mana_cost, self.vigor_cost, self.berserk_cost):
            if not 0 <= cost <= 100:
                raise ConfigurationError(
                    f"Attack '{self.name}' costs must be percentages, got {cost}."
                )
