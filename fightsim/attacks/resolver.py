"""
Attack resolution pipeline.

Resolves one attack of one character: validation, costs, targets, dodge,
critical strike, launcher modifiers, tank block, ordered application of the
effects and bookkeeping of the launcher.
"""

from catchery import log_warning
from pydantic import BaseModel, Field

from fightsim.character.main import Character
from fightsim.core.config import CombatConfig
from fightsim.core.constants import CharacterClass, Reach, StatKind, TargetKind
from fightsim.core.logging import log_debug
from fightsim.core.rng import CombatRng
from fightsim.effects.effect import EffectOutcome, EffectParam
from fightsim.effects.effect_engine import EffectEngine, is_hp_amount
from fightsim.effects.effect_type import EffectType, is_launcher_modifier

from .attack import AttackDefinition


class DodgeInfo(BaseModel):
    """Whether an enemy reached by an attack dodged or blocked it."""

    name: str
    is_dodging: bool = False
    is_blocking: bool = False


class AttackResult(BaseModel):
    """
    Everything one attack produced.

    A result without launcher name is the empty result of an attack that was
    not launched.
    """

    launcher_name: str = ""
    atk_name: str = ""
    outcomes: list[EffectOutcome] = Field(default_factory=list)
    is_crit: bool = False
    dodging: list[DodgeInfo] = Field(default_factory=list)
    is_auto_atk: bool = False
    logs_new_round: list[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Whether no attack was launched."""
        return not self.launcher_name

    def dodge_of(self, name: str) -> DodgeInfo | None:
        """Returns the dodge information of a character, None if it was not reached."""
        return next((info for info in self.dodging if info.name == name), None)


class AttackResolver:
    """
    Resolves attacks against the two rosters of a session.

    Attributes:
        config (CombatConfig):
            The rules of the session.
        rng (CombatRng):
            The random source for dodge, critical strikes and random targets.
        engine (EffectEngine):
            The effect engine applying the effects.

    """

    def __init__(self, config: CombatConfig, rng: CombatRng, engine: EffectEngine) -> None:
        self.config = config
        self.rng = rng
        self.engine = engine

    def launch(
        self,
        actor: Character,
        atk_name: str,
        heroes: list[Character],
        bosses: list[Character],
        turn: int,
    ) -> AttackResult:
        """
        Runs the whole pipeline of one attack.

        Args:
            actor (Character):
                The launcher.
            atk_name (str):
                The name of an attack known by the launcher.
            heroes (list[Character]):
                The hero roster, in roster order.
            bosses (list[Character]):
                The boss roster, in roster order.
            turn (int):
                The current turn.

        Returns:
            AttackResult:
                The outcomes, or an empty result if the attack is unknown or
                cannot be launched.

        Raises:
            MissingStat:
                If a stat used by the attack is absent from a character.

        """
        attack = actor.attacks.get(atk_name)
        if attack is None:
            log_debug(f"{actor.name} does not know {atk_name}")
            return AttackResult()
        if not attack.can_be_launched(actor, self.config.ultimate_level):
            log_warning(
                f"{actor.name} cannot launch {atk_name}",
                {"launcher": actor.name, "attack": atk_name, "turn": turn},
            )
            return AttackResult()

        result = AttackResult(launcher_name=actor.name, atk_name=attack.name)
        ordered = [actor] + [c for c in heroes + bosses if c is not actor]
        targets, random_picks = self._select_targets(actor, attack, ordered)
        self._check_stats(actor, attack, ordered, targets)

        actor.fight_info.actions_done_in_round += 1
        for kind, amount in attack.cost_amounts(actor).items():
            actor.stats.shift_current(kind, -amount)
        for pick in random_picks:
            pick.fight_info.is_random_target = True

        dodging = self._roll_dodge(ordered, targets)
        result.dodging = list(dodging.values())
        result.is_crit = self._roll_crit(actor, attack, turn)
        number_of_applies = self._resolve_launcher_modifiers(actor, attack)
        boost_value = sum(
            effect.value
            for effect in attack.all_effects
            if effect.effect_type == EffectType.BOOSTED_BY_HOTS
        )

        for target in ordered:
            effects = targets.get(target.name, [])
            if not effects:
                continue
            info = dodging.get(target.name)
            target.fight_info.is_blocking_atk = info is not None and info.is_blocking
            boost_percent = boost_value * self.engine.count_hots(target)
            for template in effects:
                if template.target == TargetKind.ENEMY and info is not None and info.is_dodging:
                    continue
                outcome = self._apply(
                    actor,
                    target,
                    attack,
                    template,
                    result.is_crit,
                    number_of_applies,
                    boost_percent,
                    turn,
                )
                result.outcomes.append(outcome)
            target.fight_info.is_blocking_atk = False
            target.fight_info.is_random_target = False

        self.engine.prune_expired(actor)
        self._record(actor, attack, result, turn)
        return result

    # === Targets ===

    def _select_targets(
        self,
        actor: Character,
        attack: AttackDefinition,
        ordered: list[Character],
    ) -> tuple[dict[str, list[EffectParam]], list[Character]]:
        """
        Maps each reached character to the effects it receives, in attack order.
        Also returns the characters picked at random.
        """
        random_picks: dict[TargetKind, Character | None] = {}
        targets: dict[str, list[EffectParam]] = {}
        for template in attack.all_effects:
            if is_launcher_modifier(template.effect_type):
                continue
            if template.effect_type == EffectType.BOOSTED_BY_HOTS:
                continue
            for target in self._reached_by(actor, template, ordered, random_picks):
                targets.setdefault(target.name, []).append(template)
        picks = [pick for pick in random_picks.values() if pick is not None]
        return targets, picks

    def _reached_by(
        self,
        actor: Character,
        template: EffectParam,
        ordered: list[Character],
        random_picks: dict[TargetKind, Character | None],
    ) -> list[Character]:
        if template.target == TargetKind.HIMSELF:
            return [actor]
        if template.target == TargetKind.ENEMY:
            faction = [c for c in ordered if c.kind != actor.kind and c.is_alive()]
        else:
            faction = [c for c in ordered if c.kind == actor.kind and c.is_alive()]
        if not faction:
            return []

        if template.reach == Reach.ZONE:
            return faction
        if template.reach == Reach.RANDOM:
            if template.target not in random_picks:
                random_picks[template.target] = self.rng.choice(faction)
            pick = random_picks[template.target]
            return [pick] if pick is not None else []

        selected = [c for c in faction if c.fight_info.is_current_target]
        if selected:
            return selected[:1]
        if template.target == TargetKind.ALLY:
            return [actor]
        log_debug(f"No target selected for {actor.name}, falling back to {faction[0].name}")
        return faction[:1]

    def _check_stats(
        self,
        actor: Character,
        attack: AttackDefinition,
        ordered: list[Character],
        targets: dict[str, list[EffectParam]],
    ) -> None:
        """
        Reads every stat the attack needs, so that a missing one raises
        MissingStat before anything is changed.
        """
        actor.stats.get(StatKind.CRITICAL_STRIKE)
        for effect in attack.all_effects:
            if is_launcher_modifier(effect.effect_type) and effect.stat is not None:
                actor.stats.get(effect.stat)
        for target in ordered:
            for template in targets.get(target.name, []):
                if template.target == TargetKind.ENEMY:
                    target.stats.get(StatKind.DODGE)
                if template.effect_type == EffectType.INTO_DAMAGE:
                    target.stats.get(StatKind.HP)
                    if template.stat is not None:
                        actor.stats.get(template.stat)
                elif template.stat is not None:
                    target.stats.get(template.stat)

    # === Rolls ===

    def _roll_dodge(
        self,
        ordered: list[Character],
        targets: dict[str, list[EffectParam]],
    ) -> dict[str, DodgeInfo]:
        """Rolls the dodge of every enemy reached by an enemy effect."""
        dodging: dict[str, DodgeInfo] = {}
        for name, effects in targets.items():
            if not any(effect.target == TargetKind.ENEMY for effect in effects):
                continue
            target = next(c for c in ordered if c.name == name)
            is_dodging = self.rng.check_percent(target.stats.current(StatKind.DODGE))
            is_blocking = (
                not is_dodging
                and target.char_class == CharacterClass.TANK
                and target.fight_info.is_current_target
            )
            dodging[name] = DodgeInfo(name=name, is_dodging=is_dodging, is_blocking=is_blocking)
        return dodging

    def _roll_crit(self, actor: Character, attack: AttackDefinition, turn: int) -> bool:
        is_crit = self.rng.check_percent(actor.stats.current(StatKind.CRITICAL_STRIKE))
        if attack.has_only_heal_effect() and actor.fight_info.next_heal_is_crit:
            actor.fight_info.next_heal_is_crit = False
            is_crit = True
        if is_crit:
            actor.tx_rx_at(turn).critical_nb += 1
        return is_crit

    def _resolve_launcher_modifiers(self, actor: Character, attack: AttackDefinition) -> int:
        """Returns how many times the other effects of the attack apply."""
        number_of_applies = 1
        for effect in attack.all_effects:
            if effect.effect_type == EffectType.REPEAT_AS_MANY_AS:
                assert effect.stat is not None
                repeats = actor.stats.current(effect.stat) // effect.value
                actor.stats.shift_current(effect.stat, -repeats * effect.value)
                number_of_applies *= repeats
            elif effect.effect_type == EffectType.DECREASE_ON_TURN:
                repeats = 0
                chance = 100
                while self.rng.check_percent(chance):
                    repeats += 1
                    chance -= effect.value
                number_of_applies *= repeats
        return number_of_applies

    # === Application ===

    def _apply(
        self,
        actor: Character,
        target: Character,
        attack: AttackDefinition,
        template: EffectParam,
        is_crit: bool,
        number_of_applies: int,
        boost_percent: int,
        turn: int,
    ) -> EffectOutcome:
        instance = self.engine.make_instance(template, is_crit, number_of_applies)
        outcome = self.engine.apply_effect(
            actor,
            target,
            instance,
            attack.name,
            turn,
            boost_percent if is_hp_amount(instance) else 0,
        )
        if instance.nb_turns > 1:
            self.engine.register(target, instance, attack.name, actor.name, turn)
            outcome.new_effect = instance
        return outcome

    def _record(
        self,
        actor: Character,
        attack: AttackDefinition,
        result: AttackResult,
        turn: int,
    ) -> None:
        actor.stats_in_game.record_launch(attack.name)
        for outcome in result.outcomes:
            if outcome.is_hp_amount:
                actor.stats_in_game.record_amount(
                    attack.name, outcome.target_name, outcome.real_amount_tx
                )
        actor.tx_rx_at(turn).aggro_tx += attack.aggro
