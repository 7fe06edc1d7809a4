"""
Effect engine module for the fight engine.

Classifies effects, applies them onto their targets and manages the registry
of running effects of every character: turn ticks, elapsed-turn counters,
pruning of expired effects and reversal of their contributions.
"""

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from fightsim.core.config import CombatConfig
from fightsim.core.constants import REINIT_DEFAULT_STATS, BufKind, StatKind, TargetKind
from fightsim.core.logging import log_debug
from fightsim.core.utils import trunc_div, update_damage_by_buf, update_heal_by_multi

from .effect import EffectOutcome, EffectParam, GameAtkEffects
from .effect_type import (
    EffectType,
    is_active_on_launch_only,
    is_heal,
    is_hot_or_dot,
)

if TYPE_CHECKING:
    from fightsim.character.fight_info import HotsBufs
    from fightsim.character.main import Character


# Effects adding to a buffer of their target, reversed on expiry.
BUFFER_EFFECTS: dict[EffectType, BufKind] = {
    EffectType.CHANGE_MAX_DAMAGE_BY_PERCENT: BufKind.DAMAGE_TX,
    EffectType.CHANGE_DAMAGE_RX_BY_PERCENT: BufKind.DAMAGE_RX,
    EffectType.CHANGE_HEAL_RX_BY_PERCENT: BufKind.HEAL_RX,
    EffectType.CHANGE_HEAL_TX_BY_PERCENT: BufKind.HEAL_TX,
}

# Effects changing the current value of a stat every turn they run.
STAT_CHANGE_EFFECTS: tuple[EffectType, ...] = (
    EffectType.VALUE_CHANGE,
    EffectType.PERCENT_CHANGE,
    EffectType.DECREASE_BY_TURN,
)

# Effects whose magnitude is multiplied by the launcher modifiers.
REPEATABLE_EFFECTS: tuple[EffectType, ...] = STAT_CHANGE_EFFECTS + (
    EffectType.INTO_DAMAGE,
    EffectType.IMPROVEMENT_BY_VALUE,
    EffectType.IMPROVE_BY_PERCENT_CHANGE,
)


def is_hot(effect_type: EffectType, stat: StatKind | None, value: int) -> bool:
    """Whether an effect is a heal over time: a HOT/DOT type healing HP."""
    return is_hot_or_dot(effect_type) and stat == StatKind.HP and value > 0


def is_hp_amount(effect: EffectParam) -> bool:
    """Whether the effect moves HP, as a heal or as damage."""
    if effect.effect_type == EffectType.INTO_DAMAGE:
        return True
    return effect.effect_type in STAT_CHANGE_EFFECTS and effect.stat == StatKind.HP


def is_processed(effect: EffectParam, from_launch: bool, reload: bool) -> bool:
    """
    Tells whether an effect is considered already resolved and must not be
    applied again.

    Args:
        effect (EffectParam):
            The effect to check.
        from_launch (bool):
            Whether the effect is applied by the launch of its attack.
        reload (bool):
            Whether the effect is replayed while reloading a saved game.

    Returns:
        bool:
            True if the application must be skipped.

    """
    if not from_launch and is_active_on_launch_only(effect.effect_type):
        return True
    if from_launch or reload:
        return False
    if effect.stat in (StatKind.DODGE, StatKind.CRITICAL_STRIKE):
        return True
    return effect.stat != StatKind.HP and effect.effect_type == EffectType.VALUE_CHANGE


def is_bad(effect: EffectParam) -> bool:
    """Whether the effect is a DOT or a debuff."""
    return effect.value < 0


def summarize_by_category(entries: Iterable[GameAtkEffects]) -> "HotsBufs":
    """
    Buckets the running effects lasting at least two turns into HOTs, DOTs,
    buffs and debuffs.
    """
    from fightsim.character.fight_info import HotsBufs

    summary = HotsBufs()
    for entry in entries:
        effect = entry.effect
        if effect.nb_turns < 2:
            continue
        text = effect.summary_text()
        if is_hot(effect.effect_type, effect.stat, effect.value):
            summary.hot_nb += 1
            summary.hot_txt.append(text)
        elif effect.stat == StatKind.HP:
            summary.dot_nb += 1
            summary.dot_txt.append(text)
        elif effect.value > 0:
            summary.buf_nb += 1
            summary.buf_txt.append(text)
        else:
            summary.debuf_nb += 1
            summary.debuf_txt.append(text)
    return summary


class EffectEngine:
    """
    Applies effects on characters and keeps their registries up to date.

    Attributes:
        config (CombatConfig):
            The rules of the session, for the critical and block coefficients.

    """

    def __init__(self, config: CombatConfig) -> None:
        self.config = config

    # === Classification ===

    @staticmethod
    def is_heal(stat: StatKind | None, target: TargetKind) -> bool:
        """Whether an effect on that stat aimed at that target heals."""
        return is_heal(stat, target)

    @staticmethod
    def is_hot(effect: EffectParam) -> bool:
        """Whether the effect is a heal over time."""
        return is_hot(effect.effect_type, effect.stat, effect.value)

    @staticmethod
    def is_processed(effect: EffectParam, from_launch: bool, reload: bool) -> bool:
        """See ``is_processed``."""
        return is_processed(effect, from_launch, reload)

    @staticmethod
    def summarize_by_category(entries: Iterable[GameAtkEffects]) -> "HotsBufs":
        """See ``summarize_by_category``."""
        return summarize_by_category(entries)

    # === Launch-time preparation ===

    def make_instance(
        self,
        template: EffectParam,
        is_crit: bool,
        number_of_applies: int,
    ) -> EffectParam:
        """
        Builds the instance of an effect template for one target.

        The magnitude of the instance already includes the repetitions and, for
        crit-boosted types, the critical strike.

        Args:
            template (EffectParam):
                The effect as written in the attack definition.
            is_crit (bool):
                Whether the attack is a critical strike.
            number_of_applies (int):
                How many times the launcher modifiers repeat the effect.

        Returns:
            EffectParam:
                A fresh instance, with its counters reset.

        """
        instance = template.model_copy(deep=True)
        instance.counter_turn = 0
        instance.applied_delta = 0
        instance.number_of_applies = number_of_applies
        if instance.effect_type in REPEATABLE_EFFECTS:
            instance.value = template.value * number_of_applies
        if is_crit and instance.can_be_crit_boosted:
            if is_hp_amount(instance):
                coeff = self.config.coeff_crit_dmg
            else:
                coeff = self.config.coeff_crit_stats
            instance.value = int(instance.value * coeff)
            instance.is_crit = True
        return instance

    # === Application ===

    def compute_hp_amount(
        self,
        launcher: "Character",
        target: "Character",
        effect: EffectParam,
        boost_percent: int = 0,
    ) -> int:
        """
        Computes the signed HP amount of an effect, positive for a heal.

        The base amount is the value (or the percentage of the target max HP)
        boosted by boost_percent, then updated by the tx buffers of the launcher
        and the rx buffers of the target. Heals are finally multiplied by the
        HealMulti buffer of the target.
        """
        if effect.effect_type == EffectType.INTO_DAMAGE:
            assert effect.stat is not None
            base = -abs(trunc_div(launcher.stats.current(effect.stat) * effect.value, 100))
        elif effect.is_percent:
            base = trunc_div(target.stats.get(StatKind.HP).max * effect.value, 100)
        else:
            base = effect.value
        if boost_percent:
            base += trunc_div(base * boost_percent, 100)

        if base > 0:
            tx = launcher.buffer(BufKind.HEAL_TX)
            rx = target.buffer(BufKind.HEAL_RX)
            amount = update_damage_by_buf(tx.value, tx.is_percent, base)
            amount = update_damage_by_buf(rx.value, rx.is_percent, amount)
            multi = target.buffer(BufKind.HEAL_MULTI).value
            if multi > 0:
                amount = update_heal_by_multi(amount, multi)
            return amount

        tx = launcher.buffer(BufKind.DAMAGE_TX)
        rx = target.buffer(BufKind.DAMAGE_RX)
        magnitude = update_damage_by_buf(tx.value, tx.is_percent, -base)
        magnitude = update_damage_by_buf(rx.value, rx.is_percent, magnitude)
        return -max(0, magnitude)

    def apply_effect(
        self,
        launcher: "Character",
        target: "Character",
        effect: EffectParam,
        atk_name: str,
        turn: int,
        boost_percent: int = 0,
    ) -> EffectOutcome:
        """
        Applies one effect instance on a target.

        Args:
            launcher (Character):
                The character whose attack carries the effect.
            target (Character):
                The character receiving the effect.
            effect (EffectParam):
                The effect instance, its applied_delta is updated in place.
            atk_name (str):
                The name of the attack, for the outcome.
            turn (int):
                The current turn, for the tx/rx counters.
            boost_percent (int):
                Extra percentage on HP amounts (BoostedByHots).

        Returns:
            EffectOutcome:
                The display text and the amounts of the application.

        """
        outcome = EffectOutcome(
            atk_name=atk_name,
            launcher_name=launcher.name,
            target_name=target.name,
            is_crit=effect.is_crit,
        )
        effect_type = effect.effect_type

        if is_hp_amount(effect):
            full = self.compute_hp_amount(launcher, target, effect, boost_percent)
            real = full
            if full < 0 and target.fight_info.is_blocking_atk:
                real = trunc_div(full * (100 - self.config.block_percent), 100)
            applied = target.stats.shift_current(StatKind.HP, real)
            self._count_hp(launcher, target, applied, turn)
            outcome.is_hp_amount = True
            outcome.full_amount_tx = full
            outcome.real_amount_tx = applied
            verb = "heals" if applied >= 0 else "hits"
            outcome.text = f"{launcher.name} {verb} {target.name} for {abs(applied)} HP"
            if real != full:
                outcome.text += f" ({abs(full) - abs(real)} blocked)"

        elif effect_type in STAT_CHANGE_EFFECTS:
            assert effect.stat is not None
            applied = target.stats.apply_delta(effect.stat, effect.value, effect.is_percent)
            effect.applied_delta += applied
            outcome.full_amount_tx = effect.value
            outcome.real_amount_tx = applied
            outcome.text = f"{effect.display_name} on {target.name}: {applied:+d}"

        elif effect_type in (EffectType.IMPROVEMENT_BY_VALUE, EffectType.IMPROVE_BY_PERCENT_CHANGE):
            assert effect.stat is not None
            target.stats.add_buf(effect.stat, effect.value, effect.is_percent)
            effect.applied_delta += effect.value
            outcome.full_amount_tx = outcome.real_amount_tx = effect.value
            unit = "%" if effect.is_percent else ""
            outcome.text = f"{target.name} {effect.stat} max {effect.value:+d}{unit}"

        elif effect_type in BUFFER_EFFECTS:
            kind = BUFFER_EFFECTS[effect_type]
            target.buffer(kind).add(effect.value)
            effect.applied_delta += effect.value
            outcome.full_amount_tx = outcome.real_amount_tx = effect.value
            outcome.text = f"{target.name} {kind} {effect.value:+d}%"

        elif effect_type == EffectType.BUF_MULTI:
            buf = target.buffer(BufKind.HEAL_MULTI)
            buf.value = effect.value
            buf.is_percent = False
            outcome.text = f"{target.name} heals are multiplied by {effect.value}"

        elif effect_type == EffectType.BLOCK_HEAL_ATK:
            target.fight_info.is_heal_atk_blocked = True
            outcome.text = f"{target.name} cannot launch heal attacks"

        elif effect_type == EffectType.NEXT_HEAL_IS_CRIT:
            target.fight_info.next_heal_is_crit = True
            outcome.text = f"Next heal of {target.name} is a critical strike"

        elif effect_type == EffectType.BUF_VALUE_AS_MUCH_AS_HEAL:
            assert effect.stat is not None
            amount = trunc_div(target.tx_rx_at(turn).heal_rx * effect.value, 100)
            target.stats.add_buf(effect.stat, amount, False)
            effect.applied_delta += amount
            outcome.full_amount_tx = outcome.real_amount_tx = amount
            outcome.text = f"{target.name} {effect.stat} max {amount:+d}"

        elif effect_type == EffectType.REINIT:
            kinds = (effect.stat,) if effect.stat else REINIT_DEFAULT_STATS
            for kind in kinds:
                if kind in target.stats.all_stats:
                    target.stats.reset_current(kind)
            outcome.text = f"{target.name} {', '.join(str(k) for k in kinds)} restored"

        elif effect_type == EffectType.DELETE_BAD:
            removed = self.delete_bad_effects(target)
            outcome.real_amount_tx = len(removed)
            outcome.text = f"{len(removed)} bad effect(s) removed from {target.name}"

        elif effect_type == EffectType.IMPROVE_HOTS:
            improved = self.improve_hots(target, effect.value)
            outcome.real_amount_tx = improved
            outcome.text = f"{improved} HOT(s) of {target.name} improved by {effect.value}%"

        elif effect_type == EffectType.COOL_DOWN:
            outcome.text = f"{atk_name} cools down for {effect.nb_turns} turn(s)"

        else:
            # Launcher modifiers and BoostedByHots act through the resolver.
            outcome.text = effect.summary_text()

        log_debug(
            f"Applied {effect.display_name} from {launcher.name} on {target.name}",
            {"value": effect.value, "real": outcome.real_amount_tx, "crit": effect.is_crit},
        )
        return outcome

    @staticmethod
    def _count_hp(launcher: "Character", target: "Character", applied: int, turn: int) -> None:
        launcher_counters = launcher.tx_rx_at(turn)
        target_counters = target.tx_rx_at(turn)
        if applied >= 0:
            launcher_counters.heal_tx += applied
            target_counters.heal_rx += applied
        else:
            launcher_counters.damage_tx += -applied
            target_counters.damage_rx += -applied

    # === Reversal ===

    def remove_contribution(self, owner: "Character", entry: GameAtkEffects) -> None:
        """Reverses what a running effect added to its owner."""
        effect = entry.effect
        effect_type = effect.effect_type
        if effect_type in STAT_CHANGE_EFFECTS and effect.stat != StatKind.HP:
            assert effect.stat is not None
            owner.stats.shift_current(effect.stat, -effect.applied_delta)
        elif effect_type in (EffectType.IMPROVEMENT_BY_VALUE, EffectType.IMPROVE_BY_PERCENT_CHANGE):
            assert effect.stat is not None
            owner.stats.add_buf(effect.stat, -effect.applied_delta, effect.is_percent)
        elif effect_type == EffectType.BUF_VALUE_AS_MUCH_AS_HEAL:
            assert effect.stat is not None
            owner.stats.add_buf(effect.stat, -effect.applied_delta, False)
        elif effect_type in BUFFER_EFFECTS:
            owner.buffer(BUFFER_EFFECTS[effect_type]).add(-effect.applied_delta)
        elif effect_type == EffectType.BUF_MULTI:
            owner.buffer(BufKind.HEAL_MULTI).value = 0
        elif effect_type == EffectType.BLOCK_HEAL_ATK:
            owner.fight_info.is_heal_atk_blocked = any(
                other is not entry and other.effect.effect_type == EffectType.BLOCK_HEAL_ATK
                for other in owner.effects
            )
        effect.applied_delta = 0

    # === Registry management ===

    def register(
        self,
        target: "Character",
        effect: EffectParam,
        atk_name: str,
        launcher_name: str,
        turn: int,
    ) -> GameAtkEffects:
        """Adds a running effect to the registry of its target."""
        entry = GameAtkEffects(
            effect=effect,
            atk_name=atk_name,
            launcher_name=launcher_name,
            target_name=target.name,
            launch_turn=turn,
        )
        target.effects.append(entry)
        return entry

    def tick_effects(
        self,
        owner: "Character",
        turn: int,
        find_character: Callable[[str], "Character | None"],
    ) -> list[str]:
        """
        Applies again the running effects of a character at its first round of
        a turn.

        Args:
            owner (Character):
                The character starting its round.
            turn (int):
                The current turn.
            find_character (Callable[[str], Character | None]):
                Lookup of the launchers by name.

        Returns:
            list[str]:
                The display text of every application.

        """
        logs: list[str] = []
        for entry in list(owner.effects):
            effect = entry.effect
            if not 1 <= effect.counter_turn <= effect.nb_turns:
                continue
            if is_processed(effect, from_launch=False, reload=False):
                continue
            launcher = find_character(entry.launcher_name) or owner
            outcome = self.apply_effect(launcher, owner, effect, entry.atk_name, turn)
            logs.append(f"{entry.atk_name}: {outcome.text}")
            if effect.effect_type == EffectType.DECREASE_BY_TURN:
                effect.value -= trunc_div(effect.value * effect.sub_value, 100)
        return logs

    def increment_counters(self, characters: Iterable["Character"]) -> None:
        """Increments the elapsed-turn counter of every running effect."""
        for character in characters:
            for entry in character.effects:
                entry.effect.counter_turn += 1

    def prune_expired(self, owner: "Character") -> list[GameAtkEffects]:
        """
        Removes the running effects of a character whose elapsed-turn counter
        reached their duration, reversing their contributions.
        """
        expired = [entry for entry in owner.effects if entry.effect.is_expired]
        if not expired:
            return []
        owner.effects = [entry for entry in owner.effects if not entry.effect.is_expired]
        for entry in expired:
            self.remove_contribution(owner, entry)
            log_debug(
                f"Effect {entry.effect.display_name} of {entry.atk_name} expired on {owner.name}",
                {"nb_turns": entry.effect.nb_turns},
            )
        return expired

    def delete_bad_effects(self, target: "Character") -> list[GameAtkEffects]:
        """Removes every DOT and debuff running on a character."""
        bad = [entry for entry in target.effects if is_bad(entry.effect)]
        target.effects = [entry for entry in target.effects if not is_bad(entry.effect)]
        for entry in bad:
            self.remove_contribution(target, entry)
        return bad

    def improve_hots(self, target: "Character", percent: int) -> int:
        """Boosts every HOT running on a character by percent, returns their number."""
        improved = 0
        for entry in target.effects:
            if self.is_hot(entry.effect):
                entry.effect.value += trunc_div(entry.effect.value * percent, 100)
                improved += 1
        return improved

    def count_hots(self, target: "Character") -> int:
        """Returns the number of HOTs running on a character."""
        return sum(1 for entry in target.effects if self.is_hot(entry.effect))
