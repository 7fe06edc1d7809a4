"""
Turn scheduler of a combat session.

Builds the play order of every turn, grants the supplementary actions earned
by speed and moves the round cursor over the order, skipping dead actors.
"""

from fightsim.core.config import CombatConfig
from fightsim.core.constants import CharacterKind, StatKind
from fightsim.core.logging import log_debug
from fightsim.effects.effect_engine import EffectEngine

from .game_state import GameState
from .roster import RosterRef, Rosters


class TurnScheduler:
    """
    Computes who plays and when.

    Attributes:
        config (CombatConfig):
            The rules of the session, for the speed threshold.

    """

    def __init__(self, config: CombatConfig) -> None:
        self.config = config

    def build_order(self, rosters: Rosters) -> list[RosterRef]:
        """
        Builds the base play order of a turn: living heroes by ascending
        Speed, then dead heroes, then living bosses by ascending Speed.
        """
        living_heroes = sorted(
            rosters.living(CharacterKind.HERO),
            key=lambda c: c.stats.current(StatKind.SPEED),
        )
        dead_heroes = [c for c in rosters.heroes if c.is_dead()]
        living_bosses = sorted(
            rosters.living(CharacterKind.BOSS),
            key=lambda c: c.stats.current(StatKind.SPEED),
        )
        return [rosters.ref_of(c) for c in living_heroes + dead_heroes + living_bosses]

    def add_supplementary_actions(
        self,
        rosters: Rosters,
        order: list[RosterRef],
    ) -> list[RosterRef]:
        """
        Appends one action slot for every living character at least
        speed_threshold faster than one of its opponents, dead or alive.

        Only the first such opponent counts, and the slot costs the character
        speed_threshold of Speed on all its speed values.

        Returns:
            list[RosterRef]:
                The references granted a supplementary action.

        """
        threshold = self.config.speed_threshold
        granted: list[RosterRef] = []
        for kind in (CharacterKind.HERO, CharacterKind.BOSS):
            for member in rosters.living(kind):
                speed = member.stats.current(StatKind.SPEED)
                for opponent in rosters.roster(kind.opponent):
                    if speed - opponent.stats.current(StatKind.SPEED) >= threshold:
                        ref = rosters.ref_of(member)
                        order.append(ref)
                        granted.append(ref)
                        member.stats.reduce_speed(threshold)
                        log_debug(
                            f"{member.name} gets a supplementary action",
                            {"speed": speed, "opponent": opponent.name},
                        )
                        break
        return granted

    def start_new_turn(self, rosters: Rosters, state: GameState, engine: EffectEngine) -> None:
        """
        Starts a new turn: regeneration and elapsed-turn counters (from the
        second turn on), round flags reset, then a fresh play order.
        """
        state.current_turn_nb += 1
        if state.current_turn_nb > 1:
            for character in rosters:
                if character.is_alive():
                    character.stats.apply_regen()
            engine.increment_counters(rosters)
        for character in rosters:
            character.reset_round_flags()
        order = self.build_order(rosters)
        self.add_supplementary_actions(rosters, order)
        state.order_to_play = order
        state.current_round = 0
        log_debug(f"Turn {state.current_turn_nb} starts", {"nb_slots": len(order)})

    def advance(self, rosters: Rosters, state: GameState) -> bool:
        """
        Moves the round cursor to the next living actor of the order.

        Returns:
            bool:
                False if the order is exhausted and a new turn must start.

        """
        state.current_round += 1
        while state.is_round_in_order:
            ref = state.current_ref()
            assert ref is not None
            if rosters.get(ref).is_alive():
                return True
            state.current_round += 1
        return False
