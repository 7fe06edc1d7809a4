"""
Tests for the turn scheduler.
"""

import pytest

from fightsim.combat.game_state import GameState
from fightsim.combat.roster import RosterRef, Rosters
from fightsim.combat.scheduler import TurnScheduler
from fightsim.core.config import CombatConfig
from fightsim.core.constants import CharacterKind, StatKind
from fightsim.effects.effect import EffectParam
from fightsim.effects.effect_engine import EffectEngine
from fightsim.effects.effect_type import EffectType


@pytest.fixture
def scheduler():
    return TurnScheduler(CombatConfig(speed_threshold=50))


def _names(rosters, order):
    return [rosters.get(ref).name for ref in order]


def test_build_order(scheduler, make_character):
    """
    Test the order: living heroes by speed, dead heroes, living bosses by speed.
    """
    fast = make_character("Fast", speed=30)
    slow = make_character("Slow", speed=10)
    fallen = make_character("Fallen", speed=1)
    fallen.stats.shift_current(StatKind.HP, -100)
    big = make_character("Big", kind=CharacterKind.BOSS, speed=20)
    small = make_character("Small", kind=CharacterKind.BOSS, speed=5)
    rosters = Rosters([fast, fallen, slow], [big, small])
    order = scheduler.build_order(rosters)
    assert _names(rosters, order) == ["Slow", "Fast", "Fallen", "Small", "Big"]
    assert order[0] == RosterRef(kind=CharacterKind.HERO, index=2)


def test_supplementary_action_and_speed_tax(scheduler, make_character):
    """
    Test that Speed 300 against Speed 10 grants exactly one supplementary
    action and costs 50 on every speed value.
    """
    hero = make_character("Swift", speed=300)
    boss = make_character("Kael", kind=CharacterKind.BOSS, speed=10)
    rosters = Rosters([hero], [boss])
    order = scheduler.build_order(rosters)
    granted = scheduler.add_supplementary_actions(rosters, order)
    assert _names(rosters, granted) == ["Swift"]
    assert _names(rosters, order) == ["Swift", "Kael", "Swift"]
    speed = hero.stats.get(StatKind.SPEED)
    assert (speed.current, speed.max, speed.current_raw, speed.max_raw) == (250, 250, 250, 250)
    assert boss.stats.current(StatKind.SPEED) == 10


def test_only_first_qualifying_opponent_counts(scheduler, make_character):
    """
    Test that a character gets at most one supplementary action per turn.
    """
    hero = make_character("Swift", speed=300)
    bosses = [
        make_character("Kael", kind=CharacterKind.BOSS, speed=10),
        make_character("Vex", kind=CharacterKind.BOSS, speed=20),
    ]
    rosters = Rosters([hero], bosses)
    order = scheduler.build_order(rosters)
    scheduler.add_supplementary_actions(rosters, order)
    assert _names(rosters, order).count("Swift") == 2
    assert hero.stats.current(StatKind.SPEED) == 250


def test_dead_opponent_counts_for_supplementary_action(scheduler, make_character):
    """
    Test that a dead slow opponent still grants the supplementary action.
    """
    hero = make_character("Swift", speed=300)
    fallen = make_character("Fallen", kind=CharacterKind.BOSS, speed=10)
    fallen.stats.shift_current(StatKind.HP, -100)
    boss = make_character("Kael", kind=CharacterKind.BOSS, speed=290)
    rosters = Rosters([hero], [fallen, boss])
    order = scheduler.build_order(rosters)
    granted = scheduler.add_supplementary_actions(rosters, order)
    assert _names(rosters, granted) == ["Swift"]
    assert _names(rosters, order) == ["Swift", "Kael", "Swift"]
    assert hero.stats.current(StatKind.SPEED) == 250


def test_no_supplementary_action_below_threshold(scheduler, make_character):
    """
    Test that a speed difference below the threshold grants nothing.
    """
    hero = make_character("Lyra", speed=59)
    boss = make_character("Kael", kind=CharacterKind.BOSS, speed=10)
    rosters = Rosters([hero], [boss])
    order = scheduler.build_order(rosters)
    assert scheduler.add_supplementary_actions(rosters, order) == []
    assert hero.stats.current(StatKind.SPEED) == 59


def test_advance_skips_dead_actors(scheduler, make_character):
    """
    Test that the cursor moves past dead characters and reports the end of
    the order.
    """
    fallen = make_character("Fallen", speed=1)
    fallen.stats.shift_current(StatKind.HP, -100)
    hero = make_character("Lyra", speed=10)
    boss = make_character("Kael", kind=CharacterKind.BOSS, speed=5)
    rosters = Rosters([fallen, hero], [boss])
    state = GameState(order_to_play=scheduler.build_order(rosters))
    assert scheduler.advance(rosters, state)
    assert rosters.get(state.current_ref()).name == "Lyra"
    assert scheduler.advance(rosters, state)
    assert rosters.get(state.current_ref()).name == "Kael"
    assert not scheduler.advance(rosters, state)


def test_start_new_turn(scheduler, make_character):
    """
    Test that a new turn regenerates the living, ages the running effects and
    resets the round flags, from the second turn on.
    """
    hero = make_character("Lyra", hp_regen=10)
    hero.stats.shift_current(StatKind.HP, -50)
    fallen = make_character("Fallen", hp_regen=10)
    fallen.stats.shift_current(StatKind.HP, -100)
    boss = make_character("Kael", kind=CharacterKind.BOSS)
    rosters = Rosters([hero, fallen], [boss])
    engine = EffectEngine(CombatConfig())
    engine.register(
        hero,
        EffectParam(
            effect_type=EffectType.VALUE_CHANGE,
            stat=StatKind.HP,
            value=-1,
            nb_turns=3,
        ),
        "Poison",
        "Kael",
        turn=1,
    )
    state = GameState()

    scheduler.start_new_turn(rosters, state, engine)
    assert state.current_turn_nb == 1
    assert state.current_round == 0
    assert hero.stats.current(StatKind.HP) == 50
    assert hero.effects[0].effect.counter_turn == 0

    hero.fight_info.is_first_round = False
    scheduler.start_new_turn(rosters, state, engine)
    assert state.current_turn_nb == 2
    assert hero.stats.current(StatKind.HP) == 60
    assert fallen.stats.current(StatKind.HP) == 0
    assert hero.effects[0].effect.counter_turn == 1
    assert hero.fight_info.is_first_round
