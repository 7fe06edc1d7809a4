"""
Tests for the attack resolution pipeline.
"""

import pytest

from fightsim.attacks.attack import AttackDefinition
from fightsim.attacks.resolver import AttackResolver
from fightsim.character.serialization import character_to_dict
from fightsim.core.constants import CharacterClass, CharacterKind, Reach, StatKind, TargetKind
from fightsim.core.errors import MissingStat
from fightsim.core.rng import CombatRng
from fightsim.effects.effect import EffectParam
from fightsim.effects.effect_engine import EffectEngine
from fightsim.effects.effect_type import EffectType


@pytest.fixture
def resolver(config):
    return AttackResolver(config, CombatRng(config.seed), EffectEngine(config))


@pytest.fixture
def boss(make_character, damage_attack):
    return make_character(
        "Kael",
        kind=CharacterKind.BOSS,
        attacks=[damage_attack(mana_cost=20, aggro=3)],
    )


@pytest.fixture
def hero(make_character):
    return make_character("Lyra")


@pytest.fixture
def other_hero(make_character):
    return make_character("Oren")


def _launch(resolver, actor, atk_name, heroes, bosses, turn=1):
    return resolver.launch(actor, atk_name, heroes, bosses, turn)


def test_unknown_attack_returns_empty_result(resolver, boss, hero):
    """
    Test that an unknown attack returns the empty result and mutates nothing.
    """
    before = [character_to_dict(c) for c in (hero, boss)]
    result = _launch(resolver, boss, "Meteor", [hero], [boss])
    assert result.is_empty
    assert result.outcomes == []
    assert [character_to_dict(c) for c in (hero, boss)] == before


def test_refused_attack_returns_empty_result(resolver, boss, hero):
    """
    Test that an attack that cannot be launched mutates nothing.
    """
    boss.stats.shift_current(StatKind.MANA, -90)
    before = [character_to_dict(c) for c in (hero, boss)]
    result = _launch(resolver, boss, "Strike", [hero], [boss])
    assert result.is_empty
    assert [character_to_dict(c) for c in (hero, boss)] == before


def test_damage_costs_and_bookkeeping(resolver, boss, hero):
    """
    Test the nominal pipeline: costs paid, damage dealt, counters updated.
    """
    result = _launch(resolver, boss, "Strike", [hero], [boss])
    assert result.launcher_name == "Kael"
    assert hero.stats.current(StatKind.HP) == 60
    assert boss.stats.current(StatKind.MANA) == 80
    assert boss.fight_info.actions_done_in_round == 1
    assert boss.tx_rx_at(1).aggro_tx == 3
    assert boss.tx_rx_at(1).damage_tx == 40
    usage = boss.stats_in_game.get("Strike")
    assert usage.nb_use == 1
    assert usage.all_amounts_by_target == {"Lyra": -40}


def test_full_dodge_leaves_hp_unchanged(resolver, boss, make_character):
    """
    Test that a target with Dodge 100 takes no damage and is marked dodging.
    """
    hero = make_character("Lyra", dodge=100)
    result = _launch(resolver, boss, "Strike", [hero], [boss])
    assert hero.stats.current(StatKind.HP) == 100
    assert result.dodge_of("Lyra").is_dodging
    assert result.outcomes == []


def test_full_crit_doubles_damage(resolver, make_character, damage_attack, hero):
    """
    Test that a launcher with Critical strike 100 deals at least twice the
    base damage.
    """
    boss = make_character(
        "Kael",
        kind=CharacterKind.BOSS,
        attacks=[damage_attack(value=20)],
        critical_strike=100,
    )
    result = _launch(resolver, boss, "Strike", [hero], [boss])
    assert result.is_crit
    assert 100 - hero.stats.current(StatKind.HP) >= 40
    assert boss.tx_rx_at(1).critical_nb == 1


def test_tank_current_target_blocks(resolver, boss, make_character):
    """
    Test that a tank selected as target receives 10% of the damage.
    """
    tank = make_character("Brom", char_class=CharacterClass.TANK)
    tank.fight_info.is_current_target = True
    result = _launch(resolver, boss, "Strike", [tank], [boss])
    assert tank.stats.current(StatKind.HP) == 96
    assert result.dodge_of("Brom").is_blocking
    assert result.outcomes[0].full_amount_tx == -40
    assert not tank.fight_info.is_blocking_atk


def test_tank_not_selected_does_not_block(resolver, boss, make_character, hero):
    """
    Test that a tank only blocks when it is the selected target.
    """
    tank = make_character("Brom", char_class=CharacterClass.TANK)
    hero.fight_info.is_current_target = True
    _launch(resolver, boss, "Strike", [tank, hero], [boss])
    assert tank.stats.current(StatKind.HP) == 100
    assert hero.stats.current(StatKind.HP) == 60


def test_zone_attack_hits_living_enemies_after_self_effect(
    resolver, hero, other_hero, make_character
):
    """
    Test that the launcher receives its own effects first, then the targets
    in roster order, dead characters excluded.
    """
    fallen = make_character("Ash")
    fallen.stats.shift_current(StatKind.HP, -100)
    quake = AttackDefinition(
        name="Quake",
        all_effects=[
            EffectParam(
                effect_type=EffectType.VALUE_CHANGE,
                stat=StatKind.HP,
                value=-10,
                target=TargetKind.ENEMY,
                reach=Reach.ZONE,
            ),
            EffectParam(
                effect_type=EffectType.IMPROVEMENT_BY_VALUE,
                stat=StatKind.SPEED,
                value=5,
                target=TargetKind.HIMSELF,
            ),
        ],
    )
    boss = make_character("Kael", kind=CharacterKind.BOSS, attacks=[quake])
    result = _launch(resolver, boss, "Quake", [fallen, hero, other_hero], [boss])
    assert [o.target_name for o in result.outcomes] == ["Kael", "Lyra", "Oren"]
    assert hero.stats.current(StatKind.HP) == 90
    assert other_hero.stats.current(StatKind.HP) == 90
    assert boss.stats.get(StatKind.SPEED).max == 15


def test_random_attack_hits_one_enemy(resolver, hero, other_hero, make_character):
    """
    Test that a random reach hits exactly one living enemy.
    """
    shot = AttackDefinition(
        name="Stray shot",
        all_effects=[
            EffectParam(
                effect_type=EffectType.VALUE_CHANGE,
                stat=StatKind.HP,
                value=-10,
                reach=Reach.RANDOM,
            ),
        ],
    )
    boss = make_character("Kael", kind=CharacterKind.BOSS, attacks=[shot])
    result = _launch(resolver, boss, "Stray shot", [hero, other_hero], [boss])
    assert len(result.outcomes) == 1
    assert sorted(c.stats.current(StatKind.HP) for c in (hero, other_hero)) == [90, 100]


def test_lasting_effect_is_registered_on_target(resolver, boss, hero):
    """
    Test that an effect lasting two turns is registered on its target.
    """
    poison = AttackDefinition(
        name="Poison",
        all_effects=[
            EffectParam(
                effect_type=EffectType.VALUE_CHANGE,
                stat=StatKind.HP,
                value=-5,
                nb_turns=2,
            ),
        ],
    )
    boss.add_attack(poison)
    result = _launch(resolver, boss, "Poison", [hero], [boss], turn=4)
    assert result.outcomes[0].new_effect is not None
    entry = hero.effects[0]
    assert (entry.atk_name, entry.launcher_name, entry.launch_turn) == ("Poison", "Kael", 4)
    assert entry.effect.counter_turn == 0


def test_repeat_as_many_as(resolver, hero, make_character):
    """
    Test that RepeatAsManyAs repeats the effects and consumes the stat.
    """
    volley = AttackDefinition(
        name="Volley",
        all_effects=[
            EffectParam(
                effect_type=EffectType.REPEAT_AS_MANY_AS,
                stat=StatKind.MANA,
                value=30,
                target=TargetKind.HIMSELF,
            ),
            EffectParam(effect_type=EffectType.VALUE_CHANGE, stat=StatKind.HP, value=-10),
        ],
    )
    boss = make_character("Kael", kind=CharacterKind.BOSS, attacks=[volley])
    _launch(resolver, boss, "Volley", [hero], [boss])
    assert boss.stats.current(StatKind.MANA) == 10
    assert hero.stats.current(StatKind.HP) == 70


def test_boosted_by_hots(resolver, hero, make_character):
    """
    Test that a heal is boosted for every HOT running on its target.
    """
    bloom = AttackDefinition(
        name="Bloom",
        target=TargetKind.ALLY,
        all_effects=[
            EffectParam(effect_type=EffectType.BOOSTED_BY_HOTS, value=50, target=TargetKind.ALLY),
            EffectParam(
                effect_type=EffectType.VALUE_CHANGE,
                stat=StatKind.HP,
                value=20,
                target=TargetKind.ALLY,
            ),
        ],
    )
    healer = make_character("Oren", attacks=[bloom])
    hero.stats.shift_current(StatKind.HP, -50)
    hot = EffectParam(
        effect_type=EffectType.VALUE_CHANGE,
        stat=StatKind.HP,
        value=5,
        nb_turns=3,
        target=TargetKind.ALLY,
    )
    resolver.engine.register(hero, hot, "Regrowth", "Oren", turn=1)
    hero.fight_info.is_current_target = True
    _launch(resolver, healer, "Bloom", [healer, hero], [])
    assert hero.stats.current(StatKind.HP) == 80


def test_next_heal_is_crit(resolver, hero, make_character):
    """
    Test that a pending NextHealIsCrit forces a critical heal and is consumed.
    """
    mend = AttackDefinition(
        name="Mend",
        target=TargetKind.HIMSELF,
        all_effects=[
            EffectParam(
                effect_type=EffectType.VALUE_CHANGE,
                stat=StatKind.HP,
                value=10,
                target=TargetKind.HIMSELF,
            ),
        ],
    )
    healer = make_character("Oren", attacks=[mend])
    healer.stats.shift_current(StatKind.HP, -50)
    healer.fight_info.next_heal_is_crit = True
    result = _launch(resolver, healer, "Mend", [healer], [])
    assert result.is_crit
    assert healer.stats.current(StatKind.HP) == 70
    assert not healer.fight_info.next_heal_is_crit


def test_cool_down_blocks_relaunch(resolver, hero, make_character):
    """
    Test that a cool down prevents launching the attack until it elapsed.
    """
    smash = AttackDefinition(
        name="Smash",
        all_effects=[
            EffectParam(effect_type=EffectType.VALUE_CHANGE, stat=StatKind.HP, value=-10),
            EffectParam(effect_type=EffectType.COOL_DOWN, nb_turns=2, target=TargetKind.HIMSELF),
        ],
    )
    boss = make_character("Kael", kind=CharacterKind.BOSS, attacks=[smash])
    _launch(resolver, boss, "Smash", [hero], [boss])
    assert not smash.can_be_launched(boss, 13)
    assert _launch(resolver, boss, "Smash", [hero], [boss]).is_empty
    resolver.engine.increment_counters([boss])
    resolver.engine.increment_counters([boss])
    assert smash.can_be_launched(boss, 13)


def test_missing_dodge_raises_before_any_change(resolver, boss, hero):
    """
    Test that a target without Dodge aborts the attack before the launcher
    pays or counts it.
    """
    del hero.stats.all_stats[StatKind.DODGE]
    before = [character_to_dict(c) for c in (hero, boss)]
    with pytest.raises(MissingStat):
        _launch(resolver, boss, "Strike", [hero], [boss])
    assert [character_to_dict(c) for c in (hero, boss)] == before
    assert boss.stats.current(StatKind.MANA) == 100
    assert boss.fight_info.actions_done_in_round == 0


def test_missing_effect_stat_raises_before_any_change(resolver, hero, make_character):
    """
    Test that a later effect on an absent stat leaves the earlier effects
    unapplied.
    """
    curse = AttackDefinition(
        name="Curse",
        mana_cost=10,
        all_effects=[
            EffectParam(effect_type=EffectType.VALUE_CHANGE, stat=StatKind.HP, value=-10),
            EffectParam(effect_type=EffectType.VALUE_CHANGE, stat=StatKind.SPEED, value=-5),
        ],
    )
    boss = make_character("Kael", kind=CharacterKind.BOSS, attacks=[curse])
    del hero.stats.all_stats[StatKind.SPEED]
    before = [character_to_dict(c) for c in (hero, boss)]
    with pytest.raises(MissingStat):
        _launch(resolver, boss, "Curse", [hero], [boss])
    assert [character_to_dict(c) for c in (hero, boss)] == before
