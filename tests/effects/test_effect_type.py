"""
Tests for the effect type capability table.
"""

import pytest

from fightsim.core.constants import StatKind, TargetKind
from fightsim.effects.effect_type import (
    EFFECT_CAPABILITIES,
    EffectType,
    is_active_on_launch_only,
    is_boosted_by_crit,
    is_heal,
    is_hot_or_dot,
    is_launcher_modifier,
)

HOT_OR_DOT = {EffectType.VALUE_CHANGE, EffectType.PERCENT_CHANGE, EffectType.DECREASE_BY_TURN}


def test_every_type_has_capabilities():
    """
    Test that the capability table covers the whole closed set.
    """
    assert set(EFFECT_CAPABILITIES) == set(EffectType)


@pytest.mark.parametrize("effect_type", list(EffectType))
def test_hot_or_dot_and_launch_only_partition(effect_type):
    """
    Test that every type is either a HOT/DOT type or active on launch only.
    """
    assert is_hot_or_dot(effect_type) == (effect_type in HOT_OR_DOT)
    assert is_active_on_launch_only(effect_type) != is_hot_or_dot(effect_type)


def test_crit_boosted_types():
    """
    Test the set of types amplified by a critical strike.
    """
    boosted = {t for t in EffectType if is_boosted_by_crit(t)}
    assert boosted == HOT_OR_DOT | {
        EffectType.INTO_DAMAGE,
        EffectType.IMPROVEMENT_BY_VALUE,
        EffectType.IMPROVE_BY_PERCENT_CHANGE,
        EffectType.CHANGE_MAX_DAMAGE_BY_PERCENT,
    }


def test_launcher_modifiers():
    """
    Test the types that change the other effects of their attack.
    """
    assert {t for t in EffectType if is_launcher_modifier(t)} == {
        EffectType.REPEAT_AS_MANY_AS,
        EffectType.DECREASE_ON_TURN,
    }


def test_is_heal():
    """
    Test that only HP effects not aimed at enemies heal.
    """
    assert is_heal(StatKind.HP, TargetKind.ALLY)
    assert is_heal(StatKind.HP, TargetKind.HIMSELF)
    assert not is_heal(StatKind.HP, TargetKind.ENEMY)
    assert not is_heal(StatKind.MANA, TargetKind.ALLY)
    assert not is_heal(None, TargetKind.ALLY)


def test_effect_type_from_name():
    """
    Test that effect types convert from their data names.
    """
    assert EffectType.from_name("BufValueAsMuchAsHeal") == EffectType.BUF_VALUE_AS_MUCH_AS_HEAL
