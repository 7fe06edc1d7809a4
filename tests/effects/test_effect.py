"""
Tests for the effect templates and their validation.
"""

import pytest

from fightsim.core.constants import StatKind, TargetKind
from fightsim.effects.effect import EffectParam
from fightsim.effects.effect_type import EffectType


def test_percent_flag_derives_from_type():
    """
    Test that the percent flag follows the effect type.
    """
    assert EffectParam(effect_type=EffectType.PERCENT_CHANGE, stat=StatKind.HP).is_percent
    assert not EffectParam(effect_type=EffectType.VALUE_CHANGE, stat=StatKind.HP).is_percent


def test_display_texts():
    """
    Test the display name and the summary text, with and without stat.
    """
    effect = EffectParam(effect_type=EffectType.VALUE_CHANGE, stat=StatKind.HP, value=-12)
    assert effect.display_name == "HP-ValueChange"
    assert effect.summary_text() == "ValueChange-HP: -12"
    reinit = EffectParam(effect_type=EffectType.REINIT, value=0)
    assert reinit.summary_text() == "Reinit: 0"


def test_expiry():
    """
    Test that an effect expires when its counter reaches its duration.
    """
    effect = EffectParam(effect_type=EffectType.VALUE_CHANGE, stat=StatKind.HP, nb_turns=2)
    assert not effect.is_expired
    effect.counter_turn = 2
    assert effect.is_expired


@pytest.mark.parametrize(
    "fields",
    [
        {"effect_type": EffectType.VALUE_CHANGE, "stat": StatKind.HP, "nb_turns": 0},
        {"effect_type": EffectType.VALUE_CHANGE},
        {"effect_type": EffectType.VALUE_CHANGE, "stat": StatKind.HP, "number_of_applies": -1},
        {
            "effect_type": EffectType.REPEAT_AS_MANY_AS,
            "stat": StatKind.MANA,
            "value": 0,
            "target": TargetKind.HIMSELF,
        },
        {
            "effect_type": EffectType.DECREASE_ON_TURN,
            "value": 20,
            "target": TargetKind.ENEMY,
        },
        {"effect_type": EffectType.COOL_DOWN, "nb_turns": 3, "target": TargetKind.ENEMY},
    ],
)
def test_malformed_effects_are_rejected(fields):
    """
    Test that malformed effect definitions are configuration errors.
    """
    with pytest.raises(ValueError):
        EffectParam(**fields)
