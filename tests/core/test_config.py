"""
Tests for the combat configuration.
"""

import pytest

from fightsim.core.config import CombatConfig


def test_default_values():
    """
    Test the default rules of a session.
    """
    config = CombatConfig()
    assert config.speed_threshold == 100
    assert config.coeff_crit_dmg == 2.0
    assert config.block_percent == 90
    assert config.seed is None


@pytest.mark.parametrize(
    "fields",
    [
        {"speed_threshold": 0},
        {"block_percent": 120},
        {"block_percent": -1},
        {"coeff_crit_dmg": 0.5},
        {"nb_turns_sum_aggro": 0},
    ],
)
def test_invalid_values_are_rejected(fields):
    """
    Test that out-of-range rules are rejected.
    """
    with pytest.raises(ValueError):
        CombatConfig(**fields)
