"""
Effects module for the fight engine.

This module contains the closed set of effect types with their capability
table, the effect templates and running instances, and the engine applying
them on characters.
"""

from .effect import EffectOutcome, EffectParam, GameAtkEffects
from .effect_engine import (
    EffectEngine,
    is_hot,
    is_hp_amount,
    is_processed,
    summarize_by_category,
)
from .effect_type import (
    EFFECT_CAPABILITIES,
    EffectCapability,
    EffectType,
    is_active_on_launch_only,
    is_boosted_by_crit,
    is_heal,
    is_hot_or_dot,
    is_launcher_modifier,
    is_percent_type,
    needs_stat,
)

__all__ = [
    # Import from effect.py
    "EffectOutcome",
    "EffectParam",
    "GameAtkEffects",
    # Import from effect_engine.py
    "EffectEngine",
    "is_hot",
    "is_hp_amount",
    "is_processed",
    "summarize_by_category",
    # Import from effect_type.py
    "EFFECT_CAPABILITIES",
    "EffectCapability",
    "EffectType",
    "is_active_on_launch_only",
    "is_boosted_by_crit",
    "is_heal",
    "is_hot_or_dot",
    "is_launcher_modifier",
    "is_percent_type",
    "needs_stat",
]
