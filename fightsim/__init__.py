"""
Turn-based combat resolution engine.

Heroes fight bosses: the engine computes the play order, resolves every
attack (costs, dodge, critical strikes, tank block, effects) and tracks the
buffs, debuffs, HOTs and DOTs running on every combatant.
"""

from .attacks import AttackDefinition, AttackResolver, AttackResult, DodgeInfo
from .character import Character, Equipment, StatBonus
from .combat import CombatSession, GameState
from .core import CombatConfig, ConfigurationError, FightError, MissingStat
from .effects import EffectEngine, EffectParam, EffectType

__all__ = [
    "AttackDefinition",
    "AttackResolver",
    "AttackResult",
    "Character",
    "CombatConfig",
    "CombatSession",
    "ConfigurationError",
    "DodgeInfo",
    "EffectEngine",
    "EffectParam",
    "EffectType",
    "Equipment",
    "FightError",
    "GameState",
    "MissingStat",
    "StatBonus",
]
