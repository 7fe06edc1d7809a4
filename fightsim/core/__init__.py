"""
Core system module for the fight engine.

This module contains the fundamental components shared by every other
package: closed enumerations, explicit configuration, typed errors, logging,
the seedable random source and small integer and console helpers.
"""

from .config import CombatConfig
from .constants import (
    REGEN_STATS,
    REINIT_DEFAULT_STATS,
    AttackTier,
    BufKind,
    CharacterClass,
    CharacterKind,
    GameStatus,
    NiceEnum,
    Reach,
    StatKind,
    TargetKind,
    is_opponent,
)
from .errors import ConfigurationError, FightError, MissingStat
from .rng import CombatRng
from .utils import (
    build_effect_name,
    cprint,
    crule,
    make_bar,
    sign,
    trunc_div,
    update_damage_by_buf,
    update_heal_by_multi,
)

__all__ = [
    # Import from config.py
    "CombatConfig",
    # Import from constants.py
    "REGEN_STATS",
    "REINIT_DEFAULT_STATS",
    "AttackTier",
    "BufKind",
    "CharacterClass",
    "CharacterKind",
    "GameStatus",
    "NiceEnum",
    "Reach",
    "StatKind",
    "TargetKind",
    "is_opponent",
    # Import from errors.py
    "ConfigurationError",
    "FightError",
    "MissingStat",
    # Import from rng.py
    "CombatRng",
    # Import from utils.py
    "build_effect_name",
    "cprint",
    "crule",
    "make_bar",
    "sign",
    "trunc_div",
    "update_damage_by_buf",
    "update_heal_by_multi",
]
