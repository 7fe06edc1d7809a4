"""
Character system module for the fight engine.

This module handles the combatants: their layered attributes, equipment,
round-scoped flags, buffers and counters, attack usage statistics and
serialization.
"""

from .attribute import Attribute
from .equipment import Equipment, StatBonus
from .fight_info import Buffers, FightInfo, HotsBufs, TxRxCounters
from .main import Character
from .serialization import character_from_dict, character_to_dict
from .stat_model import StatModel, signed_delta
from .stats_in_game import AttackUsage, StatsInGame

__all__ = [
    # Import from attribute.py
    "Attribute",
    # Import from equipment.py
    "Equipment",
    "StatBonus",
    # Import from fight_info.py
    "Buffers",
    "FightInfo",
    "HotsBufs",
    "TxRxCounters",
    # Import from main.py
    "Character",
    # Import from serialization.py
    "character_from_dict",
    "character_to_dict",
    # Import from stat_model.py
    "StatModel",
    "signed_delta",
    # Import from stats_in_game.py
    "AttackUsage",
    "StatsInGame",
]
