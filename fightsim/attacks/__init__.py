"""
Attacks module for the fight engine.

This module contains the attack definitions and the pipeline resolving one
attack against the rosters of a session.
"""

from .attack import AttackDefinition
from .resolver import AttackResolver, AttackResult, DodgeInfo

__all__ = [
    "AttackDefinition",
    "AttackResolver",
    "AttackResult",
    "DodgeInfo",
]
