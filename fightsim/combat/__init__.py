"""
Combat module for the fight engine.

This module contains the rosters and the game state of a fight, the turn
scheduler, the attack choice of computer-controlled characters and the combat
session orchestrating them.
"""

from .auto_play import choose_auto_action, choose_auto_attack, choose_auto_target
from .game_state import GameState, new_game_name
from .roster import RosterRef, Rosters
from .scheduler import TurnScheduler
from .session import CombatSession

__all__ = [
    # Import from auto_play.py
    "choose_auto_action",
    "choose_auto_attack",
    "choose_auto_target",
    # Import from game_state.py
    "GameState",
    "new_game_name",
    # Import from roster.py
    "RosterRef",
    "Rosters",
    # Import from scheduler.py
    "TurnScheduler",
    # Import from session.py
    "CombatSession",
]
