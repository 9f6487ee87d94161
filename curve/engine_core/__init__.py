"""
Engine Core - Deterministic turn resolution for the lane battle.

The engine is the runtime that:
1. Holds the immutable GameState
2. Generates legal actions
3. Applies actions via the reducer
4. Resolves battle, draw and advance phases in order
"""

from .state import GameState, PlayerState, Card, Unit, GameMode
from .action import Action, ActionType, ActionPayload
from .reducer import Reducer, apply_action
from .action_generator import ActionGenerator, legal_actions
from .phases import (
    WinResult,
    advance_phase,
    battle_phase,
    check_win_condition,
    draw_phase,
)

__all__ = [
    "GameState",
    "PlayerState",
    "Card",
    "Unit",
    "GameMode",
    "Action",
    "ActionType",
    "ActionPayload",
    "Reducer",
    "apply_action",
    "ActionGenerator",
    "legal_actions",
    "WinResult",
    "advance_phase",
    "battle_phase",
    "check_win_condition",
    "draw_phase",
]
