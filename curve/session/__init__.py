"""
Session Module - Manages ephemeral game sessions.

A session represents one play-through of a game:
- Created when user starts a game
- Holds the current game state
- Serializes human intents and bot turns through one dispatch
- Destroyed when game ends

Sessions are EPHEMERAL:
- No persistence to database
- Ends cleanly when game completes
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, TurnResult

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "TurnResult",
]
