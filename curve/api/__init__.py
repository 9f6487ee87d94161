"""
API Module - Game UI interface.

Exposes the engine via REST API.
A game UI:
1. Lists archetypes and previews their decks
2. Creates a game session (1v1 or against the AI)
3. Selects and places cards, then ends the turn
4. Reads back the board, players, message and log

All state is session-scoped. No persistent user accounts required.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    SelectCardRequest,
    PlaceCardRequest,
    # Responses
    SessionResponse,
    GameStateResponse,
    LegalActionsResponse,
    AITurnResponse,
    ErrorResponse,
    # Shared
    PlayerInfo,
    CardInfo,
    UnitInfo,
    ArchetypeInfo,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "SelectCardRequest",
    "PlaceCardRequest",
    # Responses
    "SessionResponse",
    "GameStateResponse",
    "LegalActionsResponse",
    "AITurnResponse",
    "ErrorResponse",
    # Shared
    "PlayerInfo",
    "CardInfo",
    "UnitInfo",
    "ArchetypeInfo",
    # Service
    "APIService",
    "create_app",
]
