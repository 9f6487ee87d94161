"""
Pydantic Schemas for API - Proper request/response models for OpenAPI.

These models define the exact contract between a game UI and the engine.
All responses include explicit types for OpenAPI schema generation.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has expired
- UNKNOWN_ARCHETYPE: Archetype key is not one of orc, undead, human, minotaur
- INVALID_ACTION: The host refused the request (e.g. AI turn requested on a human turn)
- VALIDATION_ERROR: Request body failed validation
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    AI_THINKING = "ai_thinking"
    YOUR_TURN = "your_turn"
    GAME_OVER = "game_over"


class GameModeValue(str, Enum):
    """Who plays player 2."""
    ONE_VS_ONE = "1v1"
    AI = "ai"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    UNKNOWN_ARCHETYPE = "UNKNOWN_ARCHETYPE"
    INVALID_ACTION = "INVALID_ACTION"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class CardInfo(BaseModel):
    """Card information for display."""
    id: str
    name: str
    archetype: str
    cost: int
    attack: int
    health: int
    max_health: int
    has_taunt: bool = False
    description: str = ""

    model_config = {"from_attributes": True}


class UnitInfo(BaseModel):
    """A unit standing on the board."""
    card_id: str
    name: str
    player_index: int = Field(description="0 for player 1, 1 for player 2")
    row: int
    col: int
    attack: int
    health: int
    max_health: int
    has_taunt: bool = False


class PlayerInfo(BaseModel):
    """Player information for display."""
    player_index: int
    label: str = Field(description="'Player 1', 'Player 2' or 'AI'")
    archetype: str
    health: int
    mana: int
    mana_capacity: int
    deck_count: int = 0
    fatigue_damage: int = 0
    hand: list[CardInfo] = Field(default_factory=list)
    is_current_turn: bool = False
    is_bot: bool = False


class ArchetypeInfo(BaseModel):
    """An archetype a player can pick."""
    key: str
    name: str
    icon: str
    description: str
    attack_coefficient: float
    health_coefficient: float

    model_config = {"from_attributes": True}


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    player1_archetype: str = Field(..., description="Archetype for player 1")
    player2_archetype: Optional[str] = Field(
        None, description="Archetype for player 2 (random in AI mode if omitted)"
    )
    game_mode: GameModeValue = Field(GameModeValue.AI, description="1v1 hot-seat or against the AI")
    bot_personality: Optional[str] = Field(
        None, description="AI personality: balanced, aggressive, defensive, chaotic or random"
    )
    random_seed: Optional[int] = Field(None, description="Seed for reproducible games")


class SelectCardRequest(BaseModel):
    """Select a card from the current player's hand."""
    card_id: str = Field(..., description="ID of a card in the current player's hand")


class PlaceCardRequest(BaseModel):
    """Place the selected card on the board."""
    row: int = Field(..., description="Must be the current player's spawn row")
    col: int = Field(..., description="Column, 0-6")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Complete game state for display."""
    session_id: str
    status: SessionStatus
    game_mode: GameModeValue
    turn: int
    current_player: int
    is_first_turn: bool = True
    board: list[list[Optional[UnitInfo]]] = Field(
        default_factory=list, description="5 rows by 7 columns; row 0 is player 1's spawn row"
    )
    players: list[PlayerInfo] = Field(default_factory=list)
    selected_card: Optional[CardInfo] = None
    message: str = ""
    error: Optional[str] = None
    log: list[str] = Field(default_factory=list)
    is_processing_ai: bool = False
    game_over: bool = False
    winner: Optional[int] = None
    api_version: str = "v1"


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    game_mode: GameModeValue
    players: list[PlayerInfo] = Field(default_factory=list)
    current_player: Optional[int] = None
    turn: int = 0
    created_at: float = 0.0
    api_version: str = "v1"


class LegalActionsResponse(BaseModel):
    """Actions the current player may take."""
    session_id: str
    current_player: Optional[int] = None
    selectable_card_ids: list[str] = Field(default_factory=list)
    placeable_cells: list[tuple[int, int]] = Field(
        default_factory=list, description="(row, col) pairs for the selected card"
    )
    can_end_turn: bool = False
    api_version: str = "v1"


class AITurnResponse(BaseModel):
    """Result of playing an AI turn."""
    session_id: str
    ai_actions: list[str] = Field(default_factory=list, description="Placements, in order")
    game_state: GameStateResponse
    api_version: str = "v1"


class ArchetypeListResponse(BaseModel):
    """Response listing the archetypes."""
    archetypes: list[ArchetypeInfo]
    count: int


class PreviewDeckResponse(BaseModel):
    """The fixed showcase deck for an archetype."""
    archetype: ArchetypeInfo
    cards: list[CardInfo]


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
