"""
Tests for Pydantic API schemas.
"""

import pytest
from pydantic import ValidationError

from ..api.schemas import (
    CardInfo,
    CreateSessionRequest,
    ErrorCode,
    ErrorResponse,
    GameModeValue,
    GameStateResponse,
    LegalActionsResponse,
    PlaceCardRequest,
    SessionStatus,
    UnitInfo,
)
from .conftest import make_card


class TestPydanticSchemas:
    """Test Pydantic schema validation and serialization."""

    def test_card_info_from_card(self):
        card = make_card("p0_common_1", cost=3, attack=4, health=2, has_taunt=True)
        info = CardInfo.model_validate(card)
        assert info.id == "p0_common_1"
        assert info.max_health == 2
        assert info.has_taunt

    def test_create_session_defaults(self):
        request = CreateSessionRequest(player1_archetype="orc")
        assert request.game_mode == GameModeValue.AI
        assert request.player2_archetype is None
        assert request.random_seed is None

    def test_create_session_game_mode_values(self):
        assert CreateSessionRequest(player1_archetype="orc", game_mode="1v1").game_mode == GameModeValue.ONE_VS_ONE
        with pytest.raises(ValidationError):
            CreateSessionRequest(player1_archetype="orc", game_mode="2v2")

    def test_place_card_requires_coordinates(self):
        with pytest.raises(ValidationError):
            PlaceCardRequest(row=0)

    def test_error_response_schema(self):
        error = ErrorResponse(
            error="Session abc not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
            details={"session_id": "abc"},
        )
        data = error.model_dump(mode="json")
        assert data["error_code"] == "SESSION_NOT_FOUND"
        assert data["api_version"] == "v1"

    def test_game_state_response_schema(self):
        unit = UnitInfo(
            card_id="p1_common_0", name="Minotaur Guardian", player_index=1,
            row=4, col=3, attack=2, health=9, max_health=9, has_taunt=True,
        )
        board = [[None] * 7 for _ in range(5)]
        board[4][3] = unit

        response = GameStateResponse(
            session_id="s1",
            status=SessionStatus.YOUR_TURN,
            game_mode=GameModeValue.AI,
            turn=3,
            current_player=0,
            board=board,
            message="Player 1 Turn: Play phase - Place your units!",
            log=["Turn 2: AI will play 1 cards."],
        )
        data = response.model_dump(mode="json")

        assert data["status"] == "your_turn"
        assert data["board"][4][3]["name"] == "Minotaur Guardian"
        assert data["board"][0][0] is None
        assert data["winner"] is None

        restored = GameStateResponse.model_validate(data)
        assert restored.board[4][3] == unit

    def test_legal_actions_cells_serialize_as_pairs(self):
        response = LegalActionsResponse(session_id="s1", placeable_cells=[(0, 1), (0, 4)])
        assert response.model_dump(mode="json")["placeable_cells"] == [[0, 1], [0, 4]]
