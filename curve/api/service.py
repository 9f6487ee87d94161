"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to session dispatches
2. Manages sessions and their game loops
3. Runs AI turns in AI mode
4. Formats responses for a game UI

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
Caller mistakes are raised as CurveError subclasses; rule violations are
not errors and come back in the state's message field.
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

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
    ArchetypeListResponse,
    PreviewDeckResponse,
    # Shared
    PlayerInfo,
    CardInfo,
    UnitInfo,
    ArchetypeInfo,
    # Enums
    SessionStatus,
    GameModeValue,
)
from ..cards import ARCHETYPES, get_archetype, generate_preview_deck
from ..config import config
from ..engine_core.action import Action, ActionType
from ..engine_core.action_generator import legal_actions
from ..engine_core.state import Card, GameMode
from ..errors import InvalidActionError, SessionNotFoundError
from ..session import SessionManager, Session, SessionState, GameLoop

logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service for a game UI.

    Usage:
        service = APIService()

        # Create session
        session_response = service.create_session(request)

        # Human intents
        service.select_card(session_id, SelectCardRequest(card_id="p0_common_3"))
        service.place_card(session_id, PlaceCardRequest(row=0, col=3))
        state = service.end_turn(session_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    ai_delay: float = field(default_factory=lambda: config.AI_DELAY)

    # Game loops per session
    _game_loops: dict[str, GameLoop] = field(default_factory=dict)

    # =========================================================================
    # Archetypes
    # =========================================================================

    def list_archetypes(self) -> ArchetypeListResponse:
        archetypes = [ArchetypeInfo.model_validate(a) for a in ARCHETYPES.values()]
        return ArchetypeListResponse(archetypes=archetypes, count=len(archetypes))

    def preview_deck(self, archetype: str) -> PreviewDeckResponse:
        arch = get_archetype(archetype)
        return PreviewDeckResponse(
            archetype=ArchetypeInfo.model_validate(arch),
            cards=[CardInfo.model_validate(c) for c in generate_preview_deck(archetype)],
        )

    # =========================================================================
    # Sessions
    # =========================================================================

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """
        Create a new game session.

        Finished sessions past their TTL are reaped first.
        """
        for stale_id in self.session_manager.cleanup_stale_sessions():
            self._game_loops.pop(stale_id, None)
        session = self.session_manager.create_session(
            player1_archetype=request.player1_archetype,
            player2_archetype=request.player2_archetype,
            game_mode=GameMode(request.game_mode.value),
            seed=request.random_seed,
            personality=request.bot_personality,
        )

        # Create game loop
        self._game_loops[session.session_id] = GameLoop(session, delay=self.ai_delay)

        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse:
        """
        Get session status.
        """
        return self._session_to_response(self._require_session(session_id))

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """
        End a game session.
        """
        self._game_loops.pop(session_id, None)
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        """
        List active session IDs.
        """
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Gameplay
    # =========================================================================

    def get_game_state(self, session_id: str) -> GameStateResponse:
        """
        Get current game state.
        """
        session = self._require_session(session_id)
        return self._build_game_state(session_id, session)

    def get_legal_actions(self, session_id: str) -> LegalActionsResponse:
        session = self._require_session(session_id)
        game_state = session.game_state
        actions = legal_actions(game_state)

        return LegalActionsResponse(
            session_id=session_id,
            current_player=game_state.current_player if game_state else None,
            selectable_card_ids=[
                a.payload.card.id for a in actions if a.action_type == ActionType.SELECT_CARD
            ],
            placeable_cells=[
                (a.payload.row, a.payload.col)
                for a in actions if a.action_type == ActionType.PLACE_CARD
            ],
            can_end_turn=any(a.action_type == ActionType.END_TURN for a in actions),
        )

    def select_card(self, session_id: str, request: SelectCardRequest) -> GameStateResponse:
        """
        Select a card from the current player's hand.

        An id that is not in the hand is still dispatched, so the engine
        reports it the same way as any other rejected selection.
        """
        session = self._require_session(session_id)
        game_state = session.game_state
        card = game_state.active_player.find_in_hand(request.card_id) if game_state else None
        if card is None:
            card = Card(
                id=request.card_id, name="", archetype="", cost=0,
                attack=0, health=0, max_health=0,
            )
        return self._human_action(session_id, session, Action.select_card(card))

    def place_card(self, session_id: str, request: PlaceCardRequest) -> GameStateResponse:
        session = self._require_session(session_id)
        return self._human_action(session_id, session, Action.place_card(request.row, request.col))

    def battle(self, session_id: str) -> GameStateResponse:
        session = self._require_session(session_id)
        return self._human_action(session_id, session, Action.battle_phase())

    def end_turn(self, session_id: str) -> GameStateResponse:
        """
        End the current turn.

        In AI mode the AI plays its turn before this returns.
        """
        session = self._require_session(session_id)
        return self._human_action(session_id, session, Action.end_turn())

    def run_ai_turn(self, session_id: str) -> AITurnResponse:
        session = self._require_session(session_id)
        result = self._game_loop(session).run_ai_turn()
        return AITurnResponse(
            session_id=session_id,
            ai_actions=result.ai_actions,
            game_state=self._build_game_state(session_id, session),
        )

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _require_session(self, session_id: str) -> Session:
        session = self.session_manager.get_session(session_id)
        if not session:
            raise SessionNotFoundError(session_id)
        return session

    def _game_loop(self, session: Session) -> GameLoop:
        game_loop = self._game_loops.get(session.session_id)
        if not game_loop:
            game_loop = GameLoop(session, delay=self.ai_delay)
            self._game_loops[session.session_id] = game_loop
        return game_loop

    def _human_action(self, session_id: str, session: Session, action: Action) -> GameStateResponse:
        if session.game_state is None:
            raise InvalidActionError("No game in progress")
        logger.debug("Session %s: %s", session_id, action.describe())
        self._game_loop(session).human_action(action)
        return self._build_game_state(session_id, session)

    def _session_to_response(self, session: Session) -> SessionResponse:
        """Convert Session to SessionResponse."""
        game_state = session.game_state
        return SessionResponse(
            session_id=session.session_id,
            status=self._session_state_to_status(session),
            game_mode=GameModeValue(session.game_mode.value),
            players=self._build_players(session),
            current_player=game_state.current_player if game_state else None,
            turn=game_state.turn if game_state else 0,
            created_at=session.created_at,
        )

    def _session_state_to_status(self, session: Session) -> SessionStatus:
        """Convert session state to API status."""
        if session.state == SessionState.AI_TURN:
            return SessionStatus.AI_THINKING
        if session.state in {SessionState.GAME_OVER, SessionState.ABANDONED}:
            return SessionStatus.GAME_OVER
        if session.game_state and session.game_state.current_player not in session.bots:
            return SessionStatus.YOUR_TURN
        return SessionStatus.ACTIVE

    def _build_players(self, session: Session) -> list[PlayerInfo]:
        game_state = session.game_state
        if not game_state:
            return []
        return [
            PlayerInfo(
                player_index=idx,
                label=game_state.player_label(idx),
                archetype=player.archetype,
                health=player.health,
                mana=player.mana,
                mana_capacity=player.mana_capacity,
                deck_count=len(player.deck),
                fatigue_damage=player.fatigue_damage,
                hand=[CardInfo.model_validate(c) for c in player.hand],
                is_current_turn=idx == game_state.current_player,
                is_bot=idx in session.bots,
            )
            for idx, player in enumerate(game_state.players)
        ]

    def _build_game_state(self, session_id: str, session: Session) -> GameStateResponse:
        """Build complete game state response."""
        game_state = session.game_state
        if game_state is None:
            raise InvalidActionError("No game in progress")

        board = [
            [
                UnitInfo(
                    card_id=unit.card_id,
                    name=unit.name,
                    player_index=unit.player_index,
                    row=r,
                    col=c,
                    attack=unit.attack,
                    health=unit.health,
                    max_health=unit.max_health,
                    has_taunt=unit.has_taunt,
                ) if unit else None
                for c, unit in enumerate(row)
            ]
            for r, row in enumerate(game_state.board)
        ]

        return GameStateResponse(
            session_id=session_id,
            status=self._session_state_to_status(session),
            game_mode=GameModeValue(game_state.game_mode.value),
            turn=game_state.turn,
            current_player=game_state.current_player,
            is_first_turn=game_state.is_first_turn,
            board=board,
            players=self._build_players(session),
            selected_card=(
                CardInfo.model_validate(game_state.selected_card)
                if game_state.selected_card else None
            ),
            message=game_state.message,
            error=game_state.error,
            log=list(game_state.log),
            is_processing_ai=game_state.is_processing_ai,
            game_over=game_state.game_over,
            winner=game_state.winner,
        )
