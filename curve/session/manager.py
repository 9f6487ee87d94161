"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Host starts a session → archetypes chosen, fresh game dealt
2. During game:
   - UI dispatches intents (select, place, end turn)
   - In AI mode the game loop plays player 2 after each human turn
3. Game ends or host quits → session destroyed, ALL state deleted

PERSISTENCE RULES:
- NO database; sessions live in memory only
- Nothing is written to disk

DISPATCH RULES:
- A session holds the only reference to its current GameState
- Every transition goes through Session.dispatch, one at a time
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
import logging
import random
import threading
import time
import uuid

from ..engine_core.state import GameMode, GameState
from ..engine_core.action import Action
from ..engine_core.reducer import Reducer
from ..bots import BotPolicy
from ..config import config
from ..errors import InvalidActionError

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    AI_TURN = "ai_turn"  # Processing an AI turn
    GAME_OVER = "game_over"  # Game completed
    ABANDONED = "abandoned"  # Host quit


@dataclass
class Session:
    """
    An ephemeral game session.

    Contains:
    - The current canonical game state
    - The reducer and its random source
    - Bots, keyed by the player index they control
    - A lock that serializes dispatch

    The session is destroyed when the game ends.
    State is NOT persisted.
    """
    session_id: str
    game_mode: GameMode
    created_at: float

    state: SessionState = SessionState.ACTIVE
    game_state: GameState | None = None

    reducer: Reducer = field(default_factory=Reducer)
    bots: dict[int, BotPolicy] = field(default_factory=dict)

    # Reentrant, so the game loop can hold it across a whole AI turn
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    metadata: dict[str, Any] = field(default_factory=dict)

    def is_active(self) -> bool:
        """Check if session is still active."""
        return self.state in {SessionState.ACTIVE, SessionState.AI_TURN}

    def is_bot_turn(self) -> bool:
        """Check if the player to act is controlled by a bot."""
        if not self.game_state or self.game_state.game_over:
            return False
        return self.game_state.current_player in self.bots

    def dispatch(self, action: Action) -> GameState | None:
        """
        Apply one action to the session's game state.

        An unexpected fault in the engine is logged and surfaced through
        the state's error field rather than tearing down the session.
        """
        with self.lock:
            try:
                new_state = self.reducer.apply(self.game_state, action)
            except Exception as e:
                logger.exception(
                    "Session %s: engine fault on %s", self.session_id, action.describe()
                )
                if self.game_state is not None:
                    self.game_state = self.reducer.apply(self.game_state, Action.set_error(str(e)))
                return self.game_state

            self.game_state = new_state
            if new_state is not None and new_state.game_over:
                self.state = SessionState.GAME_OVER
            return new_state


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions and deal their first game
    - Track active sessions
    - Clean up completed sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(
        self,
        player1_archetype: str,
        player2_archetype: str | None = None,
        game_mode: GameMode = GameMode.AI,
        seed: int | None = None,
        bots: dict[int, BotPolicy] | None = None,
        personality: str | None = None,
    ) -> Session:
        """
        Create a new game session.

        Args:
            player1_archetype: Archetype for player 1 (index 0)
            player2_archetype: Archetype for player 2; picked at random in
                AI mode when omitted
            game_mode: 1v1 hot-seat or against the AI
            seed: Seed for decks, shuffles and bot tie-breaks
            bots: Explicit bots by player index (overrides the AI default)
            personality: Preset name or "random" for the default AI bot

        Returns:
            New Session with the game already dealt
        """
        from ..cards.archetypes import ARCHETYPES, get_archetype
        from ..bots import GreedyBot, resolve_personality
        from ..bots.personality import BALANCED

        get_archetype(player1_archetype)
        rng = random.Random(seed)

        if player2_archetype is None:
            if game_mode != GameMode.AI:
                raise InvalidActionError("player2_archetype is required in 1v1 mode")
            player2_archetype = rng.choice(list(ARCHETYPES))
        get_archetype(player2_archetype)

        if bots is None:
            bots = {}
            if game_mode == GameMode.AI:
                bot_rng = random.Random(rng.random())
                bots[1] = GreedyBot(
                    personality=resolve_personality(personality, bot_rng) or BALANCED,
                    rng=bot_rng,
                )

        session = Session(
            session_id=str(uuid.uuid4()),
            game_mode=game_mode,
            created_at=time.time(),
            reducer=Reducer(rng=rng),
            bots=bots,
            metadata={"seed": seed},
        )
        session.dispatch(Action.start_game(player1_archetype, player2_archetype, game_mode=game_mode))

        with self._lock:
            self._sessions[session.session_id] = session

        logger.info(
            "Session %s created: %s vs %s (%s)",
            session.session_id, player1_archetype, player2_archetype, game_mode.value,
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and clean up.

        The session is removed from memory. No persistence.
        """
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if not session:
            return False

        if reason == "completed":
            session.state = SessionState.GAME_OVER
        else:
            session.state = SessionState.ABANDONED
        session.game_state = None
        session.bots.clear()

        logger.info("Session %s ended (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int | None = None) -> list[str]:
        """
        Clean up sessions older than max_age that are no longer active.

        Called periodically to free memory. Defaults to config.SESSION_TTL.
        """
        if max_age_seconds is None:
            max_age_seconds = config.SESSION_TTL
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in list(self._sessions.items())
            if current_time - session.created_at > max_age_seconds and not session.is_active()
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return to_remove
