"""
Game Loop - Drives a session between human intents and AI turns.

The loop:
1. Human dispatches intents (select, place, end turn)
2. If the turn passes to a bot, the loop plays the bot's turn
3. Bot plans its cards, then each card is selected and placed
   against the live board
4. Bot ends its turn
5. Repeat until the game is over

An optional delay paces bot dispatches so a UI can show each step.
The delay blocks the calling thread, so callers on an event loop must
run the loop in a worker thread.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
import logging
import time

from ..config import config
from ..engine_core.action import Action, ActionType
from ..engine_core.state import GameState, spawn_row
from ..errors import InvalidActionError

if TYPE_CHECKING:
    from .manager import Session

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    WAITING_HUMAN_ACTION = "waiting_human_action"
    RUNNING_AI = "running_ai"
    GAME_OVER = "game_over"


@dataclass
class TurnResult:
    """
    Result of processing a turn.

    Contains the state after the turn and what the bot did.
    """
    success: bool
    loop_state: LoopState

    game_state: GameState | None = None

    # Bot actions taken, in order
    ai_actions: list[str] = field(default_factory=list)

    # Errors/warnings
    errors: list[str] = field(default_factory=list)

    # Game over info
    winner: int | None = None


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop(session)

        # Human plays
        loop.human_action(Action.select_card(card))
        loop.human_action(Action.place_card(0, 3))

        # Ending the turn hands over to the AI in AI mode
        result = loop.human_action(Action.end_turn())
        show(result.game_state)
    """

    def __init__(self, session: Session, delay: float | None = None):
        self.session = session
        self.delay = config.AI_DELAY if delay is None else delay
        self.state = LoopState.WAITING_HUMAN_ACTION

    def human_action(self, action: Action) -> TurnResult:
        """
        Dispatch a human intent.

        After an EndTurn, any bot turns that follow are played out.
        """
        if self.session.is_bot_turn():
            raise InvalidActionError(
                f"It is {self._label()}'s turn; human actions are not accepted"
            )

        game_state = self.session.dispatch(action)
        if game_state is not None and game_state.game_over:
            return self._game_over_result([])

        if action.action_type == ActionType.END_TURN and self.session.is_bot_turn():
            return self.run_ai_turn()

        return TurnResult(success=True, loop_state=self.state, game_state=game_state)

    def run_ai_turn(self, player_index: int | None = None) -> TurnResult:
        """
        Play one full turn for the bot controlling the current player.

        Steps:
        1. Flag the state as AI processing and log that the bot is thinking
        2. Ask the bot for the cards to play
        3. Select and place each card, asking for a column on the live board
        4. End the turn and clear the processing flag
        """
        session = self.session
        game_state = session.game_state
        if game_state is None or game_state.game_over:
            raise InvalidActionError("No game in progress")

        player_index = game_state.current_player if player_index is None else player_index
        if player_index != game_state.current_player:
            raise InvalidActionError(f"It is not {game_state.player_label(player_index)}'s turn")

        bot = session.bots.get(player_index)
        if bot is None:
            raise InvalidActionError(f"{game_state.player_label(player_index)} is not a bot")

        from .manager import SessionState

        actions: list[str] = []
        self.state = LoopState.RUNNING_AI
        session.state = SessionState.AI_TURN

        with session.lock:
            try:
                self._dispatch(Action.set_ai_processing(True))
                turn = session.game_state.turn
                self._dispatch(Action.add_log(f"Turn {turn}: AI is thinking..."))

                decision = bot.plan_cards(session.game_state, player_index)
                logger.debug("%s plans %d cards: %s", bot.get_name(), len(decision.cards), decision.explanation)

                if not decision.cards:
                    self._dispatch(Action.add_log(f"Turn {turn}: AI has no playable cards. Ending turn."))
                else:
                    self._dispatch(Action.add_log(f"Turn {turn}: AI will play {len(decision.cards)} cards."))
                    for card in decision.cards:
                        col = bot.select_position(card, session.game_state.board, player_index)
                        if col is None:
                            break
                        self._dispatch(Action.select_card(card))
                        self._dispatch(Action.place_card(spawn_row(player_index), col))
                        actions.append(f"{card.name} -> {spawn_row(player_index)},{col}")

                self._dispatch(Action.end_turn())
            except Exception:
                logger.exception("Session %s: %s failed mid-turn", session.session_id, bot.get_name())
                raise
            finally:
                # A failing bot must not leave the session stuck in its turn
                self._dispatch(Action.set_ai_processing(False))
                if not session.game_state.game_over:
                    session.state = SessionState.ACTIVE
                    self.state = LoopState.WAITING_HUMAN_ACTION

        if session.game_state.game_over:
            return self._game_over_result(actions)

        return TurnResult(
            success=True,
            loop_state=self.state,
            game_state=session.game_state,
            ai_actions=actions,
        )

    def play_to_completion(self, max_turns: int = 200) -> TurnResult:
        """
        Let bots play every turn until the game ends or max_turns passes.

        Every player must have a bot; used by simulations and tests.
        """
        actions: list[str] = []
        while not self.session.game_state.game_over:
            if self.session.game_state.turn > max_turns:
                return TurnResult(
                    success=False,
                    loop_state=self.state,
                    game_state=self.session.game_state,
                    ai_actions=actions,
                    errors=[f"No winner after {max_turns} turns"],
                )
            result = self.run_ai_turn()
            actions.extend(result.ai_actions)
        return self._game_over_result(actions)

    def _dispatch(self, action: Action) -> None:
        self.session.dispatch(action)
        if self.delay > 0:
            time.sleep(self.delay)

    def _label(self) -> str:
        game_state = self.session.game_state
        return game_state.player_label(game_state.current_player)

    def _game_over_result(self, actions: list[str]) -> TurnResult:
        self.state = LoopState.GAME_OVER
        game_state = self.session.game_state
        return TurnResult(
            success=True,
            loop_state=self.state,
            game_state=game_state,
            ai_actions=actions,
            winner=game_state.winner,
        )
