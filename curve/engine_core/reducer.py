"""
Reducer - Applies actions to game state.

The reducer is the single point of state transition.
All state changes must go through apply().

Design principles:
- Pure function: (state, action) -> new_state
- Rule violations are soft: the state comes back with a message,
  never an exception
- Unknown actions return the state unchanged
- Randomness only enters through StartGame, from the injected rng
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import random

from .state import MAX_MANA, GameMode, GameState, Unit, in_bounds, spawn_row
from .action import Action, ActionType
from .phases import (
    WinResult,
    advance_phase,
    battle_phase,
    check_win_condition,
    draw_phase,
)

logger = logging.getLogger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless apart from the random source used to deal new games.
    """
    rng: random.Random = field(default_factory=random.Random)

    def apply(self, state: GameState | None, action: Action) -> GameState | None:
        """
        Apply an action to the game state.

        Before StartGame there is no state; every other action is
        ignored until one exists.
        """
        handler = self._get_handler(action.action_type)
        if handler is None:
            return state
        if state is None and action.action_type != ActionType.START_GAME:
            return state

        logger.debug("Applying %s", action.describe())
        return handler(state, action)

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.START_GAME: self._handle_start_game,
            ActionType.SELECT_CARD: self._handle_select_card,
            ActionType.PLACE_CARD: self._handle_place_card,
            ActionType.END_TURN: self._handle_end_turn,
            ActionType.BATTLE_PHASE: self._handle_battle_phase,
            ActionType.ADD_LOG: self._handle_add_log,
            ActionType.SET_AI_PROCESSING: self._handle_set_ai_processing,
            ActionType.SET_ERROR: self._handle_set_error,
            ActionType.CLEAR_ERROR: self._handle_clear_error,
        }
        return handlers.get(action_type)

    def _handle_start_game(self, state: GameState | None, action: Action) -> GameState | None:
        """Deal a fresh game. The log restarts with a single entry."""
        from ..cards.archetypes import is_archetype
        from ..cards.setup import initialize_game

        payload = action.payload
        archetypes = (payload.player1_archetype, payload.player2_archetype)
        if not all(a is not None and is_archetype(a) for a in archetypes):
            if state is None:
                return state
            return state._copy_with(message="Unknown archetype!")

        rng = random.Random(payload.seed) if payload.seed is not None else self.rng
        new_state = initialize_game(
            payload.player1_archetype,
            payload.player2_archetype,
            rng=rng,
            game_mode=payload.game_mode or GameMode.ONE_VS_ONE,
        )
        return new_state._copy_with(log=("New game started!",))

    def _handle_select_card(self, state: GameState, action: Action) -> GameState:
        """Mark a card from the acting player's hand for placement."""
        card = action.payload.card
        player = state.active_player

        in_hand = player.find_in_hand(card.id) if card is not None else None
        if in_hand is None:
            return state._copy_with(message="Card not in hand!", selected_card=None)

        if in_hand.cost > player.mana:
            return state._copy_with(message="Not enough mana!", selected_card=None)

        return state._copy_with(selected_card=in_hand, message="Select a spawn position")

    def _handle_place_card(self, state: GameState, action: Action) -> GameState:
        """Place the selected card on the acting player's spawn row."""
        card = state.selected_card
        if card is None or state.game_over:
            return state

        row, col = action.payload.row, action.payload.col
        acting = state.current_player

        if not isinstance(row, int) or not isinstance(col, int) or not in_bounds(row, col):
            return state._copy_with(message="Invalid position!")
        if row != spawn_row(acting):
            return state._copy_with(message="Must place on spawn row!")
        if state.board[row][col] is not None:
            return state._copy_with(message="Cell occupied!")

        player = state.active_player
        new_board = tuple(
            tuple(
                Unit.from_card(card, acting) if (r, c) == (row, col) else unit
                for c, unit in enumerate(cells)
            )
            for r, cells in enumerate(state.board)
        )
        new_player = player._copy_with(
            hand=[c for c in player.hand if c.id != card.id],
            mana=player.mana - card.cost,
        )

        return (
            state.with_player(new_player)
            ._copy_with(board=new_board, selected_card=None, message="Unit placed!")
            .with_log(f"Turn {state.turn}: Player {acting + 1} placed {card.name} at {row},{col}")
        )

    def _handle_end_turn(self, state: GameState, action: Action) -> GameState:
        """
        Resolve the end of the current player's turn.

        Order: battle, win check, switch player, draw, advance,
        mana refill, prompt. A win at the win check or during the
        advance stops the sequence there.
        """
        if state.game_over:
            return state

        acting = state.current_player
        new_state = battle_phase(state).with_log(
            f"Turn {state.turn}: Battle phase for Player {acting + 1}"
        )

        win = check_win_condition(new_state)
        if win is not None:
            return self._declare_winner(new_state, win)

        next_player = 1 - acting
        new_state = new_state._copy_with(
            current_player=next_player,
            turn=state.turn + 1 if next_player == 0 else state.turn,
            is_first_turn=False if next_player == 1 else state.is_first_turn,
            selected_card=None,
        )

        new_state = draw_phase(new_state, next_player).with_log(
            f"Turn {new_state.turn}: Draw phase for Player {next_player + 1}"
        )

        new_state = advance_phase(new_state).with_log(
            f"Turn {new_state.turn}: Advance phase for Player {next_player + 1}"
        )
        if new_state.game_over:
            logger.info("Game over on turn %d: %s", new_state.turn, new_state.message)
            return new_state

        player = new_state.players[next_player]
        capacity = min(player.mana_capacity + 1, MAX_MANA)
        new_state = new_state.with_player(
            player._copy_with(mana_capacity=capacity, mana=capacity)
        )

        return new_state._copy_with(
            message=f"{new_state.player_label(next_player)} Turn: Play phase - Place your units!"
        )

    def _handle_battle_phase(self, state: GameState, action: Action) -> GameState:
        """Run only the battle for the current player, then check for a win."""
        if state.game_over:
            return state

        new_state = battle_phase(state)
        win = check_win_condition(new_state)
        if win is not None:
            return self._declare_winner(new_state, win)
        return new_state

    def _declare_winner(self, state: GameState, win: WinResult) -> GameState:
        logger.info("Game over on turn %d: %s", state.turn, win.message)
        return state._copy_with(
            game_over=True,
            winner=win.winner,
            message=win.message,
        ).with_log(win.message)

    def _handle_add_log(self, state: GameState, action: Action) -> GameState:
        return state.with_log(action.payload.text or "")

    def _handle_set_ai_processing(self, state: GameState, action: Action) -> GameState:
        return state._copy_with(is_processing_ai=bool(action.payload.flag))

    def _handle_set_error(self, state: GameState, action: Action) -> GameState:
        return state._copy_with(error=action.payload.text)

    def _handle_clear_error(self, state: GameState, action: Action) -> GameState:
        return state._copy_with(error=None)


def apply_action(
    state: GameState | None,
    action: Action,
    rng: random.Random | None = None,
) -> GameState | None:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(rng=rng) if rng is not None else Reducer()
    return reducer.apply(state, action)
