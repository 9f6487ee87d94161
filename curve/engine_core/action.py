"""
Action System - Actions and payloads.

Actions represent:
1. Player intents (select card, place card, end turn)
2. System actions (start game, battle phase)
3. Host flags (AI processing, error surface, log lines)

All state changes flow through actions. The UI and the AI driver
dispatch exactly the same actions.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .state import Card, GameMode


class ActionType(Enum):
    """Types of actions in the system."""
    # Game lifecycle
    START_GAME = "start_game"

    # Player actions
    SELECT_CARD = "select_card"
    PLACE_CARD = "place_card"
    END_TURN = "end_turn"
    BATTLE_PHASE = "battle_phase"

    # Host actions (no rule effect)
    ADD_LOG = "add_log"
    SET_AI_PROCESSING = "set_ai_processing"
    SET_ERROR = "set_error"
    CLEAR_ERROR = "clear_error"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields.
    This is a generic container; validation happens in the reducer.
    """
    # StartGame
    player1_archetype: str | None = None
    player2_archetype: str | None = None
    seed: int | None = None
    game_mode: GameMode | None = None

    # SelectCard
    card: Card | None = None

    # PlaceCard
    row: int | None = None
    col: int | None = None

    # AddLog / SetError
    text: str | None = None

    # SetAIProcessing
    flag: bool = False


@dataclass
class Action:
    """A complete action to be applied to the game state."""
    action_type: ActionType
    payload: ActionPayload

    def describe(self) -> str:
        """Short human-readable form, for logs and bot traces."""
        p = self.payload
        if self.action_type == ActionType.SELECT_CARD and p.card is not None:
            return f"select {p.card.name} ({p.card.id})"
        if self.action_type == ActionType.PLACE_CARD:
            return f"place at {p.row},{p.col}"
        return self.action_type.value.replace("_", " ")

    @classmethod
    def start_game(
        cls,
        player1_archetype: str,
        player2_archetype: str,
        seed: int | None = None,
        game_mode: GameMode | None = None,
    ) -> Action:
        """Factory for start game action."""
        return cls(
            action_type=ActionType.START_GAME,
            payload=ActionPayload(
                player1_archetype=player1_archetype,
                player2_archetype=player2_archetype,
                seed=seed,
                game_mode=game_mode,
            ),
        )

    @classmethod
    def select_card(cls, card: Card) -> Action:
        """Factory for select card action."""
        return cls(action_type=ActionType.SELECT_CARD, payload=ActionPayload(card=card))

    @classmethod
    def place_card(cls, row: int, col: int) -> Action:
        """Factory for place card action."""
        return cls(action_type=ActionType.PLACE_CARD, payload=ActionPayload(row=row, col=col))

    @classmethod
    def end_turn(cls) -> Action:
        return cls(action_type=ActionType.END_TURN, payload=ActionPayload())

    @classmethod
    def battle_phase(cls) -> Action:
        return cls(action_type=ActionType.BATTLE_PHASE, payload=ActionPayload())

    @classmethod
    def add_log(cls, text: str) -> Action:
        return cls(action_type=ActionType.ADD_LOG, payload=ActionPayload(text=text))

    @classmethod
    def set_ai_processing(cls, flag: bool) -> Action:
        return cls(action_type=ActionType.SET_AI_PROCESSING, payload=ActionPayload(flag=flag))

    @classmethod
    def set_error(cls, text: str) -> Action:
        return cls(action_type=ActionType.SET_ERROR, payload=ActionPayload(text=text))

    @classmethod
    def clear_error(cls) -> Action:
        return cls(action_type=ActionType.CLEAR_ERROR, payload=ActionPayload())
