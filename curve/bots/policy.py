"""
Bot Policy - Interface for bot decision-making.

A bot turn has two questions:
1. Which cards from hand to play, in which order (plan_cards)
2. Where to put each one (select_position)

The game loop asks select_position again after every placement, so a
policy always sees the live board. Policies only read state.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
import random

from ..engine_core.state import COLS, spawn_row

if TYPE_CHECKING:
    from ..engine_core.state import Board, Card, GameState


@dataclass
class BotDecision:
    """
    A turn plan made by a bot.

    Contains:
    - The cards to play, in order
    - Explanation (for the game log / debugging)
    """
    cards: list[Card] = field(default_factory=list)
    explanation: str = ""

    # Evaluation details (for debugging)
    evaluated_cards: int = 0
    evaluation_details: dict[str, Any] = field(default_factory=dict)


def greedy_fill(cards: list[Card], mana: int) -> list[Card]:
    """Take cards in the given order while they still fit the mana left."""
    chosen = []
    mana_left = mana
    for card in cards:
        if card.cost <= mana_left:
            chosen.append(card)
            mana_left -= card.cost
    return chosen


def playable_cards(state: GameState, player_index: int) -> list[Card]:
    player = state.players[player_index]
    return [card for card in player.hand if card.cost <= player.mana]


def free_columns(board: Board, player_index: int) -> list[int]:
    row = spawn_row(player_index)
    return [col for col in range(COLS) if board[row][col] is None]


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.

    A policy defines how a bot spends its mana and where it spawns.
    """

    @abstractmethod
    def plan_cards(self, state: GameState, player_index: int) -> BotDecision:
        """
        Decide which cards to play this turn.

        Args:
            state: Current game state
            player_index: The player the bot controls

        Returns:
            BotDecision with the cards to play, in order
        """
        pass

    @abstractmethod
    def select_position(self, card: Card, board: Board, player_index: int) -> int | None:
        """
        Choose a spawn column for a card.

        Returns None if the spawn row is full.
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(BotPolicy):
    """
    Random policy - plays affordable cards in random order, anywhere.

    Used for:
    - Testing
    - Baseline comparison
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self.rng = rng or random.Random(seed)

    def plan_cards(self, state: GameState, player_index: int) -> BotDecision:
        cards = playable_cards(state, player_index)
        self.rng.shuffle(cards)
        chosen = greedy_fill(cards, state.players[player_index].mana)
        return BotDecision(
            cards=chosen,
            explanation="Selected randomly",
            evaluated_cards=len(cards),
        )

    def select_position(self, card: Card, board: Board, player_index: int) -> int | None:
        columns = free_columns(board, player_index)
        if not columns:
            return None
        return self.rng.choice(columns)


class FirstLegalPolicy(BotPolicy):
    """
    First-legal policy - hand order, leftmost free column.

    Used for:
    - Deterministic testing
    - Baseline comparison
    """

    def plan_cards(self, state: GameState, player_index: int) -> BotDecision:
        cards = playable_cards(state, player_index)
        return BotDecision(
            cards=greedy_fill(cards, state.players[player_index].mana),
            explanation="Selected in hand order",
            evaluated_cards=len(cards),
        )

    def select_position(self, card: Card, board: Board, player_index: int) -> int | None:
        columns = free_columns(board, player_index)
        return columns[0] if columns else None
