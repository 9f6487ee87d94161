"""
Greedy Bot - The default AI opponent.

This is the bot that:
- Ranks affordable cards by value, cost * (attack + health)
- Spends mana greedily from the most valuable card down
- Places each card in the best-scoring spawn column
- Supports configurable personalities

The bot does NOT:
- Look ahead at battle outcomes
- Hold cards back for later turns
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import random

from .policy import BotPolicy, BotDecision, greedy_fill, playable_cards
from .evaluator import PlacementEvaluator
from .personality import Personality, BALANCED

if TYPE_CHECKING:
    from ..engine_core.state import Board, Card, GameState


@dataclass
class GreedyBot(BotPolicy):
    """
    Greedy mana-spending bot with column scoring.

    Usage:
        bot = GreedyBot(personality=AGGRESSIVE, rng=random.Random(7))
        decision = bot.plan_cards(state, player_index=1)
        col = bot.select_position(decision.cards[0], state.board, 1)
    """
    personality: Personality = None  # type: ignore
    evaluator: PlacementEvaluator = None  # type: ignore
    rng: random.Random = None  # type: ignore

    def __post_init__(self):
        if self.personality is None:
            self.personality = BALANCED
        if self.evaluator is None:
            self.evaluator = PlacementEvaluator(weights=self.personality.weights)
        if self.rng is None:
            self.rng = random.Random()

    def card_value(self, card: Card) -> float:
        p = self.personality
        return card.cost * (card.attack * p.attack_bias + card.health * p.health_bias)

    def plan_cards(self, state: GameState, player_index: int) -> BotDecision:
        """
        Pick the cards to play this turn.

        Process:
        1. Filter to cards the current mana can pay for
        2. Sort by value, highest first (or shuffle, per personality)
        3. Take cards greedily while mana lasts
        """
        cards = playable_cards(state, player_index)
        mana = state.players[player_index].mana

        if self.rng.random() < self.personality.randomness:
            self.rng.shuffle(cards)
            explanation = f"Random order (personality: {self.personality.name})"
        else:
            cards.sort(key=self.card_value, reverse=True)
            explanation = f"Highest value first (personality: {self.personality.name})"

        chosen = greedy_fill(cards, mana)
        return BotDecision(
            cards=chosen,
            explanation=explanation,
            evaluated_cards=len(cards),
            evaluation_details={c.id: self.card_value(c) for c in cards},
        )

    def select_position(self, card: Card, board: Board, player_index: int) -> int | None:
        ranked = self.evaluator.rank_columns(card, board, player_index, self.rng)
        if not ranked:
            return None
        return ranked[0].col

    def get_name(self) -> str:
        return f"GreedyBot({self.personality.name})"
