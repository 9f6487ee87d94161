"""
Placement Evaluator - Scores spawn columns for bot decision-making.

For a free spawn cell the evaluator looks down the whole column:
- Enemies in the column attract the unit, closer ones more strongly
- Allies in the column add a little support value
- Heavy hitters (attack above a threshold) avoid stacking on allies
- A random term breaks ties

Weights can be adjusted to create different personalities.
The evaluator only reads the board; it never mutates state.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING
import random

from ..engine_core.state import COLS, ROWS, spawn_row

if TYPE_CHECKING:
    from ..engine_core.state import Board, Card


@dataclass
class PlacementWeights:
    """
    Weights for the placement evaluator.

    Higher values = more importance.
    """
    # Per enemy in column: proximity_base - distance from our spawn row
    proximity_base: float = 10.0
    enemy_in_column: float = 5.0
    ally_in_column: float = 2.0

    # Cards hitting harder than this spread out instead of stacking
    heavy_attack_threshold: int = 5
    heavy_ally_penalty: float = 3.0

    # Uniform tie-breaker in [0, jitter)
    jitter: float = 3.0


@dataclass
class ColumnScore:
    """Score of one spawn column, with its parts for debugging."""
    col: int
    score: float
    enemies: int = 0
    allies: int = 0


class PlacementEvaluator:
    """Scores spawn columns for a card."""

    def __init__(self, weights: PlacementWeights | None = None):
        self.weights = weights or PlacementWeights()

    def score_column(
        self,
        card: Card,
        board: Board,
        col: int,
        player_index: int,
        rng: random.Random,
    ) -> ColumnScore:
        w = self.weights
        home = spawn_row(player_index)
        score = 0.0
        enemies = allies = 0

        for row in range(ROWS):
            unit = board[row][col]
            if unit is None:
                continue
            if unit.player_index != player_index:
                enemies += 1
                score += w.proximity_base - abs(row - home)
            else:
                allies += 1

        score += enemies * w.enemy_in_column
        score += allies * w.ally_in_column
        if card.attack > w.heavy_attack_threshold:
            score -= allies * w.heavy_ally_penalty
        score += rng.random() * w.jitter

        return ColumnScore(col=col, score=score, enemies=enemies, allies=allies)

    def rank_columns(
        self,
        card: Card,
        board: Board,
        player_index: int,
        rng: random.Random,
    ) -> list[ColumnScore]:
        """Score every free spawn column, best first."""
        home = spawn_row(player_index)
        scored = [
            self.score_column(card, board, col, player_index, rng)
            for col in range(COLS)
            if board[home][col] is None
        ]
        scored.sort(key=lambda s: s.score, reverse=True)
        return scored


def find_best_position(
    card: Card,
    board: Board,
    player_index: int = 1,
    rng: random.Random | None = None,
    weights: PlacementWeights | None = None,
) -> int | None:
    """
    Choose a spawn column for a card.

    Returns None when the player's spawn row is full.
    """
    ranked = PlacementEvaluator(weights).rank_columns(
        card, board, player_index, rng or random.Random()
    )
    if not ranked:
        return None
    return ranked[0].col
