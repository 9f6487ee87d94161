"""
Action Generator - Generates all legal actions from a game state.

The action generator is used by:
1. Bots to enumerate possible moves
2. UI to highlight playable cards and spawn cells
3. Validation (is this action in legal_actions?)

Design: Generates Action objects, not just action types.
This ensures all generated actions are fully specified.
"""

from __future__ import annotations
from dataclasses import dataclass

from .state import COLS, GameState, spawn_row
from .action import Action


@dataclass
class ActionGenerator:
    """Generates legal actions for the current player."""

    def generate(self, state: GameState | None) -> list[Action]:
        """
        Generate all legal actions for the current player.

        Returns a list of fully-specified Action objects.
        """
        if state is None or state.game_over:
            return []

        actions = []
        actions.extend(self._generate_select_actions(state))
        actions.extend(self._generate_place_actions(state))

        # End turn is always available while the game runs
        actions.append(Action.end_turn())

        return actions

    def _generate_select_actions(self, state: GameState) -> list[Action]:
        """One SelectCard per affordable card in hand."""
        player = state.active_player
        return [
            Action.select_card(card)
            for card in player.hand
            if card.cost <= player.mana
        ]

    def _generate_place_actions(self, state: GameState) -> list[Action]:
        """One PlaceCard per empty spawn cell, once a card is selected."""
        if state.selected_card is None:
            return []
        row = spawn_row(state.current_player)
        return [
            Action.place_card(row, col)
            for col in range(COLS)
            if state.board[row][col] is None
        ]


def legal_actions(state: GameState | None) -> list[Action]:
    """
    Convenience function to get legal actions.

    Creates an ActionGenerator and generates actions.
    """
    return ActionGenerator().generate(state)
