"""
Game Setup - Creates the initial game state.

This module handles:
- Generating and shuffling one deck per player
- Dealing the starting hands from the top of each deck
- The empty board and starting counters

Setup is deterministic for a given seeded rng.
"""

from __future__ import annotations
import logging
import random

from ..engine_core.state import (
    STARTING_HAND_SIZE,
    GameMode,
    GameState,
    PlayerState,
    empty_board,
)
from .factory import generate_deck

logger = logging.getLogger(__name__)


def initialize_game(
    player1_archetype: str,
    player2_archetype: str,
    rng: random.Random | None = None,
    game_mode: GameMode = GameMode.ONE_VS_ONE,
) -> GameState:
    """
    Set up a new game.

    Args:
        player1_archetype: Archetype key for player 0
        player2_archetype: Archetype key for player 1
        rng: Random source for deck generation and shuffling
        game_mode: Whether player 1 is a human or the AI

    Returns:
        Initial GameState with player 0 to act
    """
    rng = rng or random.Random()

    players = tuple(
        _deal_starting_hand(
            PlayerState(
                player_id=index,
                archetype=archetype,
                deck=tuple(generate_deck(archetype, rng, player_index=index)),
            )
        )
        for index, archetype in enumerate((player1_archetype, player2_archetype))
    )

    logger.debug(
        "Initialized %s vs %s (%s)", player1_archetype, player2_archetype, game_mode.value
    )

    return GameState(
        board=empty_board(),
        players=players,
        current_player=0,
        turn=1,
        message="Player 1 Turn: Draw phase - Starting your turn!",
        is_first_turn=True,
        log=("Game started! Player 1 begins.",),
        game_mode=game_mode,
    )


def _deal_starting_hand(player: PlayerState) -> PlayerState:
    """Move STARTING_HAND_SIZE cards from the top of the deck into hand."""
    deck = list(player.deck)
    hand = []
    for _ in range(STARTING_HAND_SIZE):
        if deck:
            hand.append(deck.pop())
    return player._copy_with(deck=deck, hand=hand)
