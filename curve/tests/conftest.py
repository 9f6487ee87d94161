"""
Pytest fixtures for Curve tests.
"""

import random

import pytest

from ..engine_core.state import (
    Card,
    GameMode,
    GameState,
    PlayerState,
    Unit,
    empty_board,
    freeze_board,
    thaw_board,
)
from ..engine_core.reducer import Reducer
from ..cards.setup import initialize_game


def make_card(
    card_id: str,
    cost: int = 1,
    attack: int = 1,
    health: int = 1,
    has_taunt: bool = False,
    name: str | None = None,
    archetype: str = "orc",
) -> Card:
    """Build a card with explicit stats."""
    return Card(
        id=card_id,
        name=name or card_id,
        archetype=archetype,
        cost=cost,
        attack=attack,
        health=health,
        max_health=health,
        has_taunt=has_taunt,
    )


def make_unit(player_index: int, card_id: str, attack: int = 1, health: int = 1, **kwargs) -> Unit:
    return Unit.from_card(make_card(card_id, attack=attack, health=health, **kwargs), player_index)


def make_state(
    units: dict[tuple[int, int], Unit] | None = None,
    p0: dict | None = None,
    p1: dict | None = None,
    game_mode: GameMode = GameMode.ONE_VS_ONE,
    **kwargs,
) -> GameState:
    """
    Build a state with units at given cells and optional player overrides.

    Players default to empty decks and hands.
    """
    grid = thaw_board(empty_board())
    for (row, col), unit in (units or {}).items():
        grid[row][col] = unit

    players = (
        PlayerState(player_id=0, archetype="orc")._copy_with(**(p0 or {})),
        PlayerState(player_id=1, archetype="minotaur")._copy_with(**(p1 or {})),
    )
    return GameState(board=freeze_board(grid), players=players, game_mode=game_mode, **kwargs)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source."""
    return random.Random(1234)


@pytest.fixture
def reducer() -> Reducer:
    """Reducer with a seeded random source."""
    return Reducer(rng=random.Random(42))


@pytest.fixture
def new_game(rng: random.Random) -> GameState:
    """A freshly dealt orc vs minotaur game."""
    return initialize_game("orc", "minotaur", rng=rng)


@pytest.fixture
def empty_state() -> GameState:
    """Empty board, empty decks and hands, player 1 to act."""
    return make_state()


@pytest.fixture
def state_with_hand() -> GameState:
    """Player 1 holds a 1-cost card and a 3-cost card with 1 mana."""
    return make_state(
        p0={
            "hand": (
                make_card("cheap", cost=1, attack=2, health=2, name="Orc Warrior"),
                make_card("pricey", cost=3, attack=4, health=3),
            ),
            "deck": (make_card("deck_0"), make_card("deck_1", name="Top Card")),
        },
        p1={"deck": (make_card("p1_deck_0", name="Minotaur Warrior"),)},
    )
