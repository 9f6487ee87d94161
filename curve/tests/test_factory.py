"""
Tests for card and deck generation.

Tests:
- Stat formulas and bounds
- Deck composition (size, taunt count, unique ids)
- Seeded reproducibility
- Preview decks
- Initial game setup
"""

import math
import random

import pytest

from ..cards.archetypes import ARCHETYPES, TAUNT_COEFFICIENTS, get_archetype
from ..cards.factory import (
    PREVIEW_COST_CURVE,
    generate_card,
    generate_deck,
    generate_preview_deck,
)
from ..cards.setup import initialize_game
from ..engine_core.state import DECK_SIZE, empty_board
from ..errors import UnknownArchetypeError


def _bounds(cost: int, coefficient: float) -> tuple[int, int]:
    return max(1, math.floor(cost * coefficient)), max(1, math.floor(cost * coefficient + 2))


class TestArchetypes:
    """Tests for archetype lookup."""

    def test_four_archetypes(self):
        assert set(ARCHETYPES) == {"orc", "undead", "human", "minotaur"}

    def test_coefficients(self):
        assert (ARCHETYPES["orc"].attack_coefficient, ARCHETYPES["orc"].health_coefficient) == (1.2, 0.8)
        assert (ARCHETYPES["minotaur"].attack_coefficient, ARCHETYPES["minotaur"].health_coefficient) == (0.8, 1.3)

    def test_unknown_archetype_raises(self):
        with pytest.raises(UnknownArchetypeError):
            get_archetype("dragon")


class TestGenerateCard:
    """Tests for single card generation."""

    @pytest.mark.parametrize("archetype", sorted(ARCHETYPES))
    def test_stats_within_bounds(self, archetype):
        rng = random.Random(7)
        arch = ARCHETYPES[archetype]
        for i in range(50):
            card = generate_card(f"c{i}", archetype, rng=rng)
            assert 1 <= card.cost <= 10
            low, high = _bounds(card.cost, arch.attack_coefficient)
            assert low <= card.attack <= high
            low, high = _bounds(card.cost, arch.health_coefficient)
            assert low <= card.health <= high
            assert card.max_health == card.health

    def test_taunt_uses_taunt_coefficients(self):
        rng = random.Random(3)
        attack_coef, health_coef = TAUNT_COEFFICIENTS
        for i in range(30):
            card = generate_card(f"t{i}", "orc", has_taunt=True, rng=rng)
            assert card.has_taunt
            assert card.name == "Orc Guardian"
            assert "Taunt" in card.description
            assert _bounds(card.cost, attack_coef)[0] <= card.attack <= _bounds(card.cost, attack_coef)[1]
            assert _bounds(card.cost, health_coef)[0] <= card.health <= _bounds(card.cost, health_coef)[1]

    def test_regular_card_name(self):
        card = generate_card("x", "undead", rng=random.Random(1))
        assert card.name == "Undead Warrior"
        assert not card.has_taunt


class TestGenerateDeck:
    """Tests for deck generation."""

    def test_deck_size_and_taunt_count(self, rng):
        deck = generate_deck("human", rng)
        assert len(deck) == DECK_SIZE
        assert sum(1 for card in deck if card.has_taunt) == 3

    def test_ids_unique_per_player(self, rng):
        deck0 = generate_deck("orc", rng, player_index=0)
        deck1 = generate_deck("orc", rng, player_index=1)
        ids0 = {card.id for card in deck0}
        ids1 = {card.id for card in deck1}
        assert len(ids0) == DECK_SIZE
        assert ids0 == {f"p0_common_{i}" for i in range(DECK_SIZE)}
        assert not ids0 & ids1

    def test_same_seed_same_deck(self):
        assert generate_deck("minotaur", random.Random(99)) == generate_deck("minotaur", random.Random(99))

    def test_different_seeds_differ(self):
        assert generate_deck("minotaur", random.Random(1)) != generate_deck("minotaur", random.Random(2))


class TestPreviewDeck:
    """Tests for the deterministic preview deck."""

    def test_follows_cost_curve(self):
        deck = generate_preview_deck("orc")
        assert [card.cost for card in deck] == list(PREVIEW_COST_CURVE)
        assert not any(card.has_taunt for card in deck)

    def test_stats_have_no_jitter(self):
        deck = generate_preview_deck("minotaur")
        last = deck[-1]
        assert last.cost == 8
        assert last.attack == 6
        assert last.health == 10
        assert deck[0].id == "preview_minotaur_common_0"

    def test_is_deterministic(self):
        assert generate_preview_deck("human") == generate_preview_deck("human")

    def test_leaves_global_random_untouched(self):
        random.seed(5)
        expected = random.random()
        random.seed(5)
        generate_preview_deck("undead")
        assert random.random() == expected


class TestInitializeGame:
    """Tests for initial state creation."""

    def test_initial_state(self, new_game):
        state = new_game
        assert state.board == empty_board()
        assert state.current_player == 0
        assert state.turn == 1
        assert state.is_first_turn
        assert not state.game_over
        assert state.winner is None
        assert state.selected_card is None
        assert state.message == "Player 1 Turn: Draw phase - Starting your turn!"
        assert state.log == ("Game started! Player 1 begins.",)

    def test_players_dealt(self, new_game):
        for player, archetype in zip(new_game.players, ("orc", "minotaur")):
            assert player.archetype == archetype
            assert player.health == 30
            assert player.mana == 1
            assert player.mana_capacity == 1
            assert len(player.hand) == 3
            assert len(player.deck) == 12
            assert player.fatigue_damage == 0

    def test_hand_dealt_from_top_of_deck(self):
        rng_a, rng_b = random.Random(11), random.Random(11)
        deck = generate_deck("orc", rng_a, player_index=0)
        state = initialize_game("orc", "human", rng=rng_b)
        assert state.players[0].hand == tuple(reversed(deck[-3:]))
        assert state.players[0].deck == tuple(deck[:-3])
