"""
Tests for bot implementations.

Tests:
- Placement scoring
- Card planning (greedy mana fill)
- Baseline policies
- Personalities
"""

import random

import pytest

from ..bots import (
    BotDecision,
    FirstLegalPolicy,
    GreedyBot,
    PERSONALITIES,
    PlacementEvaluator,
    PlacementWeights,
    RandomPolicy,
    find_best_position,
)
from ..bots.personality import BALANCED, create_random_personality, resolve_personality
from ..bots.policy import greedy_fill
from ..engine_core.state import COLS
from .conftest import make_card, make_state, make_unit


NO_JITTER = PlacementWeights(jitter=0.0)


class TestPlacementEvaluator:
    """Tests for column scoring."""

    def test_prefers_enemy_column(self):
        state = make_state({(1, 2): make_unit(0, "enemy")})
        col = find_best_position(make_card("c"), state.board, player_index=1, weights=NO_JITTER)
        assert col == 2

    def test_closer_enemy_scores_higher(self):
        state = make_state({
            (0, 1): make_unit(0, "far"),
            (3, 5): make_unit(0, "near"),
        })
        ranked = PlacementEvaluator(NO_JITTER).rank_columns(
            make_card("c"), state.board, 1, random.Random(0)
        )
        assert ranked[0].col == 5
        assert ranked[1].col == 1

    def test_heavy_hitter_avoids_allies(self):
        state = make_state({(3, 1): make_unit(1, "ally")})
        heavy = make_card("heavy", attack=6)
        light = make_card("light", attack=2)

        assert find_best_position(heavy, state.board, 1, weights=NO_JITTER) != 1
        assert find_best_position(light, state.board, 1, weights=NO_JITTER) == 1

    def test_only_free_spawn_cells(self):
        units = {(4, col): make_unit(1, f"u{col}") for col in range(COLS - 1)}
        state = make_state(units)
        assert find_best_position(make_card("c"), state.board, 1) == COLS - 1

    def test_full_spawn_row(self):
        units = {(0, col): make_unit(0, f"u{col}") for col in range(COLS)}
        state = make_state(units)
        assert find_best_position(make_card("c"), state.board, 0) is None

    def test_does_not_mutate_board(self):
        state = make_state({(1, 2): make_unit(0, "enemy")})
        board = state.board
        find_best_position(make_card("c"), board, 1)
        assert board == state.board


class TestGreedyFill:
    """Tests for the mana fill helper."""

    def test_skips_cards_that_no_longer_fit(self):
        cards = [make_card("a", cost=3), make_card("b", cost=2), make_card("c", cost=1)]
        assert [c.id for c in greedy_fill(cards, 4)] == ["a", "c"]

    def test_nothing_fits(self):
        assert greedy_fill([make_card("a", cost=5)], 4) == []


class TestGreedyBot:
    """Tests for the default AI."""

    @pytest.fixture
    def ai_state(self):
        hand = (
            make_card("small", cost=1, attack=1, health=1),
            make_card("big", cost=3, attack=3, health=3),
            make_card("mid", cost=2, attack=2, health=2),
            make_card("huge", cost=9, attack=9, health=9),
        )
        return make_state(p1={"hand": hand, "mana": 4, "mana_capacity": 4}, current_player=1)

    def test_plans_highest_value_first(self, ai_state):
        bot = GreedyBot(rng=random.Random(0))
        decision = bot.plan_cards(ai_state, 1)

        assert isinstance(decision, BotDecision)
        assert [c.id for c in decision.cards] == ["big", "small"]
        assert decision.evaluated_cards == 3
        assert decision.evaluation_details["big"] == 18

    def test_card_value(self):
        bot = GreedyBot()
        assert bot.card_value(make_card("x", cost=4, attack=3, health=2)) == 20

    def test_no_playable_cards(self):
        state = make_state(p1={"hand": (make_card("huge", cost=9),)}, current_player=1)
        assert GreedyBot().plan_cards(state, 1).cards == []

    def test_select_position_uses_evaluator(self):
        state = make_state({(2, 6): make_unit(0, "enemy")})
        bot = GreedyBot(personality=PERSONALITIES["balanced"], rng=random.Random(1))
        assert bot.select_position(make_card("c"), state.board, 1) == 6

    def test_same_seed_same_choices(self, ai_state):
        chaotic = PERSONALITIES["chaotic"]
        a = GreedyBot(personality=chaotic, rng=random.Random(3))
        b = GreedyBot(personality=chaotic, rng=random.Random(3))
        assert a.plan_cards(ai_state, 1).cards == b.plan_cards(ai_state, 1).cards
        assert a.select_position(make_card("c"), ai_state.board, 1) == b.select_position(
            make_card("c"), ai_state.board, 1
        )

    def test_name(self):
        assert GreedyBot(personality=PERSONALITIES["aggressive"]).get_name() == "GreedyBot(Aggressive)"


class TestBaselinePolicies:
    """Tests for RandomPolicy and FirstLegalPolicy."""

    def test_first_legal_hand_order(self):
        hand = (make_card("a", cost=2), make_card("b", cost=1), make_card("c", cost=1))
        state = make_state(p0={"hand": hand, "mana": 3})
        decision = FirstLegalPolicy().plan_cards(state, 0)
        assert [c.id for c in decision.cards] == ["a", "b"]

    def test_first_legal_leftmost_column(self):
        state = make_state({(0, 0): make_unit(0, "x"), (0, 1): make_unit(0, "y")})
        assert FirstLegalPolicy().select_position(make_card("c"), state.board, 0) == 2

    def test_random_policy_affordable_only(self):
        hand = (make_card("a", cost=1), make_card("b", cost=5))
        state = make_state(p0={"hand": hand, "mana": 1})
        decision = RandomPolicy(seed=1).plan_cards(state, 0)
        assert [c.id for c in decision.cards] == ["a"]

    def test_random_policy_seeded(self):
        state = make_state()
        a = [RandomPolicy(seed=4).select_position(make_card("c"), state.board, 1) for _ in range(3)]
        b = [RandomPolicy(seed=4).select_position(make_card("c"), state.board, 1) for _ in range(3)]
        assert a == b

    def test_random_policy_full_row(self):
        units = {(4, col): make_unit(1, f"u{col}") for col in range(COLS)}
        assert RandomPolicy(seed=0).select_position(make_card("c"), make_state(units).board, 1) is None


class TestPersonality:
    """Tests for personalities."""

    def test_presets(self):
        assert set(PERSONALITIES) == {"balanced", "aggressive", "defensive", "chaotic"}
        assert PERSONALITIES["aggressive"].attack_bias > PERSONALITIES["defensive"].attack_bias

    def test_random_personality_reproducible(self):
        a = create_random_personality(random.Random(12))
        b = create_random_personality(random.Random(12))
        assert a.weights == b.weights
        assert a.attack_bias == b.attack_bias
        assert 0 <= a.randomness <= 1

    def test_random_personality_stays_near_base(self):
        varied = create_random_personality(random.Random(3), variance=0.2)
        assert 0.8 * BALANCED.attack_bias <= varied.attack_bias <= 1.2 * BALANCED.attack_bias
        assert varied.weights.heavy_attack_threshold == BALANCED.weights.heavy_attack_threshold
        assert varied.metadata["base"] == "Balanced"

    def test_resolve_personality(self):
        rng = random.Random(0)
        assert resolve_personality("Aggressive", rng) is PERSONALITIES["aggressive"]
        assert resolve_personality(None, rng) is PERSONALITIES["balanced"]
        assert resolve_personality("random", rng).name == "Random"
        assert resolve_personality("sleepy", rng) is None
