"""
Tests for the turn phases.

Tests:
- Battle targeting, taunt priority and spawn-row overflow
- Draw, burn and escalating fatigue
- Advance, taunt blocking and edge wins
- Win check ordering
"""

from ..engine_core.phases import (
    advance_phase,
    battle_phase,
    check_win_condition,
    collect_units,
    draw_phase,
)
from ..engine_core.state import GameMode
from .conftest import make_card, make_state, make_unit


class TestCollectUnits:
    """Tests for unit processing order."""

    def test_player_one_front_first(self):
        state = make_state({
            (0, 1): make_unit(0, "a"),
            (2, 5): make_unit(0, "b"),
            (1, 0): make_unit(0, "c"),
            (2, 2): make_unit(0, "d"),
            (3, 3): make_unit(1, "enemy"),
        })
        order = [unit.card_id for _, _, unit in collect_units(state.board, 0)]
        assert order == ["d", "b", "c", "a"]

    def test_player_two_front_first(self):
        state = make_state({
            (4, 1): make_unit(1, "a"),
            (2, 3): make_unit(1, "b"),
            (3, 0): make_unit(1, "c"),
        })
        order = [unit.card_id for _, _, unit in collect_units(state.board, 1)]
        assert order == ["b", "c", "a"]


class TestBattlePhase:
    """Tests for the battle phase."""

    def test_attacks_straight_ahead(self):
        state = make_state({
            (1, 3): make_unit(0, "attacker", attack=3, health=2, name="Orc Warrior"),
            (2, 3): make_unit(1, "defender", attack=1, health=5, name="Minotaur Warrior"),
        })
        result = battle_phase(state)

        assert result.unit_at(2, 3).health == 2
        assert result.unit_at(1, 3).health == 2
        assert result.log[-1] == "Turn 1: Orc Warrior attacks Minotaur Warrior at 2,3 for 3 damage!"

    def test_left_diagonal_before_right(self):
        state = make_state({
            (1, 3): make_unit(0, "attacker", attack=1, health=1),
            (2, 2): make_unit(1, "left", health=5),
            (2, 4): make_unit(1, "right", health=5),
        })
        result = battle_phase(state)
        assert result.unit_at(2, 2).health == 4
        assert result.unit_at(2, 4).health == 5

    def test_taunt_overrides_straight(self):
        state = make_state({
            (1, 3): make_unit(0, "attacker", attack=2, health=1),
            (2, 3): make_unit(1, "plain", health=5),
            (2, 4): make_unit(1, "guard", health=5, has_taunt=True),
        })
        result = battle_phase(state)
        assert result.unit_at(2, 3).health == 5
        assert result.unit_at(2, 4).health == 3

    def test_no_target_no_attack(self):
        state = make_state({
            (1, 3): make_unit(0, "attacker", attack=2),
            (3, 3): make_unit(1, "far", health=5),
            (1, 4): make_unit(1, "beside", health=5),
        })
        result = battle_phase(state)
        assert result.board == state.board
        assert result.log == state.log

    def test_friendly_units_not_targeted(self):
        state = make_state({
            (1, 3): make_unit(0, "attacker", attack=2),
            (2, 3): make_unit(0, "friend", health=5),
        })
        assert battle_phase(state).unit_at(2, 3).health == 5

    def test_defeated_unit_removed(self):
        state = make_state({
            (1, 3): make_unit(0, "attacker", attack=4, name="Orc Warrior"),
            (2, 3): make_unit(1, "defender", health=4, name="Human Warrior"),
        })
        result = battle_phase(state)
        assert result.unit_at(2, 3) is None
        assert result.log[-1] == "Turn 1: Human Warrior is defeated!"

    def test_excess_damage_on_spawn_row(self):
        state = make_state({
            (3, 3): make_unit(0, "attacker", attack=5, name="Orc Warrior"),
            (4, 3): make_unit(1, "defender", health=2, name="Minotaur Warrior"),
        })
        result = battle_phase(state)

        assert result.players[1].health == 27
        assert result.unit_at(4, 3) is None
        assert result.log[-3:] == (
            "Turn 1: Excess damage of 3 dealt to Player 2's health!",
            "Turn 1: Orc Warrior attacks Minotaur Warrior at 4,3 for 5 damage!",
            "Turn 1: Minotaur Warrior is defeated!",
        )

    def test_exact_kill_on_spawn_row_has_no_excess(self):
        state = make_state({
            (3, 3): make_unit(0, "attacker", attack=2),
            (4, 3): make_unit(1, "defender", health=2),
        })
        result = battle_phase(state)
        assert result.players[1].health == 30
        assert not any("Excess" in entry for entry in result.log)

    def test_no_excess_outside_spawn_row(self):
        state = make_state({
            (2, 3): make_unit(0, "attacker", attack=9),
            (3, 3): make_unit(1, "defender", health=1),
        })
        assert battle_phase(state).players[1].health == 30

    def test_player_two_attacks_downwards(self):
        state = make_state(
            {
                (1, 3): make_unit(1, "attacker", attack=4),
                (0, 3): make_unit(0, "defender", health=1),
            },
            current_player=1,
        )
        result = battle_phase(state)
        assert result.unit_at(0, 3) is None
        assert result.players[0].health == 27

    def test_dead_target_not_attacked_twice(self):
        state = make_state({
            (3, 2): make_unit(0, "first", attack=3),
            (3, 3): make_unit(0, "second", attack=3),
            (4, 3): make_unit(1, "defender", health=3, name="Lone Defender"),
        })
        result = battle_phase(state)
        assert result.unit_at(4, 3) is None
        attacks = [entry for entry in result.log if "attacks" in entry]
        assert len(attacks) == 1
        assert attacks[0].endswith("at 4,3 for 3 damage!")

    def test_input_state_unchanged(self):
        state = make_state({
            (1, 3): make_unit(0, "attacker", attack=3),
            (2, 3): make_unit(1, "defender", health=5),
        })
        battle_phase(state)
        assert state.unit_at(2, 3).health == 5


class TestDrawPhase:
    """Tests for the draw phase."""

    def test_draws_top_card(self, state_with_hand):
        result = draw_phase(state_with_hand, 0)
        player = result.players[0]
        assert player.hand[-1].id == "deck_1"
        assert len(player.deck) == 1
        assert result.log[-1] == "Turn 1: Player 1 draws Top Card"

    def test_fatigue_escalates(self):
        state = make_state()
        state = draw_phase(state, 1)
        assert state.players[1].fatigue_damage == 1
        assert state.players[1].health == 29
        assert state.log[-1] == "Turn 1: Player 2 takes 1 fatigue damage!"

        state = draw_phase(state, 1)
        state = draw_phase(state, 1)
        assert state.players[1].fatigue_damage == 3
        assert state.players[1].health == 24

    def test_burns_when_hand_full(self):
        hand = tuple(make_card(f"h{i}") for i in range(7))
        state = make_state(p0={"hand": hand, "deck": (make_card("burn_me", name="Burned Card"),)})
        result = draw_phase(state, 0)

        assert result.players[0].hand == hand
        assert result.players[0].deck == ()
        assert result.log[-1] == "Turn 1: Player 1 burns Burned Card (hand full)!"

    def test_full_hand_empty_deck_is_noop(self):
        hand = tuple(make_card(f"h{i}") for i in range(7))
        state = make_state(p0={"hand": hand})
        assert draw_phase(state, 0) is state


class TestAdvancePhase:
    """Tests for the advance phase."""

    def test_moves_forward(self):
        state = make_state({(1, 3): make_unit(0, "runner", name="Orc Warrior")})
        result = advance_phase(state)
        assert result.unit_at(1, 3) is None
        assert result.unit_at(2, 3).card_id == "runner"
        assert result.log[-1] == "Turn 1: Orc Warrior moved to 2,3"

    def test_player_two_moves_down(self):
        state = make_state({(4, 0): make_unit(1, "runner")}, current_player=1)
        assert advance_phase(state).unit_at(3, 0).card_id == "runner"

    def test_blocked_by_occupied_cell(self):
        state = make_state({
            (1, 3): make_unit(0, "runner"),
            (2, 3): make_unit(1, "wall"),
        })
        result = advance_phase(state)
        assert result.unit_at(1, 3).card_id == "runner"
        assert result.log == state.log

    def test_blocked_by_adjacent_taunt(self):
        state = make_state({
            (1, 3): make_unit(0, "runner", name="Orc Warrior"),
            (2, 4): make_unit(1, "guard", has_taunt=True, name="Minotaur Guardian"),
        })
        result = advance_phase(state)
        assert result.unit_at(1, 3).card_id == "runner"
        assert result.log[-1] == (
            "Turn 1: Orc Warrior cannot move due to enemy Taunt unit Minotaur Guardian at 2,4"
        )

    def test_friendly_taunt_does_not_block(self):
        state = make_state({
            (1, 3): make_unit(0, "runner"),
            (2, 4): make_unit(0, "guard", has_taunt=True),
        })
        assert advance_phase(state).unit_at(2, 3).card_id == "runner"

    def test_front_unit_moves_first(self):
        state = make_state({
            (1, 3): make_unit(0, "back"),
            (2, 3): make_unit(0, "front"),
        })
        result = advance_phase(state)
        assert result.unit_at(3, 3).card_id == "front"
        assert result.unit_at(2, 3).card_id == "back"

    def test_reaching_far_edge_wins(self):
        state = make_state({
            (4, 2): make_unit(0, "runner", name="Orc Warrior"),
            (1, 1): make_unit(0, "other"),
        })
        result = advance_phase(state)

        assert result.game_over
        assert result.winner == 0
        assert result.message == "Player 1 Wins!"
        assert result.log[-1] == "Turn 1: Orc Warrior reached enemy spawn! Player 1 Wins!"
        # Units after the winner do not move
        assert result.unit_at(1, 1).card_id == "other"

    def test_ai_reaching_edge(self):
        state = make_state(
            {(0, 2): make_unit(1, "runner")},
            current_player=1,
            game_mode=GameMode.AI,
        )
        result = advance_phase(state)
        assert result.winner == 1
        assert result.message == "AI Wins!"


class TestWinCondition:
    """Tests for the health-based win check."""

    def test_no_winner(self):
        assert check_win_condition(make_state()) is None

    def test_player_one_dead(self):
        win = check_win_condition(make_state(p0={"health": 0}))
        assert win.winner == 1
        assert win.message == "Player 2 Wins!"

    def test_player_two_dead(self):
        win = check_win_condition(make_state(p1={"health": -3}))
        assert win.winner == 0
        assert win.message == "Player 1 Wins!"

    def test_both_dead_goes_to_player_two(self):
        win = check_win_condition(make_state(p0={"health": 0}, p1={"health": 0}))
        assert win.winner == 1

    def test_ai_label(self):
        win = check_win_condition(make_state(p0={"health": 0}, game_mode=GameMode.AI))
        assert win.message == "AI Wins!"
