"""
Turn Phases - Battle, draw, advance and win detection.

Each phase is a pure function from GameState to GameState. Inside a
phase the board is thawed into a working grid so units can be moved
and removed in order; the grid is frozen again before returning.

Unit processing order (battle and advance):
    player 0: descending row, player 1: ascending row, i.e. the units
    closest to the front line act first. Within a row, column ascending.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from .state import (
    ROWS,
    HAND_SIZE_LIMIT,
    FATIGUE_DAMAGE,
    Board,
    GameState,
    Unit,
    forward,
    freeze_board,
    in_bounds,
    spawn_row,
    thaw_board,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WinResult:
    """Outcome of a win check."""
    winner: int
    message: str


def collect_units(board: Board, player_index: int) -> list[tuple[int, int, Unit]]:
    """All (row, col, unit) for a player, in processing order."""
    units = [
        (row, col, unit)
        for row, cells in enumerate(board)
        for col, unit in enumerate(cells)
        if unit is not None and unit.player_index == player_index
    ]
    # sorted() is stable, so same-row units keep column order
    if player_index == 0:
        return sorted(units, key=lambda entry: -entry[0])
    return sorted(units, key=lambda entry: entry[0])


def _select_target(
    grid: list[list[Unit | None]],
    row: int,
    col: int,
    player_index: int,
) -> tuple[int, int, Unit] | None:
    """
    Pick the unit an attacker at (row, col) hits.

    Candidates in order: straight ahead, diagonal-left, diagonal-right.
    The first enemy taunt unit among them is forced; otherwise the first
    enemy at all.
    """
    ahead = row + forward(player_index)
    candidates = [(ahead, col), (ahead, col - 1), (ahead, col + 1)]

    targets = []
    for r, c in candidates:
        if not in_bounds(r, c):
            continue
        unit = grid[r][c]
        if unit is not None and unit.player_index != player_index:
            targets.append((r, c, unit))

    if not targets:
        return None
    for target in targets:
        if target[2].has_taunt:
            return target
    return targets[0]


def battle_phase(state: GameState) -> GameState:
    """
    Every unit of the current player attacks once.

    A lethal hit on a unit standing on the opponent's spawn row carries
    the excess damage through to the opponent's health.
    """
    acting = state.current_player
    opponent = 1 - acting
    opponent_spawn = spawn_row(opponent)
    turn = state.turn

    grid = thaw_board(state.board)
    players = list(state.players)
    log = list(state.log)

    for row, col, unit in collect_units(state.board, acting):
        if grid[row][col] is not unit:
            continue

        target = _select_target(grid, row, col, acting)
        if target is None:
            continue

        t_row, t_col, defender = target
        damage = unit.attack
        remaining = defender.health - damage

        if t_row == opponent_spawn and remaining <= 0:
            excess = damage - defender.health
            if excess > 0:
                foe = players[opponent]
                players[opponent] = foe._copy_with(health=foe.health - excess)
                log.append(
                    f"Turn {turn}: Excess damage of {excess} dealt to "
                    f"Player {opponent + 1}'s health!"
                )

        log.append(
            f"Turn {turn}: {unit.name} attacks {defender.name} at "
            f"{t_row},{t_col} for {damage} damage!"
        )

        if remaining <= 0:
            grid[t_row][t_col] = None
            log.append(f"Turn {turn}: {defender.name} is defeated!")
        else:
            grid[t_row][t_col] = defender.with_health(remaining)

    return state._copy_with(board=freeze_board(grid), players=players, log=log)


def draw_phase(state: GameState, player_index: int) -> GameState:
    """
    Draw the top card of the deck, burn it, or take fatigue.

    - hand below limit, deck non-empty: draw
    - hand below limit, deck empty: fatigue grows by one and is dealt
    - hand full, deck non-empty: top card is burned
    - hand full, deck empty: nothing happens
    """
    player = state.players[player_index]
    turn = state.turn
    label = f"Player {player_index + 1}"

    if len(player.hand) < HAND_SIZE_LIMIT:
        if player.deck:
            drawn = player.deck[-1]
            player = player._copy_with(hand=player.hand + (drawn,), deck=player.deck[:-1])
            entry = f"Turn {turn}: {label} draws {drawn.name}"
        else:
            fatigue = player.fatigue_damage + FATIGUE_DAMAGE
            player = player._copy_with(
                fatigue_damage=fatigue,
                health=player.health - fatigue,
            )
            entry = f"Turn {turn}: {label} takes {fatigue} fatigue damage!"
            logger.debug("%s fatigue %d, health now %d", label, fatigue, player.health)
    elif player.deck:
        burned = player.deck[-1]
        player = player._copy_with(deck=player.deck[:-1])
        entry = f"Turn {turn}: {label} burns {burned.name} (hand full)!"
    else:
        return state

    return state.with_player(player).with_log(entry)


def _blocking_taunt(
    grid: list[list[Unit | None]],
    row: int,
    col: int,
    player_index: int,
) -> tuple[int, int, Unit] | None:
    """First enemy taunt unit orthogonally adjacent to (row, col), if any."""
    for r, c in ((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)):
        if not in_bounds(r, c):
            continue
        unit = grid[r][c]
        if unit is not None and unit.player_index != player_index and unit.has_taunt:
            return r, c, unit
    return None


def advance_phase(state: GameState) -> GameState:
    """
    Every unit of the current player steps one row forward.

    Stepping off the far edge wins the game on the spot. A unit cannot
    enter a cell that touches an enemy taunt unit. Units only ever look
    at the single cell straight ahead.
    """
    acting = state.current_player
    step = forward(acting)
    turn = state.turn

    grid = thaw_board(state.board)
    log = list(state.log)

    for row, col, unit in collect_units(state.board, acting):
        if grid[row][col] is not unit:
            continue
        new_row = row + step

        if new_row >= ROWS or new_row < 0:
            message = f"{state.player_label(acting)} Wins!"
            log.append(f"Turn {turn}: {unit.name} reached enemy spawn! {message}")
            logger.debug("%s reached the far edge from %d,%d", unit.name, row, col)
            return state._copy_with(
                board=freeze_board(grid),
                log=log,
                game_over=True,
                winner=acting,
                message=message,
            )

        if grid[new_row][col] is not None:
            continue

        blocker = _blocking_taunt(grid, new_row, col, acting)
        if blocker is not None:
            b_row, b_col, taunt_unit = blocker
            log.append(
                f"Turn {turn}: {unit.name} cannot move due to enemy Taunt unit "
                f"{taunt_unit.name} at {b_row},{b_col}"
            )
            continue

        grid[new_row][col] = unit
        grid[row][col] = None
        log.append(f"Turn {turn}: {unit.name} moved to {new_row},{col}")

    return state._copy_with(board=freeze_board(grid), log=log)


def check_win_condition(state: GameState) -> WinResult | None:
    """Health-based win check. Player 0 is checked first."""
    if state.players[0].health <= 0:
        return WinResult(winner=1, message=f"{state.player_label(1)} Wins!")
    if state.players[1].health <= 0:
        return WinResult(winner=0, message=f"{state.player_label(0)} Wins!")
    return None
