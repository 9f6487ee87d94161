"""
Game State - Immutable value types for the lane battle.

Design principles:
- Immutable: every field is a frozen dataclass or a tuple, so a new
  GameState never shares mutable structure with the one it came from
- All transitions return a new state via _copy_with()
- Board is a fixed ROWS x COLS grid of optional Units
- A Unit is a Card placed on the board (composition, not inheritance)
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


# Game constants
ROWS = 5
COLS = 7
STARTING_HEALTH = 30
STARTING_HAND_SIZE = 3
STARTING_MANA = 1
MAX_MANA = 10
HAND_SIZE_LIMIT = 7
FATIGUE_DAMAGE = 1
DECK_SIZE = 15


class GameMode(Enum):
    """Who controls player 2."""
    ONE_VS_ONE = "1v1"
    AI = "ai"


@dataclass(frozen=True)
class Card:
    """
    A unit card template.

    Generated once per deck and never mutated afterwards.
    """
    id: str
    name: str
    archetype: str
    cost: int
    attack: int
    health: int
    max_health: int
    has_taunt: bool = False
    description: str = ""


@dataclass(frozen=True)
class Unit:
    """
    A card placed on the board.

    Carries its owner and its current (damaged) health; everything else
    is read through the underlying card.
    """
    card: Card
    player_index: int
    health: int

    @classmethod
    def from_card(cls, card: Card, player_index: int) -> Unit:
        return cls(card=card, player_index=player_index, health=card.health)

    @property
    def card_id(self) -> str:
        return self.card.id

    @property
    def name(self) -> str:
        return self.card.name

    @property
    def attack(self) -> int:
        return self.card.attack

    @property
    def max_health(self) -> int:
        return self.card.max_health

    @property
    def has_taunt(self) -> bool:
        return self.card.has_taunt

    def with_health(self, health: int) -> Unit:
        """Return a copy of this unit with new current health."""
        return Unit(card=self.card, player_index=self.player_index, health=health)


Board = tuple[tuple[Optional[Unit], ...], ...]


def empty_board() -> Board:
    return tuple(tuple(None for _ in range(COLS)) for _ in range(ROWS))


def thaw_board(board: Board) -> list[list[Optional[Unit]]]:
    """Mutable working copy of a board, for use inside a single phase."""
    return [list(row) for row in board]


def freeze_board(grid: list[list[Optional[Unit]]]) -> Board:
    return tuple(tuple(row) for row in grid)


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < ROWS and 0 <= col < COLS


def spawn_row(player_index: int) -> int:
    """Home row where a player places new units."""
    return 0 if player_index == 0 else ROWS - 1


def forward(player_index: int) -> int:
    """Row step towards the opponent."""
    return 1 if player_index == 0 else -1


@dataclass(frozen=True)
class PlayerState:
    """
    State for a single player.

    deck is ordered with the top of the deck at the END of the tuple.
    """
    player_id: int
    archetype: str
    health: int = STARTING_HEALTH
    mana: int = STARTING_MANA
    mana_capacity: int = STARTING_MANA
    deck: tuple[Card, ...] = ()
    hand: tuple[Card, ...] = ()
    fatigue_damage: int = 0

    def find_in_hand(self, card_id: str) -> Card | None:
        """Get a card in hand by ID."""
        for card in self.hand:
            if card.id == card_id:
                return card
        return None

    def _copy_with(self, **kwargs) -> PlayerState:
        """Create a copy with some fields replaced."""
        return PlayerState(
            player_id=kwargs.get("player_id", self.player_id),
            archetype=kwargs.get("archetype", self.archetype),
            health=kwargs.get("health", self.health),
            mana=kwargs.get("mana", self.mana),
            mana_capacity=kwargs.get("mana_capacity", self.mana_capacity),
            deck=tuple(kwargs.get("deck", self.deck)),
            hand=tuple(kwargs.get("hand", self.hand)),
            fatigue_damage=kwargs.get("fatigue_damage", self.fatigue_damage),
        )


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    board: Board
    players: tuple[PlayerState, PlayerState]

    current_player: int = 0
    turn: int = 1
    game_over: bool = False
    winner: int | None = None

    # Card picked from hand, waiting for a spawn cell
    selected_card: Card | None = None

    # Append-only, human readable
    log: tuple[str, ...] = ()

    is_first_turn: bool = True
    is_processing_ai: bool = False
    message: str = ""
    # Reserved for host faults; the rules engine never sets it
    error: str | None = None

    game_mode: GameMode = GameMode.ONE_VS_ONE

    @property
    def active_player(self) -> PlayerState:
        """Get the player whose turn it is."""
        return self.players[self.current_player]

    def unit_at(self, row: int, col: int) -> Unit | None:
        if not in_bounds(row, col):
            return None
        return self.board[row][col]

    def player_label(self, player_index: int) -> str:
        """Display name used in prompts and win messages."""
        if player_index == 1 and self.game_mode == GameMode.AI:
            return "AI"
        return f"Player {player_index + 1}"

    def with_player(self, player: PlayerState) -> GameState:
        """Return new state with updated player."""
        new_players = tuple(
            player if p.player_id == player.player_id else p
            for p in self.players
        )
        return self._copy_with(players=new_players)

    def with_log(self, *entries: str) -> GameState:
        """Return new state with entries appended to the log."""
        return self._copy_with(log=self.log + entries)

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return GameState(
            board=kwargs.get("board", self.board),
            players=tuple(kwargs.get("players", self.players)),
            current_player=kwargs.get("current_player", self.current_player),
            turn=kwargs.get("turn", self.turn),
            game_over=kwargs.get("game_over", self.game_over),
            winner=kwargs.get("winner", self.winner),
            selected_card=kwargs.get("selected_card", self.selected_card),
            log=tuple(kwargs.get("log", self.log)),
            is_first_turn=kwargs.get("is_first_turn", self.is_first_turn),
            is_processing_ai=kwargs.get("is_processing_ai", self.is_processing_ai),
            message=kwargs.get("message", self.message),
            error=kwargs.get("error", self.error),
            game_mode=kwargs.get("game_mode", self.game_mode),
        )
