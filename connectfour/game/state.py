"""
state.py - Authoritative board and turn state for Connect Four

This module implements the GameState class which owns the grid, knows whose
turn it is, and decides after every accepted move whether the game continues,
has been won, or is tied.
"""

from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from connectfour.debug import debug
from connectfour.errors import InvalidConfiguration, InvalidMove
from connectfour.game.player import Player, TurnOrder
from connectfour.utils import (CONNECT_N, DIRECTION_VECTORS, EMPTY, MIN_HEIGHT,
                               MIN_WIDTH, GameStatus, MoveResult,
                               render_board_ascii)


class DropResult(NamedTuple):
    """Outcome of ``GameState.drop_piece``.

    ``moved`` is False for a full column or a finished game; the other fields
    are only meaningful when a piece was actually placed.
    """
    moved: bool
    row: Optional[int] = None
    column: Optional[int] = None
    result: Optional[MoveResult] = None


IGNORED = DropResult(moved=False)


def _is_index(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


class GameState:
    """
    Board, roster and current player for one game.

    The board is a ``height x width`` integer array with row 0 at the top.
    A cell holds 0 when empty or the id of the player who owns it.
    """

    def __init__(self, width: int, height: int, players: Sequence[Player]):
        """
        Create an empty board with the first player to move.

        Raises:
            InvalidConfiguration: Board smaller than 4x4 or fewer than 2 players
        """
        if not _is_index(width) or width < MIN_WIDTH:
            raise InvalidConfiguration(f"Board width must be at least {MIN_WIDTH}, got {width!r}")
        if not _is_index(height) or height < MIN_HEIGHT:
            raise InvalidConfiguration(f"Board height must be at least {MIN_HEIGHT}, got {height!r}")
        self._turns = TurnOrder(players)

        self.width = int(width)
        self.height = int(height)
        debug.debug(f"Initializing {self.width}x{self.height} game for "
                    f"{len(self._turns)} players", "state")
        self.grid = np.zeros((self.height, self.width), dtype=int)
        self.winner = False
        self.status = GameStatus.IN_PROGRESS

    def reset(self):
        """Clear the board and give the move back to the first player."""
        debug.debug("Resetting game state", "state")
        self.grid.fill(EMPTY)
        self.winner = False
        self.status = GameStatus.IN_PROGRESS
        self._turns.reset()

    @property
    def players(self) -> List[Player]:
        """
        Get the roster in turn order.

        Returns:
            Copy of the players passed at construction
        """
        return self._turns.players

    @property
    def current_player(self) -> Player:
        """The player whose piece the next ``drop_piece`` places."""
        return self._turns.current

    @property
    def outcome_winner(self) -> Optional[Player]:
        """The player who won, or None while playing or after a tie."""
        if self.status == GameStatus.WON:
            return self.current_player
        return None

    def lowest_empty_row(self, column: int) -> Optional[int]:
        """
        Find where a piece dropped into ``column`` would land.

        Args:
            column: Column index (0-indexed)

        Returns:
            The largest empty row index, or None if the column is full

        Raises:
            InvalidMove: If ``column`` is not in ``[0, width)``
        """
        if not _is_index(column) or not 0 <= column < self.width:
            debug.warning(f"Rejected column {column!r}", "state")
            raise InvalidMove(column, self.width)
        empty = np.flatnonzero(self.grid[:, column] == EMPTY)
        if empty.size == 0:
            return None
        return int(empty[-1])

    def valid_columns(self) -> List[int]:
        """Columns that can still take a piece (empty once the game is over)."""
        if self.winner:
            return []
        return [int(col) for col in np.flatnonzero(self.grid[0] == EMPTY)]

    def drop_piece(self, column: int) -> DropResult:
        """
        Drop the current player's piece into ``column``.

        Finished games and full columns are ignored rather than treated as
        errors. The turn is not advanced here.

        Args:
            column: Column index (0-indexed)

        Returns:
            DropResult with the landing cell and MoveResult, or an ignored result

        Raises:
            InvalidMove: If ``column`` is outside the board
        """
        if self.winner:
            debug.debug(f"Ignoring column {column}: game is over", "state")
            return IGNORED

        row = self.lowest_empty_row(column)
        if row is None:
            debug.debug(f"Ignoring column {column}: column is full", "state")
            return IGNORED

        player = self.current_player
        self.grid[row, column] = player.id
        debug.trace(f"{player} placed at ({row}, {column})", "state")

        debug.start_timer("win_check")
        if self.check_for_win():
            result = MoveResult.WIN
            self.status = GameStatus.WON
            debug.info(f"{player} wins after move at ({row}, {column})", "state")
        elif self.check_for_tie():
            result = MoveResult.TIE
            self.status = GameStatus.TIED
            debug.info("Game ends in a tie", "state")
        else:
            result = MoveResult.CONTINUE
        debug.end_timer("win_check", "state")

        if result.is_game_over():
            self.winner = True
        return DropResult(moved=True, row=row, column=int(column), result=result)

    def _windows(self):
        """Yield every in-bounds run of CONNECT_N cells as a list of (row, col)."""
        for row in range(self.height):
            for col in range(self.width):
                for dr, dc in DIRECTION_VECTORS.values():
                    end_row = row + dr * (CONNECT_N - 1)
                    end_col = col + dc * (CONNECT_N - 1)
                    if not (0 <= end_row < self.height and 0 <= end_col < self.width):
                        continue
                    yield [(row + dr * i, col + dc * i) for i in range(CONNECT_N)]

    def winning_line(self) -> List[Tuple[int, int]]:
        """
        Find a run of four cells owned by the current player.

        Cells are scanned row by row, each tried as the start of a
        horizontal, vertical and both diagonal runs.

        Returns:
            The first matching run as (row, col) pairs, or an empty list
        """
        player_id = self.current_player.id
        for cells in self._windows():
            if all(self.grid[r, c] == player_id for r, c in cells):
                return cells
        return []

    def check_for_win(self) -> bool:
        """
        Check whether the current player has four in a row.

        Returns:
            True if any horizontal, vertical or diagonal run is theirs
        """
        return bool(self.winning_line())

    def check_for_tie(self) -> bool:
        """
        Check whether the board is full.

        Only meaningful once ``check_for_win`` has returned False.

        Returns:
            True when no cell is empty
        """
        return bool(np.all(self.grid != EMPTY))

    def advance_turn(self) -> Player:
        """
        Hand the move to the next player in the roster.

        Returns:
            The new current player
        """
        player = self._turns.advance()
        debug.debug(f"Switching to {player}", "state")
        return player

    def mark_terminal(self):
        """Stop accepting moves without recording a result."""
        self.winner = True

    def get_state(self) -> np.ndarray:
        """
        Get the current board.

        Returns:
            Copy of the grid, safe to modify
        """
        return self.grid.copy()

    def render(self) -> str:
        """
        Render the board as a string.

        Returns:
            ASCII drawing of the board with column numbers
        """
        return render_board_ascii(self.grid)

    def __str__(self) -> str:
        """String representation of the board."""
        return self.render()
