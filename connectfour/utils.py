"""
utils.py - Constants, enumerations and helpers shared by the Connect Four core

This module collects the tunable numbers of the game (default board size,
player limits, teardown delay), the enumerations used to report move results,
and the ASCII board renderer used by logging and the terminal interface.
"""

from enum import Enum, auto
from typing import Dict, Optional, Sequence, Tuple

import numpy as np

# Board geometry
DEFAULT_WIDTH = 7
DEFAULT_HEIGHT = 6
MIN_WIDTH = 4
MIN_HEIGHT = 4
CONNECT_N = 4  # Number of pieces in a row to win

# Roster limits
MIN_PLAYERS = 2
MAX_PLAYERS = 4

# Seconds the renderer is given to animate a collapsing board
SETTLE_DELAY = 1.5

EMPTY = 0

DEFAULT_COLORS: Dict[int, str] = {
    1: "#FE5D9F",
    2: "#01308F",
    3: "#FFFFFF",
    4: "#000000",
}

# Glyphs used for the ASCII board, indexed by player id
PLAYER_GLYPHS = " XO#@%&*"


class MoveResult(Enum):
    """What an accepted move did to the game."""
    CONTINUE = "continue"
    WIN = "win"
    TIE = "tie"

    def is_game_over(self) -> bool:
        return self != MoveResult.CONTINUE


class GameStatus(Enum):
    """Lifecycle of a single game."""
    IN_PROGRESS = auto()
    WON = auto()
    TIED = auto()

    def is_game_over(self) -> bool:
        return self != GameStatus.IN_PROGRESS


class Direction(Enum):
    """Directions scanned by win detection, starting from a line's first cell."""
    HORIZONTAL = auto()
    VERTICAL = auto()
    DIAGONAL_DOWN_RIGHT = auto()
    DIAGONAL_DOWN_LEFT = auto()


# (row, col) step for each direction; row 0 is the top of the board
DIRECTION_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.HORIZONTAL: (0, 1),
    Direction.VERTICAL: (1, 0),
    Direction.DIAGONAL_DOWN_RIGHT: (1, 1),
    Direction.DIAGONAL_DOWN_LEFT: (1, -1),
}


def default_color(player_id: int) -> str:
    """Default display colour for a 1-based player slot."""
    return DEFAULT_COLORS.get(player_id, "#808080")


def glyph_for(player_id: int) -> str:
    """Single character used to draw ``player_id`` on the ASCII board."""
    if 0 <= player_id < len(PLAYER_GLYPHS):
        return PLAYER_GLYPHS[player_id]
    return str(player_id % 10)


def render_board_ascii(grid: np.ndarray,
                       highlight: Optional[Sequence[Tuple[int, int]]] = None) -> str:
    """
    Render a board as ASCII art.

    Args:
        grid: 2D array of player ids (0 for empty)
        highlight: Cells to mark with ``*`` instead of the player glyph

    Returns:
        Multi-line string with column numbers underneath
    """
    height, width = grid.shape
    marked = set(highlight or ())
    border = "|" + "-" * (width * 2 - 1) + "|"
    lines = [border]
    for row in range(height):
        cells = []
        for col in range(width):
            if (row, col) in marked:
                cells.append("*")
            else:
                cells.append(glyph_for(int(grid[row, col])))
        lines.append("|" + " ".join(cells) + "|")
    lines.append(border)
    lines.append("|" + " ".join(str(col % 10) for col in range(width)) + "|")
    return "\n".join(lines)
