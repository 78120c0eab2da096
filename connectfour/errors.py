"""
errors.py - Exceptions raised by the Connect Four core

Only API misuse is an error. A click on a full column or after the game has
ended is a normal, ignored move and never raises.
"""


class Connect4Error(Exception):
    """Base class for Connect Four errors."""


class InvalidConfiguration(Connect4Error, ValueError):
    """Board dimensions or roster size cannot host a game of four-in-a-row."""


class InvalidMove(Connect4Error, ValueError):
    """A column index outside the board was passed to the game."""

    def __init__(self, column, width: int):
        self.column = column
        self.width = width
        super().__init__(f"Column {column!r} is outside the board (0-{width - 1})")
