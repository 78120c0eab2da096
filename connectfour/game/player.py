"""
player.py - Players and turn rotation

A roster is an ordered list of players; the turn order walks it with an
index cursor and wraps from the last player back to the first.
"""

from dataclasses import dataclass
from typing import Iterator, List, Sequence

from connectfour.debug import debug
from connectfour.errors import InvalidConfiguration
from connectfour.utils import MIN_PLAYERS, glyph_for


@dataclass(frozen=True)
class Player:
    """A participant with a 1-based ordinal id and a display colour."""
    id: int
    color: str

    @property
    def glyph(self) -> str:
        return glyph_for(self.id)

    def __str__(self) -> str:
        return f"Player {self.id}"


class TurnOrder:
    """Cyclic sequence over a fixed roster."""

    def __init__(self, players: Sequence[Player]):
        players = tuple(players)
        if len(players) < MIN_PLAYERS:
            raise InvalidConfiguration(
                f"At least {MIN_PLAYERS} players are required, got {len(players)}")
        ids = [player.id for player in players]
        if len(set(ids)) != len(ids):
            raise InvalidConfiguration(f"Player ids must be unique, got {ids}")
        self._players = players
        self._index = 0

    @property
    def players(self) -> List[Player]:
        return list(self._players)

    @property
    def current(self) -> Player:
        return self._players[self._index]

    @property
    def first(self) -> Player:
        return self._players[0]

    def successor(self, player: Player) -> Player:
        """The player who moves after ``player``."""
        index = self._players.index(player)
        return self._players[(index + 1) % len(self._players)]

    def advance(self) -> Player:
        """Move the cursor to the next player and return them."""
        self._index = (self._index + 1) % len(self._players)
        debug.trace(f"Turn passes to {self.current}", "state")
        return self.current

    def reset(self):
        """Point the cursor back at the first player."""
        self._index = 0

    def __len__(self) -> int:
        return len(self._players)

    def __iter__(self) -> Iterator[Player]:
        return iter(self._players)
