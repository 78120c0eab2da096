"""
events.py - Notifications sent from the game core to renderers

The controller never draws anything. It emits one of five event kinds and
every subscribed renderer receives them in order.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class PiecePlaced:
    row: int
    column: int
    player_id: int


@dataclass(frozen=True)
class TurnChanged:
    player_id: int


@dataclass(frozen=True)
class GameOutcome:
    """Result of a finished game. ``winner_id`` is None for a tie."""
    winner_id: Optional[int] = None
    winning_line: Tuple[Tuple[int, int], ...] = field(default_factory=tuple)

    @property
    def is_tie(self) -> bool:
        return self.winner_id is None

    @classmethod
    def win(cls, player_id: int, line=()) -> "GameOutcome":
        return cls(winner_id=player_id, winning_line=tuple(tuple(cell) for cell in line))

    @classmethod
    def tie(cls) -> "GameOutcome":
        return cls()


@dataclass(frozen=True)
class GameEnded:
    outcome: GameOutcome


@dataclass(frozen=True)
class CollapseRequested:
    pass


@dataclass(frozen=True)
class BoardReset:
    width: int
    height: int


GameEvent = Union[PiecePlaced, TurnChanged, GameEnded, CollapseRequested, BoardReset]


class Renderer(ABC):
    """Anything that can display a game must accept all five event kinds."""

    @abstractmethod
    def on_piece_placed(self, event: PiecePlaced) -> None: ...

    @abstractmethod
    def on_turn_changed(self, event: TurnChanged) -> None: ...

    @abstractmethod
    def on_game_ended(self, event: GameEnded) -> None: ...

    @abstractmethod
    def on_collapse_requested(self, event: CollapseRequested) -> None:
        """Start the collapse animation; the core frees the board after a delay."""

    @abstractmethod
    def on_board_reset(self, event: BoardReset) -> None: ...

    def handle(self, event: GameEvent) -> None:
        """Route ``event`` to the matching ``on_*`` method."""
        if isinstance(event, PiecePlaced):
            self.on_piece_placed(event)
        elif isinstance(event, TurnChanged):
            self.on_turn_changed(event)
        elif isinstance(event, GameEnded):
            self.on_game_ended(event)
        elif isinstance(event, CollapseRequested):
            self.on_collapse_requested(event)
        elif isinstance(event, BoardReset):
            self.on_board_reset(event)
        else:
            raise TypeError(f"Unknown event type: {type(event).__name__}")
