"""Shared pytest fixtures used across the test suite."""

from typing import Iterator, List

import pytest

from connectfour.debug import DebugLevel, debug
from connectfour.game.controller import GameController
from connectfour.game.events import Renderer
from connectfour.game.player import Player
from connectfour.game.scheduler import ManualScheduler
from connectfour.game.state import GameState


class RecordingRenderer(Renderer):
    """Renderer that keeps every event it receives."""

    def __init__(self) -> None:
        self.events: List[object] = []

    def on_piece_placed(self, event) -> None:
        self.events.append(event)

    def on_turn_changed(self, event) -> None:
        self.events.append(event)

    def on_game_ended(self, event) -> None:
        self.events.append(event)

    def on_collapse_requested(self, event) -> None:
        self.events.append(event)

    def on_board_reset(self, event) -> None:
        self.events.append(event)

    def of_type(self, kind) -> list:
        return [e for e in self.events if isinstance(e, kind)]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture(autouse=True)
def _reset_debug() -> Iterator[None]:
    """Undo logging changes made by CLI runs."""
    yield
    debug.disable_console()
    debug.configure(level=DebugLevel.WARNING, enabled=True, log_file="", components=[])


def make_players(count: int = 2) -> List[Player]:
    return [Player(i, f"#00000{i}") for i in range(1, count + 1)]


@pytest.fixture
def players() -> List[Player]:
    return make_players(2)


@pytest.fixture
def state(players) -> GameState:
    """Empty standard 7x6 game for two players."""
    return GameState(7, 6, players)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def controller(scheduler, renderer) -> GameController:
    """Controller with a two-player roster, a virtual clock and a recorder."""
    ctrl = GameController(settle_delay=1.5, scheduler=scheduler)
    ctrl.subscribe(renderer)
    ctrl.configure_players(["#FE5D9F", "#01308F"])
    return ctrl
