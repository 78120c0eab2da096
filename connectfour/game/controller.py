"""
controller.py - Game lifecycle and renderer notification

This module provides the GameController, the only object a user interface
talks to. It builds rosters, owns the active GameState, turns accepted moves
into renderer events, and makes sure a new board only appears once the old
one has finished collapsing.
"""

from enum import Enum, auto
from typing import List, Optional, Sequence

from connectfour.debug import debug
from connectfour.errors import InvalidConfiguration
from connectfour.game.events import (BoardReset, CollapseRequested, GameEnded,
                                     GameEvent, GameOutcome, PiecePlaced,
                                     Renderer, TurnChanged)
from connectfour.game.player import Player
from connectfour.game.scheduler import Scheduler
from connectfour.game.state import IGNORED, DropResult, GameState
from connectfour.utils import (DEFAULT_HEIGHT, DEFAULT_WIDTH, MAX_PLAYERS,
                               MIN_PLAYERS, SETTLE_DELAY, MoveResult,
                               default_color)


class ControllerPhase(Enum):
    IDLE = auto()            # no board on screen
    PLAYING = auto()
    AWAITING_RESET = auto()  # game won or tied, board still shown
    TEARING_DOWN = auto()    # collapse animation running


class GameController:
    """
    Orchestrates games for a set of renderers.

    Args:
        max_players: Largest roster ``configure_players`` accepts
        settle_delay: Seconds between a collapse request and the board being freed
        scheduler: Source of deferred callbacks (a polling ``Scheduler`` by default)
    """

    def __init__(self, max_players: int = MAX_PLAYERS,
                 settle_delay: float = SETTLE_DELAY,
                 scheduler: Optional[Scheduler] = None):
        if max_players < MIN_PLAYERS:
            raise InvalidConfiguration(
                f"max_players must be at least {MIN_PLAYERS}, got {max_players}")
        self.max_players = max_players
        self.settle_delay = settle_delay
        self.scheduler = scheduler if scheduler is not None else Scheduler()

        self._renderers: List[Renderer] = []
        self._roster: List[Player] = []
        self._game: Optional[GameState] = None
        self._pending: Optional[GameState] = None
        self._setting_up = False
        self._phase = ControllerPhase.IDLE

    # Properties

    @property
    def game(self) -> Optional[GameState]:
        """The active game, or None between games and after teardown."""
        return self._game

    @property
    def phase(self) -> ControllerPhase:
        """Where the controller is in the start/play/collapse cycle."""
        return self._phase

    @property
    def roster(self) -> List[Player]:
        """
        Get the configured players.

        Returns:
            Copy of the roster built by ``configure_players``
        """
        return list(self._roster)

    @property
    def setting_up(self) -> bool:
        """True while a new game waits for the previous one to tear down."""
        return self._setting_up

    @property
    def current_player(self) -> Optional[Player]:
        """The player to move in the active game, or None without one."""
        if self._game is None:
            return None
        return self._game.current_player

    # Renderer subscription

    def subscribe(self, renderer: Renderer):
        """
        Start sending events to ``renderer``.

        Args:
            renderer: Receiver of every later event; subscribing twice has no effect
        """
        if renderer not in self._renderers:
            self._renderers.append(renderer)

    def unsubscribe(self, renderer: Renderer):
        """
        Stop sending events to ``renderer``.

        Args:
            renderer: A previously subscribed renderer; unknown renderers are ignored
        """
        if renderer in self._renderers:
            self._renderers.remove(renderer)

    # Setup

    def configure_players(self, color_assignments: Sequence[Optional[str]]) -> List[Player]:
        """
        Build the roster from an ordered list of colours.

        Ids are assigned 1..N in list order; a None entry takes the default
        colour of its slot.

        Raises:
            InvalidConfiguration: If N is outside ``[2, max_players]``
        """
        count = len(color_assignments)
        if not MIN_PLAYERS <= count <= self.max_players:
            debug.warning(f"Rejected roster of {count} players", "controller")
            raise InvalidConfiguration(
                f"Between {MIN_PLAYERS} and {self.max_players} players are "
                f"required, got {count}")
        self._roster = [
            Player(id=index, color=color or default_color(index))
            for index, color in enumerate(color_assignments, start=1)
        ]
        debug.debug(f"Configured roster: {self._roster}", "controller")
        return self.roster

    def start_new_game(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT,
                       roster: Optional[Sequence[Player]] = None) -> bool:
        """
        Start a game, replacing the active one once it has collapsed.

        Returns:
            False if another start is still waiting for its board, True otherwise

        Raises:
            InvalidConfiguration: Bad dimensions or roster; nothing is changed
        """
        if self._setting_up:
            debug.warning("New game requested while one is being set up", "controller")
            return False

        players = list(roster) if roster is not None else self.roster
        if len(players) > self.max_players:
            raise InvalidConfiguration(
                f"At most {self.max_players} players are allowed, got {len(players)}")
        ids = [player.id for player in players]
        if ids != list(range(1, len(players) + 1)):
            raise InvalidConfiguration(f"Player ids must be 1..{len(players)} in order, got {ids}")
        new_game = GameState(width, height, players)

        if self._game is None:
            self._activate(new_game)
            return True

        debug.info("Queueing new game until the current board is torn down", "controller")
        self._pending = new_game
        self._setting_up = True
        if self._phase != ControllerPhase.TEARING_DOWN:
            self.end_game_and_collapse()
        return True

    def reset_game(self) -> bool:
        """Clear the active board in place, keeping roster and dimensions."""
        if self._game is None or self._phase == ControllerPhase.TEARING_DOWN:
            return False
        self._game.reset()
        self._phase = ControllerPhase.PLAYING
        self._emit(BoardReset(self._game.width, self._game.height))
        self._emit(TurnChanged(self._game.current_player.id))
        return True

    # Play

    def handle_column_select(self, column: int) -> DropResult:
        """
        Play the current player's piece in ``column`` and notify renderers.

        Raises:
            InvalidMove: If ``column`` is outside the board
        """
        game = self._game
        if game is None or self._phase == ControllerPhase.TEARING_DOWN:
            debug.debug(f"Ignoring column {column}: no active game", "controller")
            return IGNORED

        outcome = game.drop_piece(column)
        if not outcome.moved:
            return outcome

        mover = game.current_player
        self._emit(PiecePlaced(outcome.row, outcome.column, mover.id))

        if outcome.result == MoveResult.WIN:
            self._phase = ControllerPhase.AWAITING_RESET
            self._emit(GameEnded(GameOutcome.win(mover.id, game.winning_line())))
        elif outcome.result == MoveResult.TIE:
            self._phase = ControllerPhase.AWAITING_RESET
            self._emit(GameEnded(GameOutcome.tie()))
        else:
            next_player = game.advance_turn()
            self._emit(TurnChanged(next_player.id))
        return outcome

    # Teardown

    def end_game_and_collapse(self) -> bool:
        """
        Start tearing down the active board.

        Renderers get ``CollapseRequested`` immediately; the board is released
        ``settle_delay`` seconds later, and any queued game starts then.
        """
        if self._game is None or self._phase == ControllerPhase.TEARING_DOWN:
            return False
        debug.debug("Collapsing active game", "controller")
        self._game.mark_terminal()
        self._phase = ControllerPhase.TEARING_DOWN
        self._emit(CollapseRequested())
        self.scheduler.call_later(self.settle_delay, self._finish_teardown)
        return True

    def _finish_teardown(self):
        debug.debug("Teardown complete", "controller")
        self._game = None
        self._phase = ControllerPhase.IDLE
        pending, self._pending = self._pending, None
        self._setting_up = False
        if pending is not None:
            self._activate(pending)

    def _activate(self, game: GameState):
        self._game = game
        self._phase = ControllerPhase.PLAYING
        debug.info(f"Started {game.width}x{game.height} game with "
                   f"{len(game.players)} players", "controller")
        self._emit(BoardReset(game.width, game.height))
        self._emit(TurnChanged(game.current_player.id))

    def _emit(self, event: GameEvent):
        for renderer in list(self._renderers):
            renderer.handle(event)
