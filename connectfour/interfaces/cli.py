"""
cli.py - Command-line interface for Connect Four

This module provides a terminal renderer that prints the board as the
controller reports moves, a hot-seat play loop for two to four players at
one keyboard, and a benchmark of random games.
"""

import argparse
import sys
import time
from typing import Callable, Dict, List, Optional, Sequence, TextIO

import numpy as np

from connectfour.debug import DebugLevel, debug
from connectfour.errors import Connect4Error, InvalidMove
from connectfour.game.controller import ControllerPhase, GameController
from connectfour.game.events import (BoardReset, CollapseRequested, GameEnded,
                                     PiecePlaced, Renderer, TurnChanged)
from connectfour.game.player import Player
from connectfour.game.scheduler import Scheduler
from connectfour.game.state import GameState
from connectfour.utils import (DEFAULT_HEIGHT, DEFAULT_WIDTH, EMPTY,
                               MAX_PLAYERS, MIN_PLAYERS, SETTLE_DELAY,
                               default_color, glyph_for, render_board_ascii)


class TerminalRenderer(Renderer):
    """Keeps its own copy of the board and prints it after every change."""

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out or sys.stdout
        self.grid: Optional[np.ndarray] = None

    def _print(self, text: str = ""):
        print(text, file=self.out)

    def on_board_reset(self, event: BoardReset) -> None:
        self.grid = np.zeros((event.height, event.width), dtype=int)
        self._print(f"New {event.width}x{event.height} board.")
        self._print(render_board_ascii(self.grid))

    def on_piece_placed(self, event: PiecePlaced) -> None:
        self.grid[event.row, event.column] = event.player_id
        self._print(render_board_ascii(self.grid))

    def on_turn_changed(self, event: TurnChanged) -> None:
        self._print(f"Player {event.player_id} ({glyph_for(event.player_id)}) to move.")

    def on_game_ended(self, event: GameEnded) -> None:
        outcome = event.outcome
        if outcome.is_tie:
            self._print("Tie!")
            return
        self._print(render_board_ascii(self.grid, highlight=outcome.winning_line))
        self._print(f"Player {outcome.winner_id} won!")

    def on_collapse_requested(self, event: CollapseRequested) -> None:
        self._print("Clearing the board...")
        self.grid = None


class SimpleCLI:
    """Command-line front end: argument parsing, play loop and benchmark."""

    def __init__(self, input_fn: Callable[[str], str] = input,
                 out: Optional[TextIO] = None,
                 scheduler: Optional[Scheduler] = None,
                 sleep_fn: Callable[[float], None] = time.sleep):
        self.input_fn = input_fn
        self.out = out or sys.stdout
        self.scheduler = scheduler
        self.sleep_fn = sleep_fn
        self.args = None

    def _print(self, text: str = ""):
        print(text, file=self.out)

    @staticmethod
    def build_parser() -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(description='Connect Four')
        parser.add_argument('--debug', action='store_true', help='Shortcut for --debug-level debug')
        parser.add_argument('--debug-level', default='warning',
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging verbosity')
        parser.add_argument('--log-file', default=None, help='Also write logs to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a hot-seat game')
        play_parser.add_argument('--width', type=int, default=DEFAULT_WIDTH)
        play_parser.add_argument('--height', type=int, default=DEFAULT_HEIGHT)
        play_parser.add_argument('--players', type=int, default=MIN_PLAYERS,
                                 help=f'Number of players ({MIN_PLAYERS}-{MAX_PLAYERS})')
        play_parser.add_argument('--colors', nargs='*', default=None,
                                 help='Hex colour for each player, in turn order')
        play_parser.add_argument('--settle-delay', type=float, default=SETTLE_DELAY,
                                 help='Seconds to wait while an old board collapses')

        bench_parser = subparsers.add_parser('benchmark', help='Time random games')
        bench_parser.add_argument('--iterations', type=int, default=100,
                                  help='Number of games to play')
        bench_parser.add_argument('--width', type=int, default=DEFAULT_WIDTH)
        bench_parser.add_argument('--height', type=int, default=DEFAULT_HEIGHT)
        bench_parser.add_argument('--players', type=int, default=MIN_PLAYERS)
        bench_parser.add_argument('--seed', type=int, default=None)
        return parser

    def parse_args(self, argv: Optional[Sequence[str]] = None):
        self.args = self.build_parser().parse_args(argv)
        debug.enable_console(sys.stderr)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)
        if self.args.debug:
            debug.configure(level=DebugLevel.DEBUG)
        else:
            debug.set_from_string(self.args.debug_level)
        return self.args

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        if self.args is None:
            self.parse_args(argv)

        try:
            if self.args.command == 'play':
                colors = self.args.colors or [None] * self.args.players
                self.play_game(self.args.width, self.args.height, colors,
                               settle_delay=self.args.settle_delay)
            elif self.args.command == 'benchmark':
                self.benchmark(self.args.iterations, self.args.width, self.args.height,
                               self.args.players, self.args.seed)
            else:
                self._print("Please specify a command. Use --help for options.")
                return 1
        except Connect4Error as e:
            debug.error(str(e), "cli")
            self._print(f"Error: {e}")
            return 2
        return 0

    def play_game(self, width: int, height: int, colors: List[Optional[str]],
                  settle_delay: float = SETTLE_DELAY) -> GameController:
        """
        Run an interactive game until the user quits.

        Commands: a column number drops a piece, ``r`` starts a new game
        (after the old board collapses), ``q`` quits.
        """
        controller = GameController(settle_delay=settle_delay, scheduler=self.scheduler)
        controller.subscribe(TerminalRenderer(self.out))
        controller.configure_players(colors)
        controller.start_new_game(width, height)
        self._print("Enter a column number to drop a piece, 'r' to restart, 'q' to quit.")

        while True:
            self._wait_for_board(controller)
            prompt = "Column, r or q: "
            if controller.phase == ControllerPhase.AWAITING_RESET:
                prompt = "Game over. r to play again, q to quit: "
            try:
                user_input = self.input_fn(prompt).strip().lower()
            except EOFError:
                return controller

            if user_input == 'q':
                self._print("Quitting game.")
                return controller
            if user_input == 'r':
                controller.start_new_game(width, height)
                continue

            try:
                column = int(user_input)
            except ValueError:
                self._print("Invalid input. Please enter a column number, 'r' or 'q'.")
                continue
            try:
                outcome = controller.handle_column_select(column)
            except InvalidMove as e:
                self._print(str(e))
                continue
            if not outcome.moved and controller.phase == ControllerPhase.PLAYING:
                self._print(f"Column {column} is full.")

    def _wait_for_board(self, controller: GameController):
        """Let a pending collapse finish before asking for input."""
        scheduler = controller.scheduler
        scheduler.run_due()
        while controller.phase == ControllerPhase.TEARING_DOWN:
            next_due = scheduler.next_due()
            if next_due is None:
                break
            self.sleep_fn(max(0.0, next_due - scheduler.now()))
            scheduler.run_due()

    def benchmark(self, iterations: int, width: int = DEFAULT_WIDTH,
                  height: int = DEFAULT_HEIGHT, num_players: int = MIN_PLAYERS,
                  seed: Optional[int] = None) -> Dict[str, float]:
        """Play ``iterations`` random games and report timings."""
        rng = np.random.default_rng(seed)
        players = [Player(i, default_color(i)) for i in range(1, num_players + 1)]
        game = GameState(width, height, players)
        stats = {'games': 0, 'moves': 0, 'wins': 0, 'ties': 0}

        self._print(f"Running benchmark with {iterations} games...")
        debug.start_timer("benchmark")
        for _ in range(iterations):
            game.reset()
            while not game.winner:
                column = int(rng.choice(game.valid_columns()))
                outcome = game.drop_piece(column)
                stats['moves'] += 1
                if outcome.result.is_game_over():
                    stats['wins' if game.outcome_winner else 'ties'] += 1
                else:
                    game.advance_turn()
            stats['games'] += 1
        elapsed = debug.end_timer("benchmark", "cli") or 0.0

        stats['seconds'] = elapsed
        filled = int(np.sum(game.grid != EMPTY))
        self._print(f"Played {stats['games']} games ({stats['moves']} moves, "
                    f"{stats['wins']} wins, {stats['ties']} ties) in {elapsed:.4f} seconds")
        if stats['moves']:
            self._print(f"{elapsed / stats['moves'] * 1000:.4f} ms per move")
        self._print(f"Last board ({filled} pieces):")
        self._print(game.render())
        return stats


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the CLI."""
    return SimpleCLI().run(argv)


if __name__ == "__main__":
    sys.exit(main())
