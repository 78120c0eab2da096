"""Tests for GameController: roster, lifecycle and renderer events."""

import numpy as np
import pytest

from conftest import RecordingRenderer, make_players
from connectfour.errors import InvalidConfiguration, InvalidMove
from connectfour.game.controller import ControllerPhase, GameController
from connectfour.game.events import (BoardReset, CollapseRequested, GameEnded,
                                     PiecePlaced, TurnChanged)
from connectfour.game.player import Player
from connectfour.game.scheduler import ManualScheduler
from connectfour.utils import MoveResult


def _select(ctrl: GameController, columns):
    return [ctrl.handle_column_select(c) for c in columns]


class TestConfigurePlayers:
    def test_ids_follow_list_order(self, controller) -> None:
        roster = controller.configure_players(["#111111", "#222222", "#333333"])
        assert [(p.id, p.color) for p in roster] == [
            (1, "#111111"), (2, "#222222"), (3, "#333333")]
        assert controller.roster == roster

    def test_missing_colors_use_defaults(self, controller) -> None:
        roster = controller.configure_players([None, None, None, None])
        assert [p.color for p in roster] == ["#FE5D9F", "#01308F", "#FFFFFF", "#000000"]

    @pytest.mark.parametrize("count", [0, 1, 5])
    def test_roster_size_bounds(self, controller, count) -> None:
        with pytest.raises(InvalidConfiguration):
            controller.configure_players(["#123456"] * count)

    def test_custom_ceiling(self) -> None:
        ctrl = GameController(max_players=2, scheduler=ManualScheduler())
        with pytest.raises(InvalidConfiguration):
            ctrl.configure_players([None, None, None])

    def test_ceiling_below_two_rejected(self) -> None:
        with pytest.raises(InvalidConfiguration):
            GameController(max_players=1)


class TestStartNewGame:
    def test_immediate_start(self, controller, renderer) -> None:
        assert controller.start_new_game(7, 6)
        assert controller.phase == ControllerPhase.PLAYING
        assert controller.game is not None
        assert controller.current_player.id == 1
        assert renderer.events == [BoardReset(7, 6), TurnChanged(1)]

    def test_explicit_roster(self, controller) -> None:
        controller.start_new_game(8, 7, make_players(3))
        assert len(controller.game.players) == 3
        assert controller.game.grid.shape == (7, 8)

    def test_bad_dimensions_leave_nothing(self, controller, renderer) -> None:
        with pytest.raises(InvalidConfiguration):
            controller.start_new_game(3, 6)
        assert controller.game is None
        assert controller.phase == ControllerPhase.IDLE
        assert renderer.events == []

    def test_no_roster_configured(self, scheduler) -> None:
        ctrl = GameController(scheduler=scheduler)
        with pytest.raises(InvalidConfiguration):
            ctrl.start_new_game()

    def test_roster_over_ceiling(self, controller) -> None:
        with pytest.raises(InvalidConfiguration):
            controller.start_new_game(7, 6, make_players(5))

    @pytest.mark.parametrize("ids", [[3, 7], [2, 1], [1, 3], [0, 1]])
    def test_roster_ids_must_be_ordinal(self, controller, renderer, ids) -> None:
        roster = [Player(i, "#123456") for i in ids]
        with pytest.raises(InvalidConfiguration):
            controller.start_new_game(7, 6, roster)
        assert controller.game is None
        assert renderer.events == []

    def test_bad_config_does_not_tear_down_active_game(self, controller) -> None:
        controller.start_new_game()
        active = controller.game
        with pytest.raises(InvalidConfiguration):
            controller.start_new_game(2, 2)
        assert controller.game is active
        assert controller.phase == ControllerPhase.PLAYING
        assert not controller.setting_up


class TestHandleColumnSelect:
    def test_continue_emits_piece_and_turn(self, controller, renderer) -> None:
        controller.start_new_game()
        renderer.clear()
        outcome = controller.handle_column_select(3)
        assert outcome.result == MoveResult.CONTINUE
        assert renderer.events == [PiecePlaced(5, 3, 1), TurnChanged(2)]
        assert controller.current_player.id == 2

    def test_win_emits_game_ended(self, controller, renderer) -> None:
        controller.start_new_game()
        renderer.clear()
        _select(controller, [0, 1, 0, 1, 0, 1, 0])
        assert renderer.events[-2] == PiecePlaced(2, 0, 1)
        ended = renderer.events[-1]
        assert isinstance(ended, GameEnded)
        assert ended.outcome.winner_id == 1
        assert not ended.outcome.is_tie
        assert ended.outcome.winning_line == ((2, 0), (3, 0), (4, 0), (5, 0))
        assert controller.phase == ControllerPhase.AWAITING_RESET
        assert controller.current_player.id == 1

    def test_clicks_after_win_are_silent(self, controller, renderer) -> None:
        controller.start_new_game()
        _select(controller, [0, 1, 0, 1, 0, 1, 0])
        renderer.clear()
        outcome = controller.handle_column_select(4)
        assert not outcome.moved
        assert renderer.events == []

    def test_tie_emits_game_ended_without_winner(self, controller, renderer) -> None:
        controller.start_new_game(4, 4)
        controller.game.grid[:] = np.array([
            [0, 1, 2, 2],
            [2, 2, 1, 1],
            [1, 1, 2, 2],
            [2, 2, 1, 1],
        ])
        renderer.clear()
        outcome = controller.handle_column_select(0)
        assert outcome.result == MoveResult.TIE
        assert renderer.events[0] == PiecePlaced(0, 0, 1)
        assert renderer.events[1] == GameEnded(outcome=renderer.events[1].outcome)
        assert renderer.events[1].outcome.is_tie
        assert renderer.events[1].outcome.winner_id is None
        assert controller.phase == ControllerPhase.AWAITING_RESET

    def test_full_column_is_silent(self, controller, renderer) -> None:
        controller.start_new_game()
        _select(controller, [5] * 6)
        renderer.clear()
        outcome = controller.handle_column_select(5)
        assert not outcome.moved
        assert renderer.events == []
        assert controller.phase == ControllerPhase.PLAYING

    def test_out_of_range_propagates(self, controller, renderer) -> None:
        controller.start_new_game()
        renderer.clear()
        with pytest.raises(InvalidMove):
            controller.handle_column_select(7)
        assert renderer.events == []

    def test_no_game_is_ignored(self, controller, renderer) -> None:
        assert not controller.handle_column_select(0).moved
        assert renderer.events == []

    def test_three_player_rotation(self, controller, renderer) -> None:
        controller.configure_players([None, None, None])
        controller.start_new_game()
        renderer.clear()
        _select(controller, [0, 1, 2, 3])
        assert [e.player_id for e in renderer.of_type(TurnChanged)] == [2, 3, 1, 2]
        assert [e.player_id for e in renderer.of_type(PiecePlaced)] == [1, 2, 3, 1]


class TestCollapseAndReplace:
    def test_collapse_then_release(self, controller, renderer, scheduler) -> None:
        controller.start_new_game()
        renderer.clear()
        assert controller.end_game_and_collapse()
        assert renderer.events == [CollapseRequested()]
        assert controller.phase == ControllerPhase.TEARING_DOWN
        assert controller.game is not None

        scheduler.advance(1.0)
        assert controller.game is not None
        scheduler.advance(0.5)
        assert controller.game is None
        assert controller.phase == ControllerPhase.IDLE

    def test_clicks_ignored_while_collapsing(self, controller, renderer) -> None:
        controller.start_new_game()
        controller.end_game_and_collapse()
        renderer.clear()
        assert not controller.handle_column_select(0).moved
        assert renderer.events == []

    def test_collapse_without_game(self, controller, renderer) -> None:
        assert not controller.end_game_and_collapse()
        assert renderer.events == []

    def test_collapse_twice_schedules_once(self, controller, scheduler) -> None:
        controller.start_new_game()
        assert controller.end_game_and_collapse()
        assert not controller.end_game_and_collapse()
        assert scheduler.pending == 1

    def test_new_game_waits_for_teardown(self, controller, renderer, scheduler) -> None:
        controller.start_new_game()
        old = controller.game
        controller.handle_column_select(3)
        renderer.clear()

        assert controller.start_new_game(7, 6)
        assert controller.setting_up
        assert controller.game is old
        assert renderer.events == [CollapseRequested()]

        scheduler.advance(1.0)
        assert controller.game is old
        scheduler.advance(0.5)
        assert controller.game is not old
        assert not controller.setting_up
        assert controller.phase == ControllerPhase.PLAYING
        assert not controller.game.grid.any()
        assert renderer.events == [CollapseRequested(), BoardReset(7, 6), TurnChanged(1)]

    def test_second_start_rejected_while_setting_up(self, controller, renderer, scheduler) -> None:
        controller.start_new_game()
        controller.start_new_game(8, 8)
        assert not controller.start_new_game(9, 9)
        scheduler.advance(1.5)
        assert controller.game.width == 8
        assert renderer.of_type(CollapseRequested) == [CollapseRequested()]
        assert scheduler.pending == 0

    def test_start_during_teardown_is_queued(self, controller, renderer, scheduler) -> None:
        controller.start_new_game()
        controller.end_game_and_collapse()
        assert controller.start_new_game(5, 5)
        assert controller.setting_up
        assert len(renderer.of_type(CollapseRequested)) == 1
        scheduler.advance(1.5)
        assert controller.game.width == 5
        assert controller.phase == ControllerPhase.PLAYING

    def test_start_after_teardown_is_immediate(self, controller, scheduler) -> None:
        controller.start_new_game()
        controller.end_game_and_collapse()
        scheduler.advance(1.5)
        assert controller.start_new_game()
        assert controller.phase == ControllerPhase.PLAYING
        assert scheduler.pending == 0

    def test_new_game_after_win(self, controller, renderer, scheduler) -> None:
        controller.start_new_game()
        _select(controller, [0, 1, 0, 1, 0, 1, 0])
        controller.start_new_game()
        scheduler.advance(1.5)
        assert controller.phase == ControllerPhase.PLAYING
        assert controller.handle_column_select(0).moved


class TestResetAndSubscribers:
    def test_reset_game(self, controller, renderer) -> None:
        controller.start_new_game()
        game = controller.game
        _select(controller, [0, 1, 0, 1, 0, 1, 0])
        renderer.clear()
        assert controller.reset_game()
        assert controller.game is game
        assert controller.phase == ControllerPhase.PLAYING
        assert renderer.events == [BoardReset(7, 6), TurnChanged(1)]

    def test_reset_ignored_while_collapsing(self, controller) -> None:
        controller.start_new_game()
        controller.end_game_and_collapse()
        assert not controller.reset_game()

    def test_every_renderer_notified(self, controller, renderer) -> None:
        other = RecordingRenderer()
        controller.subscribe(other)
        controller.subscribe(other)
        controller.start_new_game()
        assert other.events == renderer.events

    def test_unsubscribe(self, controller, renderer) -> None:
        controller.unsubscribe(renderer)
        controller.start_new_game()
        assert renderer.events == []


class TestDocumentation:
    @pytest.mark.parametrize("name", [
        "game", "phase", "roster", "setting_up", "current_player", "subscribe",
        "unsubscribe", "configure_players", "start_new_game", "reset_game",
        "handle_column_select", "end_game_and_collapse",
    ])
    def test_public_members_documented(self, name) -> None:
        assert getattr(GameController, name).__doc__
