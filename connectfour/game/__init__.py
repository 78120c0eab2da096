"""
connectfour.game - Core game mechanics for Connect Four

This package contains the board state, players and turn order, the
lifecycle controller and the events it sends to renderers.
"""

from connectfour.game.controller import ControllerPhase, GameController
from connectfour.game.events import (BoardReset, CollapseRequested, GameEnded,
                                     GameOutcome, PiecePlaced, Renderer,
                                     TurnChanged)
from connectfour.game.player import Player, TurnOrder
from connectfour.game.scheduler import ManualScheduler, Scheduler
from connectfour.game.state import DropResult, GameState

__all__ = [
    'BoardReset', 'CollapseRequested', 'ControllerPhase',
    'DropResult', 'GameController', 'GameEnded', 'GameOutcome', 'GameState',
    'ManualScheduler', 'PiecePlaced', 'Player', 'Renderer', 'Scheduler',
    'TurnChanged', 'TurnOrder',
]
