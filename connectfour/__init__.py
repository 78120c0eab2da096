"""
connectfour - Connect Four game core

This package provides the board and turn logic for Connect Four with two or
more players, a controller that drives game lifecycle and notifies pluggable
renderers, and a terminal interface for playing in a console.
"""

# Version number
__version__ = '0.1.0'
