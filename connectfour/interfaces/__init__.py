"""
connectfour.interfaces - User interfaces for Connect Four

This package contains front ends that drive the game controller and render
its events, currently a terminal interface.
"""

# Don't import anything here to avoid circular imports
__all__ = []
