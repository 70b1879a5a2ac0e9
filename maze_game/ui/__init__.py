"""User interface package for the maze game."""

from .main import MazeGameApp, main, resolve_config, run
from .toolkit import MazeGameUI

__all__ = [
    "MazeGameApp",
    "MazeGameUI",
    "main",
    "resolve_config",
    "run",
]
