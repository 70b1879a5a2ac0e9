"""Maze Game package."""

from .config import GameConfig, load_config
from .entities import Direction, Ghost, GhostPolicy, Inventory, Item, ItemType, Player
from .level import ItemSlot, LevelState, SlotState
from .maze import Maze, MazeGenerator
from .persistence import SaveFormatError, SaveStore, session_from_document, session_to_document
from .placement import EntityPlacer
from .session import GameSession, LevelLockedError, LevelStatus, MoveResult, TurnReport

__all__ = [
    "Direction",
    "EntityPlacer",
    "GameConfig",
    "GameSession",
    "Ghost",
    "GhostPolicy",
    "Inventory",
    "Item",
    "ItemSlot",
    "ItemType",
    "LevelLockedError",
    "LevelState",
    "LevelStatus",
    "Maze",
    "MazeGenerator",
    "MoveResult",
    "Player",
    "SaveFormatError",
    "SaveStore",
    "SlotState",
    "TurnReport",
    "load_config",
    "session_from_document",
    "session_to_document",
]
