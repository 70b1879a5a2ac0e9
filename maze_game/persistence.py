"""JSON save documents for game sessions and the file store that reads and writes them."""

from __future__ import annotations

import json
import logging
import random
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .config import GameConfig
from .entities import Ghost, Inventory, Item, Player
from .level import ItemSlot, LevelState, SlotState, check_level_number
from .maze import Maze
from .session import GameSession, Saver


logger = logging.getLogger(__name__)

INDENT = 4


class SaveFormatError(ValueError):
    """The save document is not valid JSON or lacks required fields."""


def _require(data: Mapping[str, Any], key: str, context: str) -> Any:
    if not isinstance(data, Mapping) or key not in data:
        raise SaveFormatError(f"Missing '{key}' in {context}")
    return data[key]


def _position(raw: Any, context: str) -> tuple:
    try:
        return int(raw[0]), int(raw[1])
    except (TypeError, ValueError, IndexError, KeyError) as exc:
        raise SaveFormatError(f"Invalid position for {context}: {raw!r}") from exc


# ----------------------------------------------------------------------
# Encoding
def _slot_payload(document: Dict[str, object], name: str, slot: ItemSlot) -> None:
    # Collected items are written as null; items the level never had are omitted.
    if slot.state is SlotState.PRESENT and slot.item is not None:
        document[name] = slot.item.to_dict()
    elif slot.state is SlotState.COLLECTED:
        document[name] = None


def level_to_dict(level: LevelState) -> Dict[str, object]:
    payload: Dict[str, object] = {
        "levelNumber": level.level_number,
        "maze": level.maze.to_rows(),
        "entrance": list(level.maze.entrance),
        "exit": list(level.maze.exit),
        "exitAccessible": level.maze.exit_accessible,
        "player": level.player.to_dict(),
        "completed": level.completed,
    }
    _slot_payload(payload, "key", level.key)
    _slot_payload(payload, "flashlight", level.flashlight)
    if level.ghost is not None:
        ghost = level.ghost.to_dict()
        ghost["movingVertically"] = level.ghost.moving_vertically
        ghost["movingPositive"] = level.ghost.moving_positive
        payload["ghost"] = ghost
    return payload


def session_to_document(session: GameSession) -> Dict[str, object]:
    document: Dict[str, object] = {}
    if session.current_level is not None:
        document["currentLevel"] = level_to_dict(session.current_level)
    document["levelCompleted"] = list(session.progress)
    document["resumedGame"] = session.resumed_game
    document["isLevelInProgress"] = session.level_in_progress
    return document


def progress_to_document(session: GameSession) -> Dict[str, object]:
    return {"levelCompleted": list(session.progress)}


# ----------------------------------------------------------------------
# Decoding
def _grid_rows(raw: Any, size: int) -> List[List[int]]:
    if not isinstance(raw, list):
        raise SaveFormatError("Maze grid must be a list")
    flat = bool(raw) and not isinstance(raw[0], list)
    if flat:
        if len(raw) != size * size:
            raise SaveFormatError("Invalid maze size")
        raw = [raw[row * size:(row + 1) * size] for row in range(size)]
    try:
        return [[int(value) for value in row] for row in raw]
    except (TypeError, ValueError) as exc:
        raise SaveFormatError(f"Invalid maze grid: {exc}") from exc


def _maze_from_dict(data: Mapping[str, Any], config: GameConfig) -> Maze:
    maze_raw = _require(data, "maze", "currentLevel")
    # Older saves nest the maze fields in their own object.
    source = maze_raw if isinstance(maze_raw, Mapping) else data
    grid_raw = _require(source, "maze", "maze") if source is maze_raw else maze_raw
    rows = _grid_rows(grid_raw, config.maze_size)
    entrance = _position(_require(source, "entrance", "maze"), "entrance")
    exit = _position(_require(source, "exit", "maze"), "exit")
    accessible = source.get("exitAccessible")
    try:
        return Maze.from_grid(
            rows,
            entrance,
            exit,
            None if accessible is None else bool(accessible),
            size=config.maze_size,
        )
    except ValueError as exc:
        raise SaveFormatError(str(exc)) from exc


def _items_from_list(raw: Any) -> List[Item]:
    if isinstance(raw, Mapping):
        raw = raw.get("items", [])
    if not isinstance(raw, list):
        logger.warning("inventory is not a list, starting empty")
        return []
    items: List[Item] = []
    for entry in raw:
        try:
            items.append(Item.from_dict(entry))
        except (KeyError, TypeError, ValueError):
            logger.warning("skipping malformed inventory entry %r", entry)
    return items


def _player_from_dict(data: Mapping[str, Any]) -> Player:
    raw = _require(data, "player", "currentLevel")
    try:
        position = (int(raw["playerX"]), int(raw["playerY"]))
        diameter = int(raw["visibilityDiameter"])
    except (KeyError, TypeError, ValueError) as exc:
        raise SaveFormatError(f"Invalid player data: {exc}") from exc
    inventory = Inventory(_items_from_list(raw.get("inventory", [])))
    return Player(position=position, inventory=inventory, visibility_diameter=diameter)


def _slot_from_dict(data: Mapping[str, Any], name: str) -> ItemSlot:
    if name not in data:
        return ItemSlot.absent()
    raw = data[name]
    if raw is None:
        return ItemSlot.collected()
    try:
        item = Item.from_dict(raw)
    except (KeyError, TypeError, ValueError):
        logger.warning("malformed %s entry %r treated as absent", name, raw)
        return ItemSlot.absent()
    if item.collected:
        return ItemSlot.collected()
    return ItemSlot.present(item)


def level_from_dict(
    data: Mapping[str, Any],
    config: Optional[GameConfig] = None,
    *,
    rng: Optional[random.Random] = None,
) -> LevelState:
    config = config or GameConfig()
    raw_number = _require(data, "levelNumber", "currentLevel")
    try:
        level_number = check_level_number(int(raw_number), config)
    except (TypeError, ValueError) as exc:
        raise SaveFormatError(str(exc)) from exc

    ghost: Optional[Ghost] = None
    ghost_raw = data.get("ghost")
    if level_number >= 3 and isinstance(ghost_raw, Mapping):
        try:
            ghost = Ghost.from_dict(ghost_raw, policy=config.ghost_policy)
        except (KeyError, TypeError, ValueError) as exc:
            raise SaveFormatError(f"Invalid ghost data: {exc}") from exc
        ghost.moving_vertically = bool(ghost_raw.get("movingVertically", False))
        ghost.moving_positive = bool(ghost_raw.get("movingPositive", False))

    return LevelState(
        level_number=level_number,
        maze=_maze_from_dict(data, config),
        player=_player_from_dict(data),
        key=_slot_from_dict(data, "key"),
        flashlight=_slot_from_dict(data, "flashlight"),
        ghost=ghost,
        completed=bool(data.get("completed", False)),
        config=config,
        rng=rng or random.Random(config.seed),
    )


def session_from_document(
    document: Mapping[str, Any],
    config: Optional[GameConfig] = None,
    *,
    rng: Optional[random.Random] = None,
    saver: Optional[Saver] = None,
) -> GameSession:
    config = config or GameConfig()
    flags = _require(document, "levelCompleted", "save document")
    if not isinstance(flags, list):
        raise SaveFormatError("'levelCompleted' must be a list")
    if not all(isinstance(flag, bool) for flag in flags):
        raise SaveFormatError("'levelCompleted' entries must be booleans")

    session = GameSession(config, rng=rng, saver=saver)
    session.set_progress(flags)
    current = document.get("currentLevel")
    if current is not None:
        session.current_level = level_from_dict(current, config, rng=session.rng)
        session.level_in_progress = bool(document.get("isLevelInProgress", False))
    session.resumed_game = bool(document.get("resumedGame", False))
    return session


# ----------------------------------------------------------------------
# File storage
class SaveStore:
    """Read and write session documents stored as JSON on disk."""

    def __init__(self, path: Path, config: Optional[GameConfig] = None):
        self.path = Path(path)
        self.config = config or GameConfig()

    def exists(self) -> bool:
        return self.path.exists()

    def _write(self, document: Mapping[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(document, indent=INDENT), encoding="utf-8")

    def save(self, session: GameSession) -> None:
        self._write(session_to_document(session))
        logger.info("saved session to %s", self.path)

    def save_progress(self, session: GameSession) -> None:
        self._write(progress_to_document(session))
        logger.info("saved level progress to %s", self.path)

    def read_document(self) -> Dict[str, Any]:
        if not self.path.exists():
            raise FileNotFoundError(self.path)
        try:
            document = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise SaveFormatError(f"{self.path} is not valid JSON: {exc.msg}") from exc
        if not isinstance(document, dict):
            raise SaveFormatError(f"{self.path} does not contain a JSON object")
        return document

    def load(self, *, rng: Optional[random.Random] = None) -> GameSession:
        session = session_from_document(
            self.read_document(), self.config, rng=rng, saver=self.save
        )
        logger.info("loaded session from %s", self.path)
        return session

    def clear(self) -> None:
        self._write({})
        logger.info("cleared saved state at %s", self.path)
