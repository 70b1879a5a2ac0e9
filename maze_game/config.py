"""Game configuration loaded from an optional JSON file and environment variables."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .entities import DARK_VISIBILITY, FLASHLIGHT_VISIBILITY, FULL_VISIBILITY, GhostPolicy
from .maze import DEFAULT_MAX_ATTEMPTS, MAZE_SIZE, validate_size

SAVE_PATH_ENV_VAR = "MAZE_GAME_SAVE_PATH"
SEED_ENV_VAR = "MAZE_GAME_SEED"
DEFAULT_SAVE_PATH = Path("data") / "gamePanelState.json"
LEVEL_COUNT = 3


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_optional_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class GameConfig:
    maze_size: int = MAZE_SIZE
    level_count: int = LEVEL_COUNT
    full_visibility: int = FULL_VISIBILITY
    dark_visibility: int = DARK_VISIBILITY
    flashlight_visibility: int = FLASHLIGHT_VISIBILITY
    ghost_policy: GhostPolicy = GhostPolicy.RANDOM_WALK
    save_path: Path = DEFAULT_SAVE_PATH
    seed: Optional[int] = None
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    def __post_init__(self) -> None:
        validate_size(self.maze_size)
        if self.level_count < 1:
            raise ValueError(f"Invalid level count: {self.level_count}")

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "GameConfig":
        """Build a config, falling back to defaults for values that do not parse.

        The maze size is the exception: an even or too small size is a hard
        error because no valid maze can be generated from it.
        """

        if not isinstance(raw, Mapping):
            raw = {}
        visibility = raw.get("visibility", {})
        if not isinstance(visibility, Mapping):
            visibility = {}
        try:
            policy = GhostPolicy.from_name(raw.get("ghost_policy", GhostPolicy.RANDOM_WALK.value))
        except ValueError:
            policy = GhostPolicy.RANDOM_WALK
        save_path = raw.get("save_path")
        return cls(
            maze_size=validate_size(raw.get("maze_size", MAZE_SIZE)),
            level_count=max(1, _as_int(raw.get("level_count"), LEVEL_COUNT)),
            full_visibility=_as_int(visibility.get("full"), FULL_VISIBILITY),
            dark_visibility=_as_int(visibility.get("dark"), DARK_VISIBILITY),
            flashlight_visibility=_as_int(visibility.get("flashlight"), FLASHLIGHT_VISIBILITY),
            ghost_policy=policy,
            save_path=Path(save_path).expanduser() if save_path else DEFAULT_SAVE_PATH,
            seed=_as_optional_int(raw.get("seed")),
            max_attempts=max(1, _as_int(raw.get("max_attempts"), DEFAULT_MAX_ATTEMPTS)),
        )

    def with_overrides(self, environ: Mapping[str, str]) -> "GameConfig":
        config = self
        save_path = environ.get(SAVE_PATH_ENV_VAR)
        if save_path:
            config = replace(config, save_path=Path(save_path).expanduser())
        seed = _as_optional_int(environ.get(SEED_ENV_VAR))
        if seed is not None:
            config = replace(config, seed=seed)
        return config


def load_json_config(path: Path) -> Dict[str, Any]:
    """Read a JSON config file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(
            f"Config {path} is not valid JSON (line {exc.lineno}, col {exc.colno}): {exc.msg}"
        ) from exc


def load_config(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> GameConfig:
    raw = load_json_config(Path(path)) if path is not None else {}
    environ = os.environ if environ is None else environ
    return GameConfig.from_dict(raw).with_overrides(environ)
