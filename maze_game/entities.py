"""Player, item and ghost entities that live inside a maze level."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .maze import Maze, Position


logger = logging.getLogger(__name__)

FULL_VISIBILITY = 19
DARK_VISIBILITY = 7
FLASHLIGHT_VISIBILITY = 11


class Direction(Enum):
    """Player movement directions, expressed as (dx, dy) with y growing downwards."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def vector(self) -> Tuple[int, int]:
        return self.value

    @staticmethod
    def from_name(name: str) -> "Direction":
        token = str(name).strip().lower()
        direction = _DIRECTION_ALIASES.get(token)
        if direction is None:
            raise ValueError(f"Unknown direction: {name}")
        return direction

    def apply(self, position: Position) -> Position:
        dx, dy = self.vector
        return position[0] + dx, position[1] + dy


_DIRECTION_ALIASES: Dict[str, Direction] = {
    "up": Direction.UP,
    "w": Direction.UP,
    "down": Direction.DOWN,
    "s": Direction.DOWN,
    "left": Direction.LEFT,
    "a": Direction.LEFT,
    "right": Direction.RIGHT,
    "d": Direction.RIGHT,
}


class ItemType(Enum):
    KEY = "key"
    FLASHLIGHT = "flashlight"

    @staticmethod
    def from_name(name: str) -> "ItemType":
        try:
            return ItemType(str(name).strip().lower())
        except ValueError as exc:
            raise ValueError(f"Unknown item type: {name}") from exc


@dataclass
class Item:
    """A key or flashlight lying in the maze (or carried by the player)."""

    item_type: ItemType
    position: Position
    collected: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {
            "type": self.item_type.value,
            "x": self.position[0],
            "y": self.position[1],
            "collected": self.collected,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "Item":
        return cls(
            item_type=ItemType.from_name(data["type"]),
            position=(int(data["x"]), int(data["y"])),
            collected=bool(data.get("collected", False)),
        )


@dataclass
class Inventory:
    """Collected items in the order they were picked up."""

    items: List[Item] = field(default_factory=list)

    def __iter__(self) -> Iterator[Item]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def add(self, item: Item) -> None:
        self.items.append(item)
        logger.debug("added %s to inventory", item.item_type.value)

    def has(self, item_type: ItemType) -> bool:
        found = any(item.item_type is item_type for item in self.items)
        logger.debug("checked inventory for %s: %s", item_type.value, "found" if found else "not found")
        return found

    def clear(self) -> None:
        self.items.clear()
        logger.debug("cleared inventory")

    def describe(self) -> str:
        if not self.items:
            return "Inventory is empty."
        lines = ["Inventory contains:"]
        lines.extend(f"- {item.item_type.value}" for item in self.items)
        return "\n".join(lines)


@dataclass
class Player:
    position: Position
    inventory: Inventory = field(default_factory=Inventory)
    visibility_diameter: int = FULL_VISIBILITY

    @classmethod
    def for_level(
        cls,
        level_number: int,
        start: Position,
        *,
        full_visibility: int = FULL_VISIBILITY,
        dark_visibility: int = DARK_VISIBILITY,
    ) -> "Player":
        diameter = full_visibility if level_number == 1 else dark_visibility
        return cls(position=start, visibility_diameter=diameter)

    def move(self, direction: Direction) -> Position:
        """Step one cell without any validation and return the previous position."""

        previous = self.position
        self.position = direction.apply(self.position)
        logger.debug("player moved %s to %s", direction.name.lower(), self.position)
        return previous

    def collect(self, item: Item, *, flashlight_visibility: int = FLASHLIGHT_VISIBILITY) -> None:
        self.inventory.add(item)
        item.collected = True
        logger.info("collected %s", item.item_type.value)
        if item.item_type is ItemType.FLASHLIGHT:
            # Visibility never shrinks, even if a config sets a smaller flashlight radius.
            self.visibility_diameter = max(self.visibility_diameter, flashlight_visibility)
            logger.info("flashlight collected, vision expanded to %d", self.visibility_diameter)

    def has_key(self) -> bool:
        return self.inventory.has(ItemType.KEY)

    def has_flashlight(self) -> bool:
        return self.inventory.has(ItemType.FLASHLIGHT)

    def to_dict(self) -> Dict[str, object]:
        return {
            "playerX": self.position[0],
            "playerY": self.position[1],
            "visibilityDiameter": self.visibility_diameter,
            "inventory": [item.to_dict() for item in self.inventory],
        }


class GhostPolicy(Enum):
    RANDOM_WALK = "random_walk"
    SWEEP = "sweep"

    @staticmethod
    def from_name(name: str) -> "GhostPolicy":
        token = str(name).strip().lower().replace("-", "_")
        try:
            return GhostPolicy(token)
        except ValueError as exc:
            raise ValueError(f"Unknown ghost policy: {name}") from exc


@dataclass
class Ghost:
    """Wandering hazard of the hardest level.

    The ghost never keeps a reference to the grid; the owning level passes its
    maze into every movement call.
    """

    position: Position
    moving_vertically: bool = False
    moving_positive: bool = False
    policy: GhostPolicy = GhostPolicy.RANDOM_WALK

    def step(self, maze: Maze, rng: random.Random) -> Position:
        if self.policy is GhostPolicy.SWEEP:
            self.sweep(maze)
        else:
            self.random_walk(maze, rng)
        return self.position

    def random_walk(self, maze: Maze, rng: random.Random) -> None:
        options = maze.neighbours(self.position)
        if options:
            self.position = options[rng.randrange(len(options))]

    def sweep(self, maze: Maze) -> None:
        """Move one cell along the current axis, reversing instead of moving when blocked."""

        dx, dy = (0, 1) if self.moving_vertically else (1, 0)
        if not self.moving_positive:
            dx, dy = -dx, -dy
        target = (self.position[0] + dx, self.position[1] + dy)
        if maze.is_path(target):
            self.position = target
        else:
            self.moving_positive = not self.moving_positive

    def to_dict(self) -> Dict[str, object]:
        return {"ghostX": self.position[0], "ghostY": self.position[1]}

    @classmethod
    def from_dict(cls, data: Dict[str, object], *, policy: Optional[GhostPolicy] = None) -> "Ghost":
        return cls(
            position=(int(data["ghostX"]), int(data["ghostY"])),
            policy=policy or GhostPolicy.RANDOM_WALK,
        )
