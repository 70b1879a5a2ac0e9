import pytest

from maze_game.entities import (
    Direction,
    GhostPolicy,
    Inventory,
    Item,
    ItemType,
    Player,
)


def test_direction_names_and_vectors():
    assert Direction.from_name("W") is Direction.UP
    assert Direction.from_name("right") is Direction.RIGHT
    assert Direction.DOWN.apply((3, 3)) == (3, 4)
    with pytest.raises(ValueError):
        Direction.from_name("diagonal")


def test_item_dict_round_trip():
    item = Item(ItemType.FLASHLIGHT, (4, 2))

    assert Item.from_dict(item.to_dict()) == item
    with pytest.raises(ValueError):
        Item.from_dict({"type": "sword", "x": 1, "y": 1})


def test_inventory_describe_lists_items_in_order():
    inventory = Inventory()
    assert inventory.describe() == "Inventory is empty."

    inventory.add(Item(ItemType.FLASHLIGHT, (1, 1), collected=True))
    inventory.add(Item(ItemType.KEY, (2, 2), collected=True))

    assert inventory.describe() == "Inventory contains:\n- flashlight\n- key"
    assert inventory.has(ItemType.KEY)
    inventory.clear()
    assert not inventory.has(ItemType.KEY)


def test_player_starting_visibility_depends_on_level():
    assert Player.for_level(1, (0, 0)).visibility_diameter == 19
    assert Player.for_level(2, (0, 0)).visibility_diameter == 7
    assert Player.for_level(3, (0, 0), dark_visibility=5).visibility_diameter == 5


def test_flashlight_never_shrinks_vision():
    player = Player.for_level(1, (0, 0))

    player.collect(Item(ItemType.FLASHLIGHT, (0, 0)))

    assert player.visibility_diameter == 19
    assert player.has_flashlight()
    assert not player.has_key()


def test_player_dict_lists_inventory():
    player = Player.for_level(2, (3, 5))
    player.collect(Item(ItemType.KEY, (3, 5)))

    assert player.to_dict() == {
        "playerX": 3,
        "playerY": 5,
        "visibilityDiameter": 7,
        "inventory": [{"type": "key", "x": 3, "y": 5, "collected": True}],
    }


def test_ghost_policy_names():
    assert GhostPolicy.from_name("random-walk") is GhostPolicy.RANDOM_WALK
    assert GhostPolicy.from_name("SWEEP") is GhostPolicy.SWEEP
    with pytest.raises(ValueError):
        GhostPolicy.from_name("teleport")


def test_level_items_in_world_drop_collected(make_level):
    level = make_level(2, key=(1, 5), flashlight=(3, 5))
    assert [item.item_type for item in level.items_in_world()] == [ItemType.KEY, ItemType.FLASHLIGHT]

    level.player.position = (3, 5)
    level.collect_items()

    assert [item.item_type for item in level.items_in_world()] == [ItemType.KEY]
