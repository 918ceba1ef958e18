"""Tests for the command handlers."""

import pytest

from dungeon.engine.errors import CommandError, Halt
from dungeon.engine.state import GameState
from dungeon.engine.world import Key, Potion, Weapon

COMMAND_ORDER = [
    "help",
    "gc-stats",
    "alloc",
    "look",
    "move",
    "take",
    "inventory",
    "use",
    "fight",
    "save",
    "load",
    "scores",
    "exit",
]


def test_registry_order(commands):
    assert list(commands) == COMMAND_ORDER


def test_registry_is_read_only(commands):
    with pytest.raises(TypeError):
        commands["dance"] = lambda state, args: "la"


def test_help_lists_commands_once_in_order(commands, state: GameState):
    result = commands["help"](state, [])
    assert result == "Commands: " + ", ".join(COMMAND_ORDER)


def test_look(commands, state: GameState):
    result = commands["look"](state, [])
    assert result.startswith("Square: A stone square with a fountain.")
    assert "Exits: north" in result


def test_look_shows_items_and_monster(commands, state: GameState):
    state.move_to(state.world.room("Forest"))
    result = commands["look"](state, [])
    assert "Items: Small potion" in result
    assert "Monster here: Wolf (lvl 1)" in result


def test_move(commands, state: GameState):
    result = commands["move"](state, ["north"])
    assert state.current == "Forest"
    assert result.startswith("You moved to: Forest\nForest: ")


def test_move_is_case_insensitive(commands, state: GameState):
    commands["move"](state, ["NoRtH"])
    assert state.current == "Forest"


def test_move_requires_direction(commands, state: GameState):
    with pytest.raises(CommandError, match="Specify a direction"):
        commands["move"](state, [])
    assert state.current == "Square"


def test_move_unknown_direction(commands, state: GameState):
    with pytest.raises(CommandError, match="No exit in that direction: west"):
        commands["move"](state, ["west"])
    assert state.current == "Square"


def test_take(commands, state: GameState):
    state.move_to(state.world.room("Forest"))
    result = commands["take"](state, ["small", "POTION"])
    assert result == "Taken: Small potion"
    assert state.room.items == []
    assert [item.name for item in state.player.inventory] == ["Small potion"]


def test_take_twice_fails(commands, state: GameState):
    state.move_to(state.world.room("Forest"))
    commands["take"](state, ["Small", "potion"])
    with pytest.raises(CommandError, match="Item not found: Small potion"):
        commands["take"](state, ["Small", "potion"])
    assert len(state.player.inventory) == 1


def test_take_requires_name(commands, state: GameState):
    with pytest.raises(CommandError, match="Specify an item to take"):
        commands["take"](state, [])


def test_take_first_of_duplicates(commands, state: GameState):
    """With duplicate names, the first item in room order is taken."""
    first = Potion("Tonic", heal=1)
    second = Potion("Tonic", heal=9)
    state.room.items.extend([first, second])
    commands["take"](state, ["tonic"])
    assert state.player.inventory == [first]
    assert state.room.items == [second]
    assert state.room.items[0] is second


def test_inventory_empty(commands, state: GameState):
    assert commands["inventory"](state, []) == "Inventory is empty."


def test_inventory_groups_in_discovery_order(commands, state: GameState):
    state.player.inventory.extend([
        Weapon("Club", bonus=1),
        Potion("Tonic", heal=2),
        Weapon("Axe", bonus=3),
        Key("Brass key"),
    ])
    assert commands["inventory"](state, []) == "\n".join([
        "- Weapon (2):",
        "  - Club",
        "  - Axe",
        "- Potion (1):",
        "  - Tonic",
        "- Key (1):",
        "  - Brass key",
    ])


def test_take_then_inventory(commands, state: GameState):
    state.move_to(state.world.room("Forest"))
    commands["take"](state, ["Small", "potion"])
    result = commands["inventory"](state, [])
    assert result == "- Potion (1):\n  - Small potion"
    assert result.count("Small potion") == 1


def test_use_potion(commands, state: GameState):
    state.player.hp = 10
    state.player.inventory.append(Potion("Small potion", heal=5))
    result = commands["use"](state, ["small", "potion"])
    assert state.player.hp == 15
    assert state.player.inventory == []
    assert "HP: 15" in result


def test_use_weapon(commands, state: GameState):
    state.player.inventory.append(Weapon("Rusty sword", bonus=2))
    result = commands["use"](state, ["rusty", "sword"])
    assert state.player.attack == 7
    assert state.player.inventory == []
    assert "Attack: 7" in result


def test_use_key_is_kept(commands, state: GameState):
    key = Key("Old key")
    state.player.inventory.append(key)
    result = commands["use"](state, ["old", "key"])
    assert "jingles" in result
    assert state.player.inventory == [key]


def test_use_missing_item(commands, state: GameState):
    with pytest.raises(CommandError, match="Item not found in inventory: elixir"):
        commands["use"](state, ["elixir"])


def test_use_requires_name(commands, state: GameState):
    with pytest.raises(CommandError, match="Specify an item to use"):
        commands["use"](state, [])


def test_use_does_not_look_in_room(commands, state: GameState):
    state.move_to(state.world.room("Forest"))
    with pytest.raises(CommandError):
        commands["use"](state, ["Small", "potion"])


def test_fight_without_monster(commands, state: GameState):
    with pytest.raises(CommandError, match="no monster here"):
        commands["fight"](state, [])


def test_exit_returns_halt(commands, state: GameState):
    result = commands["exit"](state, [])
    assert result == Halt("Bye!", status=0)


def test_gc_stats_does_not_touch_state(commands, state: GameState):
    before = (state.current, state.score, state.player.hp)
    result = commands["gc-stats"](state, [])
    assert result.startswith("GC: ")
    assert (state.current, state.score, state.player.hp) == before


def test_alloc_does_not_touch_state(commands, state: GameState):
    before = (state.current, state.score, state.player.hp)
    result = commands["alloc"](state, [])
    assert "1000 elements" in result
    assert (state.current, state.score, state.player.hp) == before
