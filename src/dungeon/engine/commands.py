"""Command registry and handler functions.

build_registry(store) returns the fixed, ordered mapping from command name
to handler. Every handler has the signature ``(state, args) -> str | Halt``:
it mutates state in place and returns the text to show, raises
CommandError for user mistakes, or returns a Halt to end the session.
"""

import array
import gc
import tracemalloc
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Protocol

from .combat import resolve_fight
from .errors import CommandError, Halt
from .state import GameState
from .world import Item

Command = Callable[[GameState, list[str]], str | Halt]

# Size of the throwaway array built by "alloc".
DEFAULT_ALLOC_SIZE = 10_000_000


class SaveGateway(Protocol):
    """Persistence operations the save/load/scores commands delegate to."""

    def save(self, state: GameState) -> str: ...

    def load(self, state: GameState) -> str: ...

    def scores(self) -> str: ...


def _find_item(items: list[Item], name: str) -> int | None:
    """Index of the first item whose name matches, ignoring case."""
    wanted = name.lower()
    for index, item in enumerate(items):
        if item.name.lower() == wanted:
            return index
    return None


def _cmd_gc_stats(state: GameState, args: list[str]) -> str:
    counts = gc.get_count()
    collected = sum(gen["collections"] for gen in gc.get_stats())
    result = (
        f"GC: generations={counts} collections={collected} "
        f"tracked={len(gc.get_objects())}"
    )
    if tracemalloc.is_tracing():
        current, peak = tracemalloc.get_traced_memory()
        result += f"\nMemory: current={current} peak={peak}"
    return result


def _make_alloc(size: int) -> Command:
    def _cmd_alloc(state: GameState, args: list[str]) -> str:
        arr = array.array("i", range(size))
        filled = len(arr)
        del arr
        return (
            "Allocating a large array to exercise the garbage collector...\n"
            f"Array of {filled} elements created and released."
        )

    return _cmd_alloc


def _cmd_look(state: GameState, args: list[str]) -> str:
    return state.room.describe()


def _cmd_move(state: GameState, args: list[str]) -> str:
    if not args:
        raise CommandError("Specify a direction (north, south, east, west)")
    direction = args[0].lower()
    target = state.room.neighbors.get(direction)
    if target is None:
        raise CommandError(f"No exit in that direction: {direction}")
    room = state.world.room(target)
    state.move_to(room)
    return f"You moved to: {room.name}\n{room.describe()}"


def _cmd_take(state: GameState, args: list[str]) -> str:
    if not args:
        raise CommandError("Specify an item to take")
    name = " ".join(args)
    room = state.room
    index = _find_item(room.items, name)
    if index is None:
        raise CommandError(f"Item not found: {name}")
    item = room.items.pop(index)
    state.player.inventory.append(item)
    return f"Taken: {item.name}"


def _cmd_inventory(state: GameState, args: list[str]) -> str:
    inventory = state.player.inventory
    if not inventory:
        return "Inventory is empty."
    # dicts keep first-seen order, which is the display order
    grouped: dict[str, list[Item]] = {}
    for item in inventory:
        grouped.setdefault(item.category, []).append(item)
    lines = []
    for category, items in grouped.items():
        lines.append(f"- {category} ({len(items)}):")
        lines.extend(f"  - {item.name}" for item in items)
    return "\n".join(lines)


def _cmd_use(state: GameState, args: list[str]) -> str:
    if not args:
        raise CommandError("Specify an item to use")
    name = " ".join(args)
    inventory = state.player.inventory
    index = _find_item(inventory, name)
    if index is None:
        raise CommandError(f"Item not found in inventory: {name}")
    return inventory[index].apply(state)


def _cmd_fight(state: GameState, args: list[str]) -> str | Halt:
    return resolve_fight(state)


def _cmd_exit(state: GameState, args: list[str]) -> Halt:
    return Halt("Bye!", status=0)


def build_registry(
    store: SaveGateway, alloc_size: int = DEFAULT_ALLOC_SIZE,
) -> Mapping[str, Command]:
    """Build the read-only command table, in the order "help" lists it."""
    commands: dict[str, Command] = {}

    def _cmd_help(state: GameState, args: list[str]) -> str:
        return "Commands: " + ", ".join(commands)

    commands.update({
        "help": _cmd_help,
        "gc-stats": _cmd_gc_stats,
        "alloc": _make_alloc(alloc_size),
        "look": _cmd_look,
        "move": _cmd_move,
        "take": _cmd_take,
        "inventory": _cmd_inventory,
        "use": _cmd_use,
        "fight": _cmd_fight,
        "save": lambda state, args: store.save(state),
        "load": lambda state, args: store.load(state),
        "scores": lambda state, args: store.scores(),
        "exit": _cmd_exit,
    })
    return MappingProxyType(commands)
