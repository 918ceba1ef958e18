"""Parse a world description file into a World and a Player.

The file is JSON::

    {
      "start": "Square",
      "player": {"name": "Hero", "hp": 20, "attack": 5},
      "rooms": [
        {
          "name": "Forest",
          "description": "...",
          "exits": {"south": "Square"},
          "items": [{"kind": "potion", "name": "Small potion", "heal": 5}],
          "monster": {"name": "Wolf", "level": 1, "hp": 8}
        }
      ]
    }
"""

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .world import Item, Key, Monster, Player, Potion, Room, Weapon, World


class WorldError(ValueError):
    """Raised when a world file is malformed or inconsistent."""


_ITEM_BUILDERS: dict[str, Callable[[dict[str, Any]], Item]] = {
    "potion": lambda spec: Potion(spec["name"], heal=int(spec.get("heal", 0))),
    "weapon": lambda spec: Weapon(spec["name"], bonus=int(spec.get("bonus", 0))),
    "key": lambda spec: Key(spec["name"]),
}


def _parse_item(spec: dict[str, Any]) -> Item:
    kind = str(spec.get("kind", "")).lower()
    builder = _ITEM_BUILDERS.get(kind)
    if builder is None:
        raise WorldError(f"Unknown item kind: {kind!r}")
    item = builder(spec)
    if isinstance(item, Weapon) and item.bonus < 0:
        raise WorldError(f"Weapon {item.name!r} must not have a negative bonus")
    return item


def _parse_monster(spec: dict[str, Any] | None) -> Monster | None:
    if spec is None:
        return None
    monster = Monster(
        name=spec["name"],
        level=int(spec["level"]),
        hp=int(spec["hp"]),
    )
    if not monster.is_alive:
        raise WorldError(f"Monster {monster.name!r} must start with positive hp")
    return monster


def _parse_room(spec: dict[str, Any]) -> Room:
    return Room(
        name=spec["name"],
        description=spec.get("description", ""),
        neighbors={
            direction.lower(): target
            for direction, target in spec.get("exits", {}).items()
        },
        items=[_parse_item(item) for item in spec.get("items", [])],
        monster=_parse_monster(spec.get("monster")),
    )


def _check_links(world: World) -> None:
    """Every exit must lead to a room that exists."""
    for room in world.rooms.values():
        for direction, target in room.neighbors.items():
            if target not in world.rooms:
                raise WorldError(
                    f"Exit {direction!r} from {room.name!r} "
                    f"leads to unknown room {target!r}"
                )


def parse_world(data: dict[str, Any]) -> tuple[World, Player]:
    """Build a World and Player from already-decoded data."""
    world = World()
    for spec in data.get("rooms", []):
        room = _parse_room(spec)
        if room.name in world.rooms:
            raise WorldError(f"Duplicate room name: {room.name!r}")
        world.rooms[room.name] = room

    _check_links(world)

    start = data.get("start", "")
    if start not in world.rooms:
        raise WorldError(f"Start room {start!r} does not exist")
    world.start = start

    player_spec = data.get("player", {})
    player = Player(
        name=player_spec.get("name", "Hero"),
        hp=int(player_spec.get("hp", 20)),
        attack=int(player_spec.get("attack", 5)),
        inventory=[_parse_item(item) for item in player_spec.get("inventory", [])],
    )
    if player.hp <= 0:
        raise WorldError(f"Player {player.name!r} must start with positive hp")
    if player.attack < 0:
        raise WorldError(f"Player {player.name!r} must not have negative attack")
    return world, player


def load_world(data_path: Path) -> tuple[World, Player]:
    """Read a world file and return the populated World and starting Player."""
    with open(data_path, encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as exc:
            raise WorldError(f"Invalid world file {data_path}: {exc}") from exc
    return parse_world(data)
