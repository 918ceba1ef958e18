"""Data structures for the dungeon world.

Rooms live in a single arena (``World.rooms``) keyed by name, and neighbor
links hold room names rather than Room objects, so cycles in the map need
no special handling and the whole graph pickles cleanly.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .state import GameState


@dataclass(eq=False)
class Item:
    """Something that can lie in a room or be carried by the player."""

    name: str

    @property
    def category(self) -> str:
        """Label used to group items in the inventory."""
        return type(self).__name__

    def apply(self, state: "GameState") -> str:
        return f"Nothing happens when you use {self.name}."


@dataclass(eq=False)
class Potion(Item):
    """Restores hp and is consumed on use."""

    heal: int = 0

    def apply(self, state: "GameState") -> str:
        player = state.player
        player.hp += self.heal
        player.inventory.remove(self)
        return f"You drink {self.name}. HP: {player.hp}"


@dataclass(eq=False)
class Weapon(Item):
    """Raises attack and is consumed (equipped) on use."""

    bonus: int = 0

    def apply(self, state: "GameState") -> str:
        player = state.player
        player.attack += self.bonus
        player.inventory.remove(self)
        return f"You equip {self.name}. Attack: {player.attack}"


@dataclass(eq=False)
class Key(Item):
    def apply(self, state: "GameState") -> str:
        return f"{self.name} jingles. Maybe there is a door somewhere."


@dataclass
class Monster:
    name: str
    level: int
    hp: int

    @property
    def is_alive(self) -> bool:
        return self.hp > 0


@dataclass
class Player:
    name: str
    hp: int
    attack: int
    inventory: list[Item] = field(default_factory=list)


@dataclass
class Room:
    """A location in the dungeon."""

    name: str
    description: str = ""
    # direction -> room name
    neighbors: dict[str, str] = field(default_factory=dict)
    items: list[Item] = field(default_factory=list)
    monster: Monster | None = None

    def describe(self) -> str:
        lines = [f"{self.name}: {self.description}"]
        if self.items:
            lines.append("Items: " + ", ".join(item.name for item in self.items))
        if self.monster is not None and self.monster.is_alive:
            lines.append(
                f"Monster here: {self.monster.name} (lvl {self.monster.level})"
            )
        if self.neighbors:
            lines.append("Exits: " + ", ".join(self.neighbors))
        else:
            lines.append("Exits: none")
        return "\n".join(lines)


@dataclass
class World:
    """The room graph plus the name of the starting room."""

    rooms: dict[str, Room] = field(default_factory=dict)
    start: str = ""

    def room(self, name: str) -> Room:
        return self.rooms[name]
