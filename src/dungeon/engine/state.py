"""Mutable per-session game state.

The state owns the world graph as well as the player, so a single pickle
of GameState captures everything a save needs: room contents, defeated
monsters, player stats and the score.
"""

from dataclasses import dataclass, fields

from .world import Player, Room, World


@dataclass
class GameState:
    """Current room, player and score for one running session."""

    world: World
    current: str
    player: Player
    score: int = 0

    @property
    def room(self) -> Room:
        return self.world.room(self.current)

    def move_to(self, room: Room) -> None:
        self.current = room.name

    def add_score(self, points: int = 1) -> None:
        self.score += points

    def restore(self, other: "GameState") -> None:
        """Replace this state's contents with a loaded snapshot, in place."""
        for f in fields(self):
            setattr(self, f.name, getattr(other, f.name))


def new_game_state(world: World, player: Player) -> GameState:
    """Create a fresh game state with the player at the start room."""
    return GameState(world=world, current=world.start, player=player)
