"""Turn-based combat between the player and the monster in the current room.

The exchange is fully deterministic: the player always strikes first for
``player.attack`` damage, and a surviving monster answers with
``max(0, level * 2 - player.attack / 2)``, the half truncated toward zero.
The fight runs to completion within a single command.
"""

from ..logging import get_logger
from .errors import CommandError, Halt
from .state import GameState
from .world import Monster, Player

logger = get_logger(__name__)


class CombatError(RuntimeError):
    """Raised when a fight can never finish because neither side deals damage."""


def monster_damage(monster: Monster, player: Player) -> int:
    """Damage a monster deals in one counter-attack."""
    # truncate toward zero; floor division differs for negative attack
    return max(0, monster.level * 2 - int(player.attack / 2))


def resolve_fight(state: GameState) -> str | Halt:
    """Fight the monster in the current room until one side drops."""
    room = state.room
    monster = room.monster
    if monster is None or not monster.is_alive:
        raise CommandError("There is no monster here to fight.")

    player = state.player
    if player.attack <= 0 and monster_damage(monster, player) == 0:
        raise CombatError(
            f"Neither {player.name} nor {monster.name} can deal damage"
        )

    lines = [f"You fight {monster.name} (lvl {monster.level}, HP: {monster.hp})"]
    if player.hp <= 0:
        return "\n".join(lines)

    rounds = 0
    while True:
        rounds += 1
        damage = player.attack
        monster.hp -= damage
        # stored hp may go negative; only the clamped value is shown
        lines.append(
            f"You hit {monster.name} for {damage}. "
            f"Monster HP: {max(0, monster.hp)}"
        )
        if monster.hp <= 0:
            lines.append(f"You defeated {monster.name}!")
            room.monster = None
            logger.info(
                "monster_defeated",
                monster=monster.name,
                room=room.name,
                rounds=rounds,
            )
            return "\n".join(lines)

        dmg = monster_damage(monster, player)
        player.hp -= dmg
        lines.append(
            f"{monster.name} strikes back: {dmg}. Your HP: {max(0, player.hp)}"
        )
        if player.hp <= 0:
            lines.append("You died. Game over.")
            logger.info(
                "player_died",
                monster=monster.name,
                room=room.name,
                rounds=rounds,
            )
            return Halt("\n".join(lines), status=0)
