"""Application factory for DungeonMini."""

import sys
from importlib import resources
from pathlib import Path
from typing import TextIO

from sqlalchemy import Engine
from sqlmodel import SQLModel, create_engine

from .config import Config
from .engine.commands import build_registry
from .engine.loader import load_world
from .engine.state import GameState, new_game_state
from .interpreter import Interpreter
from .logging import bind_session, get_logger
from .persistence import SaveStore

logger = get_logger(__name__)


def _get_data_path() -> Path:
    """Locate world.json via importlib.resources (works when installed in a venv)."""
    return resources.files("dungeon.data").joinpath("world.json")


class Game:
    """A wired-up session: state, command table and storage."""

    def __init__(
        self,
        state: GameState,
        store: SaveStore,
        engine: Engine,
        config: Config,
    ):
        self.state = state
        self.store = store
        self.engine = engine
        self.commands = build_registry(store, alloc_size=config.alloc_size)

    def run(
        self, stdin: TextIO | None = None, stdout: TextIO | None = None,
    ) -> int | None:
        """Play until end of input or a Halt; returns the Halt status if any."""
        return Interpreter(
            self.state, self.commands, stdin or sys.stdin, stdout or sys.stdout,
        ).run()

    def close(self) -> None:
        self.engine.dispose()


def create_game(config: Config | None = None) -> Game:
    """Create the database, load the world and build a ready-to-run Game."""
    config = config or Config.from_env()

    engine = create_engine(config.database_url)
    SQLModel.metadata.create_all(engine)
    logger.debug("database_setup_complete")

    data_path = config.world_file or _get_data_path()
    world, player = load_world(data_path)
    bind_session(player.name)
    logger.info("world_loaded", rooms=len(world.rooms), start=world.start)

    state = new_game_state(world, player)
    store = SaveStore(engine, scores_limit=config.scores_limit)
    return Game(state, store, engine, config)
