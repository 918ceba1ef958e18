"""Shared test fixtures for DungeonMini."""

from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

from dungeon.app import _get_data_path
from dungeon.config import Config
from dungeon.engine.commands import build_registry
from dungeon.engine.loader import load_world
from dungeon.engine.state import GameState, new_game_state
from dungeon.engine.world import Player, World
from dungeon.persistence import SaveStore


@pytest.fixture
def loaded() -> tuple[World, Player]:
    return load_world(_get_data_path())


@pytest.fixture
def world(loaded) -> World:
    return loaded[0]


@pytest.fixture
def player(loaded) -> Player:
    return loaded[1]


@pytest.fixture
def state(world: World, player: Player) -> GameState:
    return new_game_state(world, player)


@pytest.fixture
def db_engine(tmp_path: Path):
    db_url = f"sqlite:///{tmp_path}/test.db"
    engine = create_engine(db_url)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(db_engine) -> SaveStore:
    return SaveStore(db_engine)


@pytest.fixture
def commands(store: SaveStore):
    return build_registry(store, alloc_size=1000)


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    return Config(database_url=f"sqlite:///{tmp_path}/test.db", alloc_size=1000)
