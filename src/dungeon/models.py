"""Database models for DungeonMini."""

import datetime as dt

from sqlmodel import Field, SQLModel


class SavedGame(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    player_name: str = Field(unique=True, index=True)
    state_blob: bytes  # zlib-compressed pickle of GameState
    room: str = ""
    score: int = 0
    started_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.UTC)
    )
    saved_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.UTC)
    )


class ScoreEntry(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    player_name: str = Field(index=True)
    score: int = Field(index=True)
    recorded_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.UTC)
    )
