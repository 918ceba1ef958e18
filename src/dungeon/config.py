"""Configuration for DungeonMini."""

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Config:
    """Application configuration."""

    database_url: str = "sqlite:///./dungeon.db"
    world_file: Path | None = None
    log_level: str = "WARNING"
    log_file: Path | None = None
    json_logs: bool = False
    alloc_size: int = 10_000_000
    scores_limit: int = 10

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        world_file = os.getenv("DUNGEON_WORLD_FILE")
        log_file = os.getenv("DUNGEON_LOG_FILE")

        return cls(
            database_url=os.getenv("DUNGEON_DATABASE_URL", cls.database_url),
            world_file=Path(world_file) if world_file else None,
            log_level=os.getenv("DUNGEON_LOG_LEVEL", cls.log_level),
            log_file=Path(log_file) if log_file else None,
            json_logs=os.getenv("DUNGEON_JSON_LOGS", "").lower()
            in ("true", "1", "yes"),
            alloc_size=int(os.getenv("DUNGEON_ALLOC_SIZE", str(cls.alloc_size))),
            scores_limit=int(
                os.getenv("DUNGEON_SCORES_LIMIT", str(cls.scores_limit))
            ),
        )
