"""DungeonMini: a small console dungeon crawler."""

import sys

from .app import create_game
from .config import Config
from .logging import configure_logging, get_logger

__all__ = ["main", "create_game", "Config"]


def main() -> None:
    """Entry point for the console game."""
    config = Config.from_env()

    configure_logging(
        log_level=config.log_level,
        log_file=config.log_file,
        json_logs=config.json_logs,
    )

    logger = get_logger(__name__)
    logger.info(
        "application_starting",
        database_url=config.database_url,
        log_level=config.log_level,
    )

    game = create_game(config)
    try:
        status = game.run()
    finally:
        game.close()

    if status is not None:
        sys.exit(status)
