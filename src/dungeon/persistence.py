"""Save, load and high-score storage backed by SQLModel.

Every operation opens its own database session and commits before
returning, so nothing is left pending when the process exits.
"""

import datetime as dt
import pickle
import zlib

from sqlalchemy import Engine
from sqlmodel import Session, select

from .engine.errors import CommandError
from .engine.state import GameState
from .logging import get_logger
from .models import SavedGame, ScoreEntry

logger = get_logger(__name__)


class SaveStore:
    """Persists one saved game per player name plus a table of scores."""

    def __init__(self, engine: Engine, scores_limit: int = 10):
        self.engine = engine
        self.scores_limit = scores_limit

    def save(self, state: GameState) -> str:
        """Serialize state to the database and record its score."""
        now = dt.datetime.now(dt.UTC)
        name = state.player.name
        blob = zlib.compress(pickle.dumps(state))

        with Session(self.engine) as db_session:
            statement = select(SavedGame).where(SavedGame.player_name == name)
            saved_game = db_session.exec(statement).first()
            if saved_game is None:
                saved_game = SavedGame(
                    player_name=name,
                    state_blob=blob,
                    room=state.current,
                    score=state.score,
                    started_at=now,
                    saved_at=now,
                )
                db_session.add(saved_game)
            else:
                saved_game.state_blob = blob
                saved_game.room = state.current
                saved_game.score = state.score
                saved_game.saved_at = now

            db_session.add(
                ScoreEntry(player_name=name, score=state.score, recorded_at=now)
            )
            db_session.commit()

        logger.info("game_saved", room=state.current, score=state.score)
        return "Game saved."

    def load(self, state: GameState) -> str:
        """Replace state in place with the player's saved game."""
        name = state.player.name
        with Session(self.engine) as db_session:
            statement = select(SavedGame).where(SavedGame.player_name == name)
            saved_game = db_session.exec(statement).first()
            if saved_game is None:
                raise CommandError("No saved game found.")
            blob = saved_game.state_blob

        restored = pickle.loads(zlib.decompress(blob))
        state.restore(restored)
        logger.info("game_loaded", room=state.current, score=state.score)
        return f"Game loaded.\n{state.room.describe()}"

    def scores(self) -> str:
        """Render the best recorded scores, highest first."""
        with Session(self.engine) as db_session:
            statement = (
                select(ScoreEntry)
                .order_by(ScoreEntry.score.desc(), ScoreEntry.recorded_at)
                .limit(self.scores_limit)
            )
            entries = db_session.exec(statement).all()

        if not entries:
            return "No scores yet."
        lines = ["Top scores:"]
        for rank, entry in enumerate(entries, start=1):
            lines.append(f"{rank}. {entry.player_name}: {entry.score}")
        return "\n".join(lines)
