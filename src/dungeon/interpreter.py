"""Line-oriented command loop.

Interpreter.run() reads lines until end of input or until a handler
returns a Halt. Each line is split on whitespace; the first word picks the
command and the rest are its arguments. A command that completes adds one
point to the score; a command that fails adds nothing and the loop goes on.
"""

import io
from collections.abc import Mapping
from typing import TextIO

from .engine.commands import Command
from .engine.errors import CommandError, Halt
from .engine.state import GameState
from .logging import get_logger

logger = get_logger(__name__)

BANNER = "DungeonMini. Type 'help' for commands."
PROMPT = "> "


class Interpreter:
    """Reads commands from ``stdin`` and writes responses to ``stdout``."""

    def __init__(
        self,
        state: GameState,
        commands: Mapping[str, Command],
        stdin: TextIO,
        stdout: TextIO,
    ):
        self.state = state
        self.commands = commands
        self.stdin = stdin
        self.stdout = stdout
        # undecodable bytes become U+FFFD instead of raising mid-session
        if isinstance(stdin, io.TextIOWrapper):
            stdin.reconfigure(errors="replace")

    def _write(self, text: str) -> None:
        self.stdout.write(text + "\n")

    def run(self) -> int | None:
        """Process input until EOF (returns None) or a Halt (returns its status)."""
        self._write(BANNER)
        while True:
            self.stdout.write(PROMPT)
            self.stdout.flush()
            try:
                line = self.stdin.readline()
            except UnicodeDecodeError as exc:
                logger.warning("input_undecodable", reason=str(exc))
                self._write(f"Error: Could not decode input: {exc.reason}")
                continue
            if not line:
                logger.debug("input_exhausted", score=self.state.score)
                return None

            halt = self.execute(line)
            if halt is not None:
                self._write(halt.message)
                logger.info("session_halted", status=halt.status, score=self.state.score)
                return halt.status

    def execute(self, line: str) -> Halt | None:
        """Run one input line, printing its result. Returns a Halt to stop."""
        words = line.split()
        if not words:
            return None

        name = words[0].lower()
        args = words[1:]
        try:
            handler = self.commands.get(name)
            if handler is None:
                raise CommandError(f"Unknown command: {name}")
            result = handler(self.state, args)
        except CommandError as exc:
            logger.debug("command_rejected", command=name, reason=str(exc))
            self._write(f"Error: {exc}")
            return None
        except Exception as exc:
            logger.exception("command_failed", command=name)
            self._write(f"Unexpected error: {type(exc).__name__}: {exc}")
            return None

        if isinstance(result, Halt):
            return result

        self.state.add_score(1)
        logger.debug("command_executed", command=name, score=self.state.score)
        if result:
            self._write(result)
        return None
