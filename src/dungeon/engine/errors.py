"""Error and termination types shared by command handlers."""

from dataclasses import dataclass


class CommandError(Exception):
    """A user-correctable problem with a command: bad argument, no target, etc."""


@dataclass(frozen=True)
class Halt:
    """Returned by a handler to end the session and exit with ``status``."""

    message: str
    status: int = 0
