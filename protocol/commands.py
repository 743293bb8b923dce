"""Commands a model hands back to the runtime.

Command kinds:
- NoneCmd - nothing to do
- TickCmd - deliver one TickMsg after ``duration`` seconds
- QuitCmd - terminate the program

A command is acted upon exactly once, right after the call that returned it.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class NoneCmd:
    """No effect."""


@dataclass(frozen=True)
class TickCmd:
    """
    Schedule a single timer fire.
    
    Attributes:
        duration: Delay in seconds before the TickMsg is enqueued
    """
    
    duration: float
    
    def __post_init__(self):
        """Validate duration."""
        if self.duration < 0:
            raise ValueError(f"duration must be >= 0, got {self.duration}")


@dataclass(frozen=True)
class QuitCmd:
    """Terminate the program."""


Cmd = Union[NoneCmd, TickCmd, QuitCmd]

NONE = NoneCmd()
QUIT_CMD = QuitCmd()


def tick(seconds: float) -> TickCmd:
    """Build a TickCmd firing after ``seconds``."""
    return TickCmd(duration=float(seconds))
