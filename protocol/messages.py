"""Messages delivered by the runtime to a model.

Message kinds:
- KeyMsg  - a key was pressed (carries a KeyEvent)
- TickMsg - a timer fired (command-scheduled or clock-driven)
- QuitMsg - the program is shutting down

Messages are immutable and consumed exactly once.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class KeyEventKind(Enum):
    """Whether a key went down, auto-repeated, or came up."""
    
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


class KeyCode:
    """Names for non-printable keys.

    Printable keys are delivered as the character itself.
    """
    
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    ESC = "esc"
    BACKSPACE = "backspace"
    TAB = "tab"
    BACKTAB = "backtab"
    HOME = "home"
    END = "end"
    PGUP = "pgup"
    PGDN = "pgdn"
    INSERT = "insert"
    DELETE = "delete"
    SPACE = " "
    
    @staticmethod
    def f(n: int) -> str:
        """Function key name, e.g. ``KeyCode.f(5) == "f5"``."""
        return f"f{n}"
    
    @staticmethod
    def ctrl(char: str) -> str:
        """Control chord name, e.g. ``KeyCode.ctrl("p") == "ctrl+p"``."""
        return f"ctrl+{char}"
    
    @staticmethod
    def alt(char: str) -> str:
        """Alt chord name, e.g. ``KeyCode.alt("x") == "alt+x"``."""
        return f"alt+{char}"


@dataclass(frozen=True)
class KeyEvent:
    """
    A single key event.
    
    Attributes:
        code: Printable character or a KeyCode name
        kind: Press, repeat or release
    """
    
    code: str
    kind: KeyEventKind = KeyEventKind.PRESS
    
    def __post_init__(self):
        """Validate key code."""
        if not self.code:
            raise ValueError("key code must be a non-empty string")
    
    def is_char(self) -> bool:
        """Check if this event carries a single printable character."""
        return len(self.code) == 1 and self.code.isprintable()
    
    def is_press(self) -> bool:
        """Check if this is a press (not repeat or release)."""
        return self.kind is KeyEventKind.PRESS


@dataclass(frozen=True)
class KeyMsg:
    """Key input message."""
    
    key: KeyEvent


@dataclass(frozen=True)
class TickMsg:
    """Timer fire message."""


@dataclass(frozen=True)
class QuitMsg:
    """Quit signal message."""


Msg = Union[KeyMsg, TickMsg, QuitMsg]

TICK = TickMsg()
QUIT = QuitMsg()
