"""Message and command vocabulary shared by models and the runtime."""

from protocol.messages import KeyCode, KeyEvent, KeyEventKind, KeyMsg, Msg, QuitMsg, TickMsg, QUIT, TICK
from protocol.commands import Cmd, NoneCmd, QuitCmd, TickCmd, NONE, QUIT_CMD, tick
from protocol.model import Model

__all__ = [
    "KeyCode",
    "KeyEvent",
    "KeyEventKind",
    "KeyMsg",
    "Msg",
    "QuitMsg",
    "TickMsg",
    "QUIT",
    "TICK",
    "Cmd",
    "NoneCmd",
    "QuitCmd",
    "TickCmd",
    "NONE",
    "QUIT_CMD",
    "tick",
    "Model",
]
