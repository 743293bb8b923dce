"""Counter console: arrows change a counter, typed text is submitted with Enter."""

from __future__ import annotations

from collections import deque

from presentation.helpers import boxed, colored, table
from protocol.commands import Cmd, NONE, QUIT_CMD, tick
from protocol.messages import KeyCode, KeyMsg, Msg, QuitMsg, TickMsg
from protocol.model import Model

TICK_SECONDS = 0.1
HISTORY_SIZE = 5


class CounterModel(Model):
    """Counter plus a one-line command prompt with a short history."""

    def __init__(self) -> None:
        self.counter = 0
        self.input = ""
        self.history: deque[str] = deque(maxlen=HISTORY_SIZE)
        self.ticks = 0

    def init(self) -> Cmd:
        return tick(TICK_SECONDS)

    def update(self, msg: Msg) -> Cmd:
        if isinstance(msg, QuitMsg):
            return QUIT_CMD
        if isinstance(msg, TickMsg):
            self.ticks += 1
            return tick(TICK_SECONDS)
        if not isinstance(msg, KeyMsg):
            return NONE

        key = msg.key
        if key.code == "q" and not self.input:
            return QUIT_CMD
        if key.code == KeyCode.ESC:
            return QUIT_CMD
        if key.code == KeyCode.UP:
            self.counter += 1
        elif key.code == KeyCode.DOWN:
            self.counter -= 1
        elif key.code == KeyCode.ENTER:
            if self.input:
                self.history.appendleft(self.input)
            self.input = ""
        elif key.code == KeyCode.BACKSPACE:
            self.input = self.input[:-1]
        elif key.is_char():
            self.input += key.code
        return NONE

    def view(self) -> str:
        body = "\n".join(
            [
                f"Counter: {self.counter}",
                f"Input: {self.input}",
            ]
        )
        parts = [boxed(body, title="Nula CLI")]
        if self.history:
            parts.append(table(["#", "Command"], enumerate(self.history, start=1), title="Recent"))
        parts.append(
            colored(
                "Up/Down change the counter, type a command and press Enter, "
                "q (with empty input) or Esc quits.",
                "grey50",
            )
        )
        return "\n".join(parts)
