"""Shopping list: move a cursor over choices and toggle them."""

from __future__ import annotations

from protocol.commands import Cmd, NONE, QUIT_CMD, tick
from protocol.messages import KeyCode, KeyMsg, Msg, QuitMsg, TickMsg
from protocol.model import Model

DEFAULT_CHOICES = ["Buy carrots", "Buy celery", "Buy kohlrabi"]

# Keeps a timer running (e.g. for animation)
TICK_SECONDS = 0.1


class ShoppingListModel(Model):
    def __init__(self, choices: list[str] | None = None) -> None:
        self.choices = list(choices if choices is not None else DEFAULT_CHOICES)
        self.cursor = 0
        self.selected = [False] * len(self.choices)
        self.ticks = 0

    def init(self) -> Cmd:
        return tick(TICK_SECONDS)

    def update(self, msg: Msg) -> Cmd:
        if isinstance(msg, QuitMsg):
            return QUIT_CMD
        if isinstance(msg, TickMsg):
            self.ticks += 1
            return tick(TICK_SECONDS)
        if isinstance(msg, KeyMsg):
            return self._handle_key(msg.key.code)
        return NONE

    def _handle_key(self, code: str) -> Cmd:
        if code in ("q", KeyCode.ESC):
            return QUIT_CMD
        if code in (KeyCode.UP, "k"):
            if self.cursor > 0:
                self.cursor -= 1
        elif code in (KeyCode.DOWN, "j"):
            if self.cursor < len(self.choices) - 1:
                self.cursor += 1
        elif code in (KeyCode.ENTER, KeyCode.SPACE):
            if self.choices:
                self.selected[self.cursor] = not self.selected[self.cursor]
        return NONE

    def view(self) -> str:
        lines = ["What should we buy at the market?", ""]
        for index, choice in enumerate(self.choices):
            cursor = ">" if index == self.cursor else " "
            checked = "x" if self.selected[index] else " "
            lines.append(f"{cursor} [{checked}] {choice}")
        lines.append("")
        lines.append("Press q to quit.")
        return "\n".join(lines) + "\n"
