"""Countdown that advances on ticks and quits on its own."""

from __future__ import annotations

import time
from typing import Callable

from presentation.helpers import boxed, gradient, progress_bar
from protocol.commands import Cmd, NONE, QUIT_CMD, tick
from protocol.messages import KeyCode, KeyMsg, Msg, QuitMsg, TickMsg
from protocol.model import Model

BANNER = "LUMA\ncountdown"


class CountdownModel(Model):
    """Counts down ``steps`` intervals of ``interval`` seconds, then quits.

    Ticks arrive both from its own timer and from the runtime clock, so
    progress is measured in elapsed running time rather than tick count.
    """

    def __init__(
        self,
        steps: int = 50,
        interval: float = 0.1,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if steps <= 0:
            raise ValueError(f"steps must be > 0, got {steps}")
        self.steps = steps
        self.interval = interval
        self.remaining = steps
        self.paused = False
        self._clock = clock
        self._elapsed = 0.0
        self._last = clock()

    def init(self) -> Cmd:
        self._last = self._clock()
        return tick(self.interval)

    def _advance(self) -> None:
        now = self._clock()
        if not self.paused:
            self._elapsed += now - self._last
        self._last = now
        self.remaining = max(0, self.steps - int(self._elapsed / self.interval))

    def update(self, msg: Msg) -> Cmd:
        if isinstance(msg, QuitMsg):
            return QUIT_CMD
        if isinstance(msg, KeyMsg):
            if msg.key.code in ("q", KeyCode.ESC):
                return QUIT_CMD
            if msg.key.code == KeyCode.SPACE:
                self._advance()
                self.paused = not self.paused
            return NONE
        if isinstance(msg, TickMsg):
            self._advance()
            if self.remaining == 0:
                return QUIT_CMD
            return tick(self.interval)
        return NONE

    def view(self) -> str:
        done = self.steps - self.remaining
        status = "paused" if self.paused else "running"
        body = "\n".join(
            [
                progress_bar(done, self.steps),
                f"{self.remaining} of {self.steps} steps left ({status})",
            ]
        )
        return "\n".join(
            [
                gradient(BANNER, "#00ffff", "#0033ff"),
                boxed(body, title="Countdown"),
                "Space pauses, q quits.",
            ]
        )
