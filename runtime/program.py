"""Event loop driving a model against the terminal."""

from __future__ import annotations

import time
from enum import Enum
from typing import Callable, Optional

from common.config import RuntimeConfig, default_config
from common.logging_setup import get_logger
from protocol.commands import QuitCmd
from protocol.messages import KeyMsg, QuitMsg, TICK
from protocol.model import Model
from runtime.channel import MessageChannel
from runtime.dispatcher import Dispatcher
from terminal.lifecycle import TerminalError, TerminalSession
from terminal.renderer import ViewRenderer

logger = get_logger(__name__)


class ProgramState(Enum):
    """Loop states."""

    RUNNING = "running"
    TERMINATED = "terminated"


class Program:
    """
    Cooperative single-threaded runtime for one model.

    Each loop iteration, in order:
    1. Drain at most one queued message into ``update`` and dispatch the result
    2. Poll the keyboard for a bounded interval; deliver a key straight to ``update``
    3. Deliver a clock-driven tick once ``tick_interval`` has elapsed
    4. Render ``view`` over the whole screen
    5. Stop if a QuitMsg was delivered or a QuitCmd returned in step 1

    Terminal modes are acquired when the Program is built and released on
    every way out of ``run``.
    """

    def __init__(
        self,
        model: Model,
        terminal: Optional[TerminalSession] = None,
        renderer: Optional[ViewRenderer] = None,
        config: Optional[RuntimeConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Take ownership of ``model``, acquire the terminal and run ``init``.

        Args:
            model: Application model
            terminal: Terminal session (defaults to the process terminal)
            renderer: View renderer (defaults to one on the terminal's console)
            config: Runtime settings
            clock: Monotonic clock used for the forced tick

        Raises:
            TerminalError: If the terminal modes cannot be acquired
        """
        self.config = config or default_config
        self._model = model
        self._terminal = terminal or TerminalSession(
            mouse_capture=self.config.mouse_capture,
            alt_screen=self.config.alt_screen,
        )
        self._renderer = renderer or ViewRenderer(self._terminal.console)
        self._clock = clock

        self._channel = MessageChannel()
        self._dispatcher = Dispatcher(self._channel)
        self._state = ProgramState.RUNNING
        self._started = False

        try:
            self._terminal.enter()
        except OSError as e:
            self._dispatcher.shutdown()
            logger.error(f"Failed to acquire terminal: {e}")
            raise TerminalError(f"Failed to acquire terminal: {e}") from e

        try:
            self._dispatcher.dispatch(self._model.init())
        except BaseException:
            self._shutdown()
            raise

        self._last_tick = self._clock()

    @property
    def model(self) -> Model:
        """The owned model (read-only access for callers and tests)."""
        return self._model

    @property
    def state(self) -> ProgramState:
        """Current loop state."""
        return self._state

    @property
    def dispatcher(self) -> Dispatcher:
        """Dispatcher acting on the model's commands."""
        return self._dispatcher

    def run(self) -> None:
        """
        Run the loop until the model quits.

        Raises:
            TerminalError: On any terminal I/O failure (the run is aborted)
            RuntimeError: If the program has already been run
        """
        if self._started:
            raise RuntimeError("Program has already been run")
        self._started = True

        logger.debug("Program loop started")
        try:
            while True:
                self._step()
                if self._state is ProgramState.TERMINATED:
                    break
        except OSError as e:
            logger.error(f"Terminal I/O error: {e}")
            raise TerminalError(f"Terminal I/O error: {e}") from e
        finally:
            self._shutdown()
        logger.debug("Program loop finished")

    def _step(self) -> None:
        """Run one loop iteration."""
        msg = self._channel.try_recv()
        if msg is not None:
            cmd = self._model.update(msg)
            if isinstance(msg, QuitMsg) or isinstance(cmd, QuitCmd):
                self._state = ProgramState.TERMINATED
            self._dispatcher.dispatch(cmd)

        if self._state is ProgramState.RUNNING:
            if self._terminal.poll(self.config.poll_interval):
                key = self._terminal.read_key()
                if key is not None:
                    self._dispatcher.dispatch(self._model.update(KeyMsg(key)))

            now = self._clock()
            if now - self._last_tick >= self.config.tick_interval:
                # Command returned for the clock tick is not dispatched
                self._model.update(TICK)
                self._last_tick = now

        self._renderer.render(self._model.view())

    def _shutdown(self) -> None:
        """Stop timers, close the channel and release the terminal."""
        self._state = ProgramState.TERMINATED
        self._dispatcher.shutdown()
        try:
            self._terminal.restore()
        except OSError as e:
            raise TerminalError(f"Failed to restore terminal: {e}") from e
