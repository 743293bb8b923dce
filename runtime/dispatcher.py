"""Command dispatcher and background tick timers."""

import threading
import time
from typing import List, Optional

from common.logging_setup import get_logger
from protocol.commands import Cmd, NoneCmd, QuitCmd, TickCmd
from protocol.messages import QUIT, TICK
from runtime.channel import MessageChannel

logger = get_logger(__name__)


class TickTimer:
    """
    One-shot timer that enqueues a single TickMsg.
    
    Runs on its own daemon thread, sleeps for ``duration`` seconds against a
    monotonic deadline, sends one tick and exits. ``cancel`` is reserved for
    runtime shutdown; models have no handle on it.
    """
    
    def __init__(self, duration: float, channel: MessageChannel):
        """
        Initialize tick timer.
        
        Args:
            duration: Seconds to wait before firing
            channel: Channel receiving the TickMsg
        """
        self.duration = duration
        self._channel = channel
        self._cancel_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name="luma-tick-timer",
        )
        self.fired = False
    
    def start(self) -> None:
        """Start the timer thread."""
        self._thread.start()
        logger.debug(f"Tick timer started (duration={self.duration:.3f}s)")
    
    def cancel(self) -> None:
        """Stop the timer before it fires."""
        self._cancel_event.set()
    
    def is_alive(self) -> bool:
        """Check if the timer thread is still running."""
        return self._thread.is_alive()
    
    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the timer thread to finish."""
        self._thread.join(timeout=timeout)
    
    def _run(self) -> None:
        """Timer thread main body."""
        deadline = time.monotonic() + self.duration
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            if self._cancel_event.wait(timeout=remaining):
                logger.debug("Tick timer cancelled")
                return
        
        if self._cancel_event.is_set():
            return
        self.fired = self._channel.send(TICK)


class Dispatcher:
    """
    Turns commands into at most one deferred message each.
    
    - NoneCmd: nothing
    - QuitCmd: QuitMsg enqueued before ``dispatch`` returns
    - TickCmd: a new TickTimer; earlier timers are neither merged nor cancelled
    """
    
    def __init__(self, channel: MessageChannel):
        """
        Initialize dispatcher.
        
        Args:
            channel: Shared channel the loop drains
        """
        self.channel = channel
        self._timers: List[TickTimer] = []
        self._lock = threading.Lock()
    
    def dispatch(self, cmd: Optional[Cmd]) -> None:
        """
        Act on a command once.
        
        Args:
            cmd: Command returned by init/update (None means NoneCmd)
            
        Raises:
            TypeError: If ``cmd`` is not a known command
        """
        if cmd is None or isinstance(cmd, NoneCmd):
            return
        
        if isinstance(cmd, QuitCmd):
            self.channel.send(QUIT)
            return
        
        if isinstance(cmd, TickCmd):
            timer = TickTimer(cmd.duration, self.channel)
            with self._lock:
                self._timers = [t for t in self._timers if t.is_alive()]
                self._timers.append(timer)
            timer.start()
            return
        
        raise TypeError(f"Unknown command: {cmd!r}")
    
    def outstanding(self) -> int:
        """Number of timers that have not fired or been cancelled yet."""
        with self._lock:
            return sum(1 for t in self._timers if t.is_alive())
    
    def shutdown(self) -> None:
        """Cancel outstanding timers and close the channel."""
        with self._lock:
            timers = list(self._timers)
            self._timers = []
        
        for timer in timers:
            timer.cancel()
        self.channel.close()
        
        if timers:
            logger.debug(f"Dispatcher shut down, cancelled {len(timers)} timer(s)")
