"""Terminal lifecycle: raw input, alternate screen and mouse capture."""

from __future__ import annotations

import atexit
import codecs
import os
import sys
import time
from collections import deque
from typing import IO, Deque

from rich.console import Console
from rich.control import Control

from common.logging_setup import get_logger
from protocol.messages import KeyEvent
from terminal.keys import decode_keys, decode_stream, decode_windows_key

logger = get_logger(__name__)

_IS_WINDOWS = os.name == "nt"

if not _IS_WINDOWS:
    import select
    import termios

# xterm mouse tracking: press/release, drag, urxvt and SGR extended coordinates
MOUSE_CAPTURE_ON = "\x1b[?1000h\x1b[?1002h\x1b[?1015h\x1b[?1006h"
MOUSE_CAPTURE_OFF = "\x1b[?1006l\x1b[?1015l\x1b[?1002l\x1b[?1000l"

# Wait for the rest of a split escape sequence before taking it as typed
ESCAPE_TIMEOUT = 0.05


class TerminalError(Exception):
    """Raised when the terminal cannot be set up, read or written."""


class TerminalSession:
    """
    Exclusive hold on the controlling terminal.

    ``enter`` switches to raw input, the alternate screen and mouse capture;
    ``restore`` undoes them in reverse order and is safe to call any number
    of times. Input is read with a bounded wait through ``poll`` and
    ``read_key``.
    """

    def __init__(
        self,
        console: Console | None = None,
        stdin: IO | None = None,
        mouse_capture: bool = True,
        alt_screen: bool = True,
    ) -> None:
        """
        Initialize terminal session.

        Args:
            console: Output console (defaults to stdout)
            stdin: Input stream (defaults to sys.stdin)
            mouse_capture: Enable mouse reporting while active
            alt_screen: Use the alternate screen buffer while active
        """
        self.console = console or Console()
        self._stdin = stdin if stdin is not None else sys.stdin
        self._want_mouse = mouse_capture
        self._want_alt_screen = alt_screen

        self._saved_attrs: list | None = None
        self.raw_mode = False
        self.alt_screen = False
        self.mouse_capture = False

        self._decoder = codecs.getincrementaldecoder("utf-8")("replace")
        self._pending: Deque[KeyEvent] = deque()
        self._leftover = ""

    @property
    def active(self) -> bool:
        """Whether any terminal mode is currently held."""
        return self.raw_mode or self.alt_screen or self.mouse_capture

    def __enter__(self) -> "TerminalSession":
        self.enter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()

    def enter(self) -> None:
        """
        Acquire raw input, alternate screen and mouse capture.

        Modes entered before a failure are released again before the error
        propagates.
        """
        atexit.register(self.restore)
        try:
            self._enable_raw_mode()
            if self._want_alt_screen:
                self.console.control(Control.alt_screen(True))
                self.alt_screen = True
            self.console.show_cursor(False)
            if self._want_mouse:
                self._write(MOUSE_CAPTURE_ON)
                self.mouse_capture = True
            self._flush()
        except OSError:
            self.restore()
            raise
        logger.debug("Terminal modes acquired")

    def restore(self) -> None:
        """
        Release mouse capture, alternate screen and raw input, then flush.

        Every step is attempted; the first failure is re-raised afterwards.
        """
        if not self.active:
            atexit.unregister(self.restore)
            return

        first_error: OSError | None = None

        if self.mouse_capture:
            try:
                self._write(MOUSE_CAPTURE_OFF)
            except OSError as e:
                first_error = first_error or e
            self.mouse_capture = False

        if self.alt_screen:
            try:
                self.console.control(Control.alt_screen(False))
            except OSError as e:
                first_error = first_error or e
            self.alt_screen = False

        try:
            self.console.show_cursor(True)
        except OSError as e:
            first_error = first_error or e

        if self.raw_mode:
            try:
                self._disable_raw_mode()
            except OSError as e:
                first_error = first_error or e
            self.raw_mode = False

        try:
            self._flush()
        except OSError as e:
            first_error = first_error or e

        atexit.unregister(self.restore)

        if first_error is not None:
            logger.error(f"Failed to restore terminal: {first_error}")
            raise first_error
        logger.debug("Terminal modes restored")

    def poll(self, timeout: float) -> bool:
        """
        Wait up to ``timeout`` seconds for key input.

        Returns:
            True if ``read_key`` has something to return
        """
        if self._pending:
            return True
        if _IS_WINDOWS:
            return self._poll_windows(timeout)
        if self._leftover:
            timeout = max(timeout, ESCAPE_TIMEOUT)
        readable, _, _ = select.select([self._stdin.fileno()], [], [], timeout)
        if readable:
            return True
        if self._leftover:
            # Nothing followed: a lone ESC is the esc key, a cut-off sequence is dropped
            self._pending.extend(decode_keys(self._leftover))
            self._leftover = ""
        return bool(self._pending)

    def read_key(self) -> KeyEvent | None:
        """
        Read the next key event.

        Returns:
            Key event, or None when the input held no key (e.g. a mouse report)

        Raises:
            TerminalError: If stdin reached end of file
        """
        if self._pending:
            return self._pending.popleft()
        if _IS_WINDOWS:
            return self._read_key_windows()

        data = os.read(self._stdin.fileno(), 1024)
        if not data:
            raise TerminalError("Terminal input closed")
        events, self._leftover = decode_stream(self._leftover + self._decoder.decode(data))
        self._pending.extend(events)
        if self._pending:
            return self._pending.popleft()
        return None

    def _enable_raw_mode(self) -> None:
        if _IS_WINDOWS:
            # msvcrt.getwch already reads unbuffered without echo
            return
        fd = self._stdin.fileno()
        try:
            self._saved_attrs = termios.tcgetattr(fd)
            attrs = termios.tcgetattr(fd)
            # IFLAG: no break signal, CR translation, parity check, stripping, flow control
            attrs[0] &= ~(termios.BRKINT | termios.ICRNL | termios.INPCK | termios.ISTRIP | termios.IXON)
            # LFLAG: no echo, canonical mode, extended input; ISIG kept so Ctrl+C interrupts
            attrs[3] &= ~(termios.ECHO | termios.ICANON | termios.IEXTEN)
            attrs[6][termios.VMIN] = 1
            attrs[6][termios.VTIME] = 0
            termios.tcsetattr(fd, termios.TCSAFLUSH, attrs)
        except termios.error as e:
            raise OSError(*e.args) from e
        self.raw_mode = True

    def _disable_raw_mode(self) -> None:
        if _IS_WINDOWS or self._saved_attrs is None:
            return
        try:
            termios.tcsetattr(self._stdin.fileno(), termios.TCSADRAIN, self._saved_attrs)
        except termios.error as e:
            raise OSError(*e.args) from e
        self._saved_attrs = None

    def _write(self, data: str) -> None:
        self.console.file.write(data)

    def _flush(self) -> None:
        self.console.file.flush()

    def _poll_windows(self, timeout: float) -> bool:
        import msvcrt

        deadline = time.monotonic() + timeout
        while not msvcrt.kbhit():
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            time.sleep(min(0.005, remaining))
        return True

    def _read_key_windows(self) -> KeyEvent | None:
        import msvcrt

        ch = msvcrt.getwch()
        scan = msvcrt.getwch() if ch in ("\x00", "\xe0") else None
        return decode_windows_key(ch, scan)
