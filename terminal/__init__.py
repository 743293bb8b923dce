"""Terminal access for the Luma TUI runtime."""

from terminal.keys import decode_keys, decode_stream
from terminal.lifecycle import TerminalError, TerminalSession
from terminal.renderer import ViewRenderer

__all__ = ["decode_keys", "decode_stream", "TerminalError", "TerminalSession", "ViewRenderer"]
