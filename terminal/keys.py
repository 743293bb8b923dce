"""Decoding of raw terminal input into key events.

POSIX terminals deliver keys as characters and escape sequences:

| Input                 | Key                         |
|-----------------------|-----------------------------|
| ``\\x1b[A`` .. ``[D``   | up, down, right, left       |
| ``\\x1bOA`` .. ``OD``   | same (application mode)     |
| ``\\x1b[5~ / [6~``     | pgup / pgdn                 |
| ``\\x1b[<b;x;yM``      | SGR mouse report (ignored)  |
| ``\\x1b[M`` + 3 bytes  | X10 mouse report (ignored)  |
| ``\\r`` / ``\\n``        | enter                       |
| ``\\x7f`` / ``\\x08``    | backspace                   |
| ``\\x01`` .. ``\\x1a``   | ctrl+a .. ctrl+z            |
| ``\\x1b`` + char       | alt+char                    |
| lone ``\\x1b``         | esc                         |
"""

from typing import Dict, List, Optional, Tuple

from protocol.messages import KeyCode, KeyEvent

ESC = "\x1b"

_CONTROL_KEYS: Dict[str, str] = {
    "\r": KeyCode.ENTER,
    "\n": KeyCode.ENTER,
    "\t": KeyCode.TAB,
    "\x7f": KeyCode.BACKSPACE,
    "\x08": KeyCode.BACKSPACE,
    "\x00": "ctrl+space",
}

# CSI sequences identified by their final byte
_CSI_FINAL_KEYS: Dict[str, str] = {
    "A": KeyCode.UP,
    "B": KeyCode.DOWN,
    "C": KeyCode.RIGHT,
    "D": KeyCode.LEFT,
    "H": KeyCode.HOME,
    "F": KeyCode.END,
    "Z": KeyCode.BACKTAB,
}

# CSI sequences ending in "~", keyed by their first parameter
_CSI_TILDE_KEYS: Dict[str, str] = {
    "1": KeyCode.HOME,
    "2": KeyCode.INSERT,
    "3": KeyCode.DELETE,
    "4": KeyCode.END,
    "5": KeyCode.PGUP,
    "6": KeyCode.PGDN,
    "7": KeyCode.HOME,
    "8": KeyCode.END,
    "11": KeyCode.f(1),
    "12": KeyCode.f(2),
    "13": KeyCode.f(3),
    "14": KeyCode.f(4),
    "15": KeyCode.f(5),
    "17": KeyCode.f(6),
    "18": KeyCode.f(7),
    "19": KeyCode.f(8),
    "20": KeyCode.f(9),
    "21": KeyCode.f(10),
    "23": KeyCode.f(11),
    "24": KeyCode.f(12),
}

_SS3_KEYS: Dict[str, str] = {
    "A": KeyCode.UP,
    "B": KeyCode.DOWN,
    "C": KeyCode.RIGHT,
    "D": KeyCode.LEFT,
    "H": KeyCode.HOME,
    "F": KeyCode.END,
    "P": KeyCode.f(1),
    "Q": KeyCode.f(2),
    "R": KeyCode.f(3),
    "S": KeyCode.f(4),
}

_CSI_PARAM_CHARS = set("0123456789;:<=>?")

# Windows console scan codes that follow a "\x00" or "\xe0" prefix
WINDOWS_SCAN_CODES: Dict[str, str] = {
    "H": KeyCode.UP,
    "P": KeyCode.DOWN,
    "K": KeyCode.LEFT,
    "M": KeyCode.RIGHT,
    "G": KeyCode.HOME,
    "O": KeyCode.END,
    "I": KeyCode.PGUP,
    "Q": KeyCode.PGDN,
    "R": KeyCode.INSERT,
    "S": KeyCode.DELETE,
    ";": KeyCode.f(1),
    "<": KeyCode.f(2),
    "=": KeyCode.f(3),
    ">": KeyCode.f(4),
    "?": KeyCode.f(5),
    "@": KeyCode.f(6),
    "A": KeyCode.f(7),
    "B": KeyCode.f(8),
    "C": KeyCode.f(9),
    "D": KeyCode.f(10),
    "\x85": KeyCode.f(11),
    "\x86": KeyCode.f(12),
}


def _single_key(ch: str) -> Optional[str]:
    """Map a single non-escape character to a key code."""
    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]
    if ch == ESC:
        return KeyCode.ESC
    code = ord(ch)
    if 1 <= code <= 26:
        return KeyCode.ctrl(chr(code + 96))
    if code < 32:
        return None
    return ch


def decode_stream(text: str) -> Tuple[List[KeyEvent], str]:
    """
    Decode terminal input that may continue in a later read.

    An escape sequence cut off at the end of ``text``, including a lone
    trailing ESC, is not decoded but handed back so the caller can put it
    in front of the next chunk.

    Args:
        text: Characters read from the terminal, prefixed with any leftover

    Returns:
        Key events in input order and the undecoded tail
    """
    return _decode(text, final=False)


def decode_keys(text: str) -> List[KeyEvent]:
    """
    Decode a complete chunk of terminal input into key events.

    Truncated escape sequences at the end of ``text`` are dropped, a lone
    trailing ESC is the esc key; mouse reports are consumed without
    producing events.

    Args:
        text: Characters read from the terminal in one go

    Returns:
        Key events in input order
    """
    events, _ = _decode(text, final=True)
    return events


def _decode(text: str, final: bool) -> Tuple[List[KeyEvent], str]:
    events: List[KeyEvent] = []
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]

        if ch != ESC:
            code = _single_key(ch)
            if code:
                events.append(KeyEvent(code))
            i += 1
            continue

        if i + 1 >= n:
            if not final:
                return events, text[i:]
            events.append(KeyEvent(KeyCode.ESC))
            break

        nxt = text[i + 1]

        if nxt == "[":
            j = i + 2
            while j < n and text[j] in _CSI_PARAM_CHARS:
                j += 1
            if j >= n:
                break  # truncated
            params = text[i + 2:j]
            final_byte = text[j]
            if final_byte == "M" and not params:
                # X10 mouse: button, column, row
                if j + 4 > n:
                    break  # truncated
                i = j + 4
                continue
            i = j + 1
            if params.startswith("<") and final_byte in ("M", "m"):
                continue  # SGR mouse
            if final_byte == "~":
                code = _CSI_TILDE_KEYS.get(params.split(";")[0])
            else:
                code = _CSI_FINAL_KEYS.get(final_byte)
            if code:
                events.append(KeyEvent(code))
            continue

        if nxt == "O":
            if i + 2 >= n:
                break  # truncated
            code = _SS3_KEYS.get(text[i + 2])
            if code:
                events.append(KeyEvent(code))
            i += 3
            continue

        if nxt == ESC:
            events.append(KeyEvent(KeyCode.ESC))
            i += 1
            continue

        code = _single_key(nxt)
        if code:
            events.append(KeyEvent(KeyCode.alt(code)))
        i += 2

    if i < n and not final:
        return events, text[i:]
    return events, ""


def decode_windows_key(ch: str, scan: Optional[str] = None) -> Optional[KeyEvent]:
    """
    Decode a key read with ``msvcrt.getwch``.

    Args:
        ch: First character returned
        scan: Second character when ``ch`` is a "\\x00"/"\\xe0" prefix

    Returns:
        Key event, or None for unmapped input
    """
    if ch in ("\x00", "\xe0"):
        code = WINDOWS_SCAN_CODES.get(scan or "")
        return KeyEvent(code) if code else None
    if ch == "\x08":
        return KeyEvent(KeyCode.BACKSPACE)
    code = _single_key(ch)
    return KeyEvent(code) if code else None
