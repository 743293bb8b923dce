"""Tests for terminal key decoding."""

import unittest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from protocol.messages import KeyCode, KeyEvent
from terminal.keys import decode_keys, decode_stream, decode_windows_key


def codes(text):
    return [event.code for event in decode_keys(text)]


class TestDecodeKeys(unittest.TestCase):
    """Test decode_keys for POSIX input."""
    
    def test_printable_characters(self):
        """Test plain characters map to themselves."""
        self.assertEqual(codes("ab "), ["a", "b", " "])
        self.assertEqual(codes("é"), ["é"])
    
    def test_arrow_keys(self):
        """Test CSI and SS3 arrow sequences."""
        self.assertEqual(
            codes("\x1b[A\x1b[B\x1b[C\x1b[D"),
            [KeyCode.UP, KeyCode.DOWN, KeyCode.RIGHT, KeyCode.LEFT],
        )
        self.assertEqual(codes("\x1bOA\x1bOB"), [KeyCode.UP, KeyCode.DOWN])
    
    def test_modified_arrow_maps_to_arrow(self):
        """Test arrows with modifier parameters."""
        self.assertEqual(codes("\x1b[1;5A"), [KeyCode.UP])
    
    def test_tilde_keys(self):
        """Test page, insert/delete and function keys."""
        self.assertEqual(codes("\x1b[5~\x1b[6~"), [KeyCode.PGUP, KeyCode.PGDN])
        self.assertEqual(codes("\x1b[3~"), [KeyCode.DELETE])
        self.assertEqual(codes("\x1b[15~"), ["f5"])
        self.assertEqual(codes("\x1bOP"), ["f1"])
    
    def test_control_characters(self):
        """Test enter, tab, backspace and ctrl chords."""
        self.assertEqual(codes("\r"), [KeyCode.ENTER])
        self.assertEqual(codes("\n"), [KeyCode.ENTER])
        self.assertEqual(codes("\t"), [KeyCode.TAB])
        self.assertEqual(codes("\x7f"), [KeyCode.BACKSPACE])
        self.assertEqual(codes("\x10"), ["ctrl+p"])
        self.assertEqual(codes("\x01"), ["ctrl+a"])
    
    def test_lone_escape(self):
        """Test a bare ESC byte is the escape key."""
        self.assertEqual(codes("\x1b"), [KeyCode.ESC])
        self.assertEqual(codes("\x1b\x1b"), [KeyCode.ESC, KeyCode.ESC])
    
    def test_alt_chord(self):
        """Test ESC followed by a character."""
        self.assertEqual(codes("\x1bx"), ["alt+x"])
    
    def test_mixed_input(self):
        """Test several keys arriving in one read."""
        self.assertEqual(codes("jk\x1b[Aq"), ["j", "k", KeyCode.UP, "q"])
    
    def test_mouse_reports_ignored(self):
        """Test SGR and X10 mouse reports produce no keys."""
        self.assertEqual(codes("\x1b[<0;10;5M"), [])
        self.assertEqual(codes("\x1b[<0;10;5m"), [])
        self.assertEqual(codes("\x1b[M !!"), [])
        self.assertEqual(codes("a\x1b[<35;1;1Mb"), ["a", "b"])
    
    def test_truncated_sequence_dropped(self):
        """Test an unfinished escape sequence is discarded."""
        self.assertEqual(codes("a\x1b["), ["a"])
        self.assertEqual(codes("\x1b[12"), [])
    
    def test_events_are_presses(self):
        """Test decoded events carry the press kind."""
        self.assertEqual(decode_keys("a"), [KeyEvent("a")])


def feed(*chunks):
    """Decode chunks one after another, carrying the undecoded tail."""
    result = []
    leftover = ""
    for chunk in chunks:
        events, leftover = decode_stream(leftover + chunk)
        result.append([e.code for e in events])
    return result, leftover


class TestDecodeStream(unittest.TestCase):
    """Test decoding input that continues across reads."""

    def test_complete_input_has_no_leftover(self):
        """Test whole sequences decode fully."""
        self.assertEqual(feed("a\x1b[Bb"), ([["a", KeyCode.DOWN, "b"]], ""))

    def test_split_csi_sequence(self):
        """Test an arrow key cut after the introducer."""
        self.assertEqual(feed("\x1b[", "A"), ([[], [KeyCode.UP]], ""))

    def test_split_sgr_mouse_report(self):
        """Test a mouse report cut in its parameters produces nothing."""
        self.assertEqual(feed("x\x1b[<0;1", "2;5My"), ([["x"], ["y"]], ""))

    def test_split_x10_mouse_report(self):
        """Test an X10 report cut inside its coordinate bytes."""
        self.assertEqual(feed("\x1b[M !", "!q"), ([[], ["q"]], ""))

    def test_split_ss3_sequence(self):
        """Test an application-mode key cut after the O."""
        self.assertEqual(feed("\x1bO", "P"), ([[], [KeyCode.f(1)]], ""))

    def test_trailing_escape_is_held(self):
        """Test a final ESC waits for what follows."""
        self.assertEqual(feed("a\x1b"), ([["a"]], "\x1b"))
        self.assertEqual(feed("\x1b", "x"), ([[], ["alt+x"]], ""))

    def test_held_tail_decodes_as_complete_input(self):
        """Test a tail that never continues decodes like a finished chunk."""
        _, leftover = feed("\x1b")
        self.assertEqual(codes(leftover), [KeyCode.ESC])
        _, leftover = feed("\x1b[1")
        self.assertEqual(codes(leftover), [])


class TestDecodeWindowsKey(unittest.TestCase):
    """Test decode_windows_key for msvcrt input."""
    
    def test_scan_codes(self):
        """Test prefixed scan codes."""
        self.assertEqual(decode_windows_key("\xe0", "H"), KeyEvent(KeyCode.UP))
        self.assertEqual(decode_windows_key("\x00", "Q"), KeyEvent(KeyCode.PGDN))
        self.assertEqual(decode_windows_key("\x00", "?"), KeyEvent("f5"))
    
    def test_unknown_scan_code(self):
        """Test unmapped scan codes are dropped."""
        self.assertIsNone(decode_windows_key("\xe0", "z"))
    
    def test_plain_keys(self):
        """Test characters and control keys."""
        self.assertEqual(decode_windows_key("\r"), KeyEvent(KeyCode.ENTER))
        self.assertEqual(decode_windows_key("\x08"), KeyEvent(KeyCode.BACKSPACE))
        self.assertEqual(decode_windows_key("\x1b"), KeyEvent(KeyCode.ESC))
        self.assertEqual(decode_windows_key("q"), KeyEvent("q"))


if __name__ == "__main__":
    unittest.main()
