"""Tests for the message/command vocabulary and the Model base class."""

import unittest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from protocol import (
    KeyCode,
    KeyEvent,
    KeyEventKind,
    KeyMsg,
    Model,
    NONE,
    NoneCmd,
    QUIT,
    QUIT_CMD,
    QuitCmd,
    QuitMsg,
    TICK,
    TickCmd,
    TickMsg,
    tick,
)


class TestKeyEvent(unittest.TestCase):
    """Test KeyEvent and KeyCode."""
    
    def test_default_kind_is_press(self):
        """Test that key events default to presses."""
        event = KeyEvent("a")
        self.assertEqual(event.kind, KeyEventKind.PRESS)
        self.assertTrue(event.is_press())
    
    def test_release_is_not_press(self):
        """Test release events."""
        event = KeyEvent(KeyCode.UP, KeyEventKind.RELEASE)
        self.assertFalse(event.is_press())
    
    def test_is_char(self):
        """Test printable character detection."""
        self.assertTrue(KeyEvent("x").is_char())
        self.assertTrue(KeyEvent(KeyCode.SPACE).is_char())
        self.assertFalse(KeyEvent(KeyCode.ENTER).is_char())
        self.assertFalse(KeyEvent(KeyCode.ctrl("p")).is_char())
    
    def test_empty_code_rejected(self):
        """Test that empty key codes are invalid."""
        with self.assertRaises(ValueError):
            KeyEvent("")
    
    def test_chord_names(self):
        """Test helper names for chords and function keys."""
        self.assertEqual(KeyCode.ctrl("p"), "ctrl+p")
        self.assertEqual(KeyCode.alt("x"), "alt+x")
        self.assertEqual(KeyCode.f(5), "f5")
    
    def test_events_are_immutable_and_comparable(self):
        """Test value semantics of key events."""
        event = KeyEvent("a")
        self.assertEqual(event, KeyEvent("a"))
        with self.assertRaises(AttributeError):
            event.code = "b"  # type: ignore[misc]


class TestMessagesAndCommands(unittest.TestCase):
    """Test message and command values."""
    
    def test_shared_instances(self):
        """Test the shared message and command instances."""
        self.assertIsInstance(TICK, TickMsg)
        self.assertIsInstance(QUIT, QuitMsg)
        self.assertIsInstance(NONE, NoneCmd)
        self.assertIsInstance(QUIT_CMD, QuitCmd)
        self.assertEqual(TickMsg(), TICK)
    
    def test_key_message_wraps_event(self):
        """Test KeyMsg equality."""
        self.assertEqual(KeyMsg(KeyEvent("q")), KeyMsg(KeyEvent("q")))
        self.assertNotEqual(KeyMsg(KeyEvent("q")), KeyMsg(KeyEvent("w")))
    
    def test_tick_constructor(self):
        """Test tick() builds a TickCmd in seconds."""
        cmd = tick(0.25)
        self.assertIsInstance(cmd, TickCmd)
        self.assertEqual(cmd.duration, 0.25)
        self.assertEqual(tick(1).duration, 1.0)
    
    def test_negative_duration_rejected(self):
        """Test that a negative tick duration is invalid."""
        with self.assertRaises(ValueError):
            tick(-0.1)
    
    def test_zero_duration_allowed(self):
        """Test that a zero duration is valid."""
        self.assertEqual(tick(0).duration, 0.0)


class TestModelBase(unittest.TestCase):
    """Test Model base class defaults."""
    
    def test_init_defaults_to_none(self):
        """Test that init returns NONE unless overridden."""
        self.assertEqual(Model().init(), NONE)
    
    def test_update_and_view_must_be_overridden(self):
        """Test that update and view are abstract."""
        model = Model()
        with self.assertRaises(NotImplementedError):
            model.update(TICK)
        with self.assertRaises(NotImplementedError):
            model.view()


if __name__ == "__main__":
    unittest.main()
