"""Runtime: message channel, command dispatcher and event loop."""

from runtime.channel import MessageChannel
from runtime.dispatcher import Dispatcher, TickTimer
from runtime.program import Program, ProgramState

__all__ = ["MessageChannel", "Dispatcher", "TickTimer", "Program", "ProgramState"]
