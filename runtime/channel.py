"""Message channel between timer threads and the event loop."""

import queue
import threading
from typing import Optional

from common.logging_setup import get_logger
from protocol.messages import Msg

logger = get_logger(__name__)


class MessageChannel:
    """
    Multi-producer, single-consumer message queue.
    
    Any thread may ``send``; only the loop thread receives. Once closed,
    sends are dropped silently (the receiving side is gone).
    """
    
    def __init__(self):
        self._queue: "queue.Queue[Msg]" = queue.Queue()
        self._closed = threading.Event()
    
    @property
    def closed(self) -> bool:
        """Whether the receiving end has been torn down."""
        return self._closed.is_set()
    
    def send(self, msg: Msg) -> bool:
        """
        Enqueue a message.
        
        Args:
            msg: Message to deliver
            
        Returns:
            True if enqueued, False if dropped because the channel is closed
        """
        if self._closed.is_set():
            logger.debug(f"Dropping {msg!r}: channel closed")
            return False
        self._queue.put(msg)
        return True
    
    def try_recv(self) -> Optional[Msg]:
        """Return the next pending message without blocking, or None."""
        try:
            return self._queue.get_nowait()
        except queue.Empty:
            return None
    
    def recv(self, timeout: Optional[float] = None) -> Optional[Msg]:
        """Wait up to ``timeout`` seconds for a message, or None on timeout."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None
    
    def pending(self) -> int:
        """Approximate number of queued messages."""
        return self._queue.qsize()
    
    def close(self) -> None:
        """Tear down the receiving end; later sends are dropped."""
        self._closed.set()
