"""Model capability every application state implements."""

from typing import Optional

from protocol.commands import Cmd, NONE
from protocol.messages import Msg


class Model:
    """Base class for application models.

    The runtime calls ``init`` once, ``update`` once per delivered message
    and ``view`` once per render, all from the loop thread. Failures belong
    in model state and should surface through ``view``.
    """

    def init(self) -> Optional[Cmd]:
        """
        Hook invoked once before the loop starts.

        Returns:
            Initial command (e.g. start a timer). Defaults to NONE.
        """
        return NONE

    def update(self, msg: Msg) -> Optional[Cmd]:
        """
        Apply a message to the model state in place.

        Must not block. Returning None is the same as returning NONE.

        Returns:
            Command for the dispatcher.
        """
        raise NotImplementedError

    def view(self) -> str:
        """Render the current state as text without mutating it."""
        raise NotImplementedError
