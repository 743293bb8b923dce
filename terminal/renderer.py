"""Full-screen view renderer."""

from rich.console import Console
from rich.control import Control
from rich.text import Text


class ViewRenderer:
    """
    Repaints the whole screen with a model's view.
    
    Each call homes the cursor, clears the screen, writes the view and
    flushes. Nothing is diffed; cost grows with the size of the view.
    """
    
    def __init__(self, console: Console):
        """
        Initialize renderer.
        
        Args:
            console: Console whose file is the terminal output
        """
        self.console = console
        self.frames = 0
    
    def render(self, view: str) -> None:
        """
        Paint ``view`` over the entire screen.
        
        ANSI styling embedded in the view (e.g. from presentation helpers)
        is parsed and re-emitted by the console.
        
        Args:
            view: Text returned by the model's ``view``
        """
        self.console.control(Control.home(), Control.clear())
        self.console.print(
            Text.from_ansi(view),
            end="",
            soft_wrap=True,
            markup=False,
            highlight=False,
        )
        self.console.file.flush()
        self.frames += 1
