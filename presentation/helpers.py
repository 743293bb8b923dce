"""Presentation helpers that render rich renderables to ANSI text.

Models call these from ``view`` and embed the returned strings; the
renderer parses the ANSI back when painting the screen.
"""

from __future__ import annotations

import io
from typing import Iterable, Sequence

from rich.color import Color, ColorParseError, blend_rgb
from rich.color_triplet import ColorTriplet
from rich.console import Console, RenderableType
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.style import Style
from rich.table import Table
from rich.text import Text

DEFAULT_WIDTH = 80
WHITE = ColorTriplet(255, 255, 255)


def render_to_ansi(
    renderable: RenderableType,
    width: int = DEFAULT_WIDTH,
    soft_wrap: bool = False,
) -> str:
    """Render any rich renderable to a string with ANSI styling."""
    console = Console(
        file=io.StringIO(),
        force_terminal=True,
        color_system="truecolor",
        width=width,
        legacy_windows=False,
    )
    with console.capture() as capture:
        console.print(renderable, end="", soft_wrap=soft_wrap)
    return capture.get()


def colored(text: str, color: str, bold: bool = False) -> str:
    """Return ``text`` in a foreground color (name or '#rrggbb')."""
    return render_to_ansi(Text(text, style=Style(color=color, bold=bold)), soft_wrap=True)


def _parse_color(color: str) -> ColorTriplet:
    """Resolve a color name or '#rrggbb' to RGB, white when unparseable."""
    try:
        return Color.parse(color).get_truecolor()
    except ColorParseError:
        return WHITE


def gradient_text(text: str, start_color: str, end_color: str) -> Text:
    """Color each non-empty line along a gradient from start to end."""
    result = Text()
    lines = text.split("\n")
    start = _parse_color(start_color)
    end = _parse_color(end_color)

    steps = sum(1 for line in lines if line.strip())
    if steps == 0:
        return result

    step = 0
    for index, line in enumerate(lines):
        newline = "\n" if index < len(lines) - 1 else ""
        if not line.strip():
            result.append(newline)
            continue
        ratio = 0.0 if steps == 1 else step / (steps - 1)
        color = Color.from_triplet(blend_rgb(start, end, ratio))
        result.append(line + newline, style=Style(color=color, bold=True))
        step += 1
    return result


def gradient(text: str, start_color: str, end_color: str, width: int = DEFAULT_WIDTH) -> str:
    """ANSI string version of ``gradient_text``."""
    return render_to_ansi(gradient_text(text, start_color, end_color), width=width)


def boxed(
    body: str,
    title: str | None = None,
    border_style: str = "cyan",
    width: int | None = None,
) -> str:
    """Frame ``body`` (which may already carry ANSI styling) in a box."""
    panel = Panel(
        Text.from_ansi(body),
        title=f"[bold {border_style}]{title}[/bold {border_style}]" if title else None,
        title_align="center",
        border_style=border_style,
        padding=(0, 1),
        expand=width is not None,
    )
    return render_to_ansi(panel, width=width or DEFAULT_WIDTH)


def progress_bar(completed: float, total: float, width: int = 30) -> str:
    """Render a progress bar followed by its percentage."""
    fraction = 0.0 if total <= 0 else max(0.0, min(1.0, completed / total))
    bar = ProgressBar(total=100, completed=fraction * 100, width=width)
    return render_to_ansi(bar, width=width) + f" {int(fraction * 100)}%"


def table(
    headers: Sequence[str],
    rows: Iterable[Sequence[object]],
    title: str | None = None,
    width: int = DEFAULT_WIDTH,
) -> str:
    """Render rows as a bordered table."""
    grid = Table(title=title, header_style="bold cyan", border_style="dim")
    for header in headers:
        grid.add_column(header)
    for row in rows:
        grid.add_row(*(str(cell) for cell in row))
    return render_to_ansi(grid, width=width)
