"""Stateless presentation helpers for model views."""

from presentation.helpers import boxed, colored, gradient, progress_bar, render_to_ansi, table

__all__ = ["boxed", "colored", "gradient", "progress_bar", "render_to_ansi", "table"]
