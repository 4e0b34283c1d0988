"""Render orchestration, per-render options and image encoding."""

from .encoder import write_image
from .options import RenderOptions
from .renderer import price_window, render, render_canvas, render_with_callback

__all__ = [
    "RenderOptions",
    "price_window",
    "render",
    "render_canvas",
    "render_with_callback",
    "write_image",
]
