"""Screen model for full redraws."""

from .frame import Frame, RenderedLine, render_frame

__all__ = ["Frame", "RenderedLine", "render_frame"]
