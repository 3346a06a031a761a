"""UI package."""

from .frames import Frame, build_frame
from .terminal import TerminalSurface, RenderSurfaceError

__all__ = [
    "Frame",
    "build_frame",
    "TerminalSurface",
    "RenderSurfaceError",
]
