"""
Доменный слой Rendering: исключения.
"""

from .exceptions import RenderingError, RenderWriteError

__all__ = [
    "RenderingError",
    "RenderWriteError",
]
