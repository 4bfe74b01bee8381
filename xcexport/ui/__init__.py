"""Terminal interaction for xcexport."""

from .console import Messenger

__all__ = ["Messenger"]
