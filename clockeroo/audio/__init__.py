"""Audio and notification alerts."""

from .alerts import AlertDispatcher, AlertDispatchError

__all__ = ["AlertDispatcher", "AlertDispatchError"]
