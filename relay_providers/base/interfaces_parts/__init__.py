"""Interface parts (one Protocol per module)."""

from .completion_backend import CompletionBackend

__all__ = ["CompletionBackend"]
