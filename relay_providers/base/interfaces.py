"""
Backend interfaces public surface.

Re-exports the Protocols under ``relay_providers.base.interfaces_parts``.
"""

from __future__ import annotations

from .interfaces_parts import CompletionBackend

__all__ = ["CompletionBackend"]
