"""relay_providers package

Single-shot LLM completions against whichever provider the environment
points at.

Purpose:
    Resolve a provider, model, credential and base URL from environment
    variables (optionally seeded from a ``.relay`` profile file), then run one
    blocking or streaming completion through a small backend abstraction over
    raw ``httpx``.

Public API (re-exported):
    - Version: ``__version__``
    - Resolution: :func:`resolve`
    - Factory: :func:`create_backend`
    - DTOs: :class:`CompletionRequest`, :class:`CompletionResult`,
      :class:`ResolvedTarget`, :class:`Usage`
    - Errors: :class:`ProviderError`, :class:`ResolutionError`,
      :class:`ErrorCode`, :class:`CancelledError`
    - Cancellation: :class:`CancellationToken`
"""

__version__ = "0.1.0"

from .base import (
    CancellationToken,
    CancelledError,
    CompletionRequest,
    CompletionResult,
    ErrorCode,
    ProviderError,
    ResolutionError,
    ResolvedTarget,
    Usage,
    create_backend,
)
from .resolver import resolve

__all__ = [
    "__version__",
    "resolve",
    "create_backend",
    "CancellationToken",
    "CancelledError",
    "CompletionRequest",
    "CompletionResult",
    "ErrorCode",
    "ProviderError",
    "ResolutionError",
    "ResolvedTarget",
    "Usage",
]
