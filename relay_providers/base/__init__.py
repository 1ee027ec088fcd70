"""
Backend base package.

Exports provider-agnostic contracts, DTOs and the backend factory used by the
resolver, the concrete backends and the CLI:

- Interfaces: the ``CompletionBackend`` protocol
- Models (DTOs): requests, results, usage and resolved targets
- Errors and cancellation: the typed failure taxonomy
- Factory: lazy creation of backends from a resolved target
"""

from .cancellation import CancellationToken, CancelledError, DeadlineExceededError
from .errors import ErrorCode, ProviderError, ResolutionError
from .factory import create_backend, supported_providers
from .http_backend import HTTPCompletionBackend
from .interfaces import CompletionBackend
from .models import CompletionRequest, CompletionResult, ProviderName, ResolvedTarget, Usage

__all__ = [
    "CancellationToken",
    "CancelledError",
    "DeadlineExceededError",
    "ErrorCode",
    "ProviderError",
    "ResolutionError",
    "create_backend",
    "supported_providers",
    "HTTPCompletionBackend",
    "CompletionBackend",
    "CompletionRequest",
    "CompletionResult",
    "ProviderName",
    "ResolvedTarget",
    "Usage",
]
