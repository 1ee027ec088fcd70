"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``relay_providers.base.models_parts``.
"""

from .models_parts.provider_name import ProviderName
from .models_parts.usage import Usage
from .models_parts.completion_request import CompletionRequest
from .models_parts.completion_result import CompletionResult
from .models_parts.resolved_target import ResolvedTarget

__all__ = [
    "ProviderName",
    "Usage",
    "CompletionRequest",
    "CompletionResult",
    "ResolvedTarget",
]
