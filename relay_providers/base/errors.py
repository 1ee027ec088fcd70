"""Unified error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``relay_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import ProviderError
from .errors_parts.resolution_error import ResolutionError
from .errors_parts.classification import classify_exception, code_for_status

__all__ = ["ErrorCode", "ProviderError", "ResolutionError", "classify_exception", "code_for_status"]
