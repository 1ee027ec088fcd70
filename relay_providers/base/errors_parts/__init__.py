"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `relay_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import ProviderError
from .resolution_error import ResolutionError
from .classification import classify_exception, code_for_status

__all__ = ["ErrorCode", "ProviderError", "ResolutionError", "classify_exception", "code_for_status"]
