"""
Resolution failure raised by the provider resolver.

Raised before any network call is made when the environment does not yield a
usable provider/model/credential combination.
"""
from __future__ import annotations

from typing import Optional

from .error_code import ErrorCode
from .provider_error import ProviderError


class ResolutionError(ProviderError):
    """Unrecoverable resolution failure.

    ``variable`` names the environment variable the user has to set (or fix)
    when the failure is attributable to a single one.
    """

    def __init__(self, message: str, *, variable: Optional[str] = None) -> None:
        super().__init__(code=ErrorCode.RESOLUTION, message=message, provider="resolver")
        self.variable = variable

    def __str__(self) -> str:
        return self.message


__all__ = ["ResolutionError"]
