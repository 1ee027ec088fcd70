"""
CompletionRequest DTO passed to completion backends.

The request is a flat description of one single-turn completion: the prompt
and auxiliary data are kept apart so each backend family can apply its own
join rule when building the wire body.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CompletionRequest:
    """Input to a backend's ``complete``/``stream`` call.

    Attributes:
        model: Model identifier sent on the wire.
        prompt: Instruction text (may be empty when only data is given).
        data: Auxiliary data text (may be empty).
        max_tokens: Maximum output tokens; ``0`` means "let the backend decide"
            and the field is left out of the request body.
        temperature: Sampling temperature, passed through as given. ``None``
            omits the field.
        top_p: Nucleus sampling value, passed through as given. ``None`` omits
            the field.
        stream: Whether the caller intends to stream (informational; the
            backend method called decides the wire mode).
        timeout: Wall-clock budget in seconds; ``None`` for no deadline.
    """

    model: str
    prompt: str = ""
    data: str = ""
    max_tokens: int = 0
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    stream: bool = False
    timeout: Optional[float] = None


__all__ = ["CompletionRequest"]
