"""Provider resolution public surface."""

from .resolver import discover_providers, expand_model_argument, resolve

__all__ = ["resolve", "expand_model_argument", "discover_providers"]
