"""Configuration layer: environment catalog, defaults and profile files.

Public API
----------
* ``DEFAULT_CATALOG`` / ``EnvironmentCatalog``: credential and hint tables.
* ``infer_provider_from_model``: prefix-hint lookup.
* ``find_profile_file`` / ``load_profile_file`` / ``apply_profile``: profiles.
"""
from __future__ import annotations

from .env import (
    DEFAULT_CATALOG,
    EnvironmentCatalog,
    infer_provider_from_model,
    base_url_from_env,
)
from .profiles import (
    Profile,
    ProfileError,
    ProfileFile,
    apply_profile,
    find_profile_file,
    load_profile_file,
    profile_overlay,
)

__all__ = [
    "DEFAULT_CATALOG",
    "EnvironmentCatalog",
    "infer_provider_from_model",
    "base_url_from_env",
    "Profile",
    "ProfileError",
    "ProfileFile",
    "apply_profile",
    "find_profile_file",
    "load_profile_file",
    "profile_overlay",
]
