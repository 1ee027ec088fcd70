"""relay_providers.config.profiles
================================

Named settings profiles loaded from a ``.relay`` file.

Purpose
-------
Let users keep credentials, endpoints and sampling defaults in a file and pick
them by name, without exporting environment variables by hand.

File Location
-------------
1. ``--config PATH`` (explicit path passed by the CLI)
2. ``RELAY_CONFIG_FILE``
3. ``./.relay`` then ``~/.relay``

A missing file is not an error; an explicitly named file that does not exist
is.

File Format
-----------
JSON first; when that fails the text is parsed as YAML. Structure::

    {
      "default": "work",
      "profiles": {
        "work": {"api_key": "$OPENAI_API_KEY", "provider": "openai",
                 "model": "gpt-4o", "max_tokens": 512,
                 "temperature": 0.3, "top_p": 0.9},
        "local": {"api_key": "dummy", "provider": "ollama",
                  "base_url": "http://localhost:11434", "model": "llama3.1:8b"}
      }
    }

``$VAR`` and ``${VAR}`` references in ``api_key``, ``base_url`` and ``model``
are replaced from the environment mapping; references to unset or empty
variables are left as written.

Application
-----------
``profile_overlay`` turns a profile into a mapping of ``RELAY_*`` variables;
``apply_profile`` merges that overlay over a *copy* of the environment. The
process environment is never modified; the merged mapping is what the CLI
hands to the resolver.

External dependencies
---------------------
- Pydantic v2 for validation.
- PyYAML for the YAML fallback.
"""
from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ..base.models import ProviderName
from .defaults import PROFILE_FILE_ENV, PROFILE_FILE_NAME
from .env import (
    UNIFIED_API_KEY_ENV,
    UNIFIED_BASE_URL_ENV,
    UNIFIED_MAX_TOKENS_ENV,
    UNIFIED_MODEL_ENV,
    UNIFIED_PROVIDER_ENV,
    UNIFIED_TEMPERATURE_ENV,
    UNIFIED_TOP_P_ENV,
)

_ENV_REF = re.compile(r"\$([A-Za-z_][A-Za-z0-9_]*)|\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


class ProfileError(ValueError):
    """Raised when a profile file cannot be read, parsed or validated."""


class Profile(BaseModel):
    """One named set of connection and sampling settings.

    Empty strings and absent keys both mean "not set"; unset fields leave the
    corresponding ``RELAY_*`` variable untouched.
    """

    model_config = ConfigDict(extra="ignore")

    api_key: Optional[str] = None
    base_url: Optional[str] = None
    provider: Optional[str] = None
    model: Optional[str] = None
    max_tokens: Optional[int] = Field(default=None, ge=0)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    @field_validator("provider")
    @classmethod
    def _known_provider(cls, value: Optional[str]) -> Optional[str]:
        if not value:
            return None
        try:
            return ProviderName.parse(value).value
        except ValueError:
            allowed = ", ".join(p.value for p in ProviderName)
            raise ValueError(f"invalid provider '{value}': must be one of {allowed}") from None


class ProfileFile(BaseModel):
    """Top-level shape of a ``.relay`` file."""

    model_config = ConfigDict(extra="ignore")

    default: Optional[str] = None
    profiles: Dict[str, Profile]

    @model_validator(mode="after")
    def _default_exists(self) -> "ProfileFile":
        if self.default and self.default not in self.profiles:
            raise ValueError(f"default profile '{self.default}' not found in 'profiles'")
        return self

    def select(self, name: Optional[str] = None) -> Tuple[str, Profile]:
        """Return ``(name, profile)`` for ``name``, else the default, else the first.

        Raises ``ProfileError`` when ``name`` is unknown or no profile exists.
        """
        if name:
            if name not in self.profiles:
                raise ProfileError(f"profile '{name}' not found in config")
            return name, self.profiles[name]
        if self.default:
            return self.default, self.profiles[self.default]
        for first_name, profile in self.profiles.items():
            return first_name, profile
        raise ProfileError("no profiles defined in config")


def substitute_env_refs(value: Optional[str], env: Mapping[str, str]) -> Optional[str]:
    """Replace ``$VAR``/``${VAR}`` references with values from ``env``.

    References to unset or empty variables are kept verbatim.
    """
    if not value:
        return value

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1) or match.group(2)
        return env.get(name) or match.group(0)

    return _ENV_REF.sub(_replace, value)


def find_profile_file(
    explicit: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    *,
    cwd: Optional[Path] = None,
    home: Optional[Path] = None,
) -> Optional[Path]:
    """Locate the profile file (see module docstring for the search order).

    Raises ``ProfileError`` when an explicitly named file does not exist.
    """
    env = os.environ if env is None else env
    named = explicit or env.get(PROFILE_FILE_ENV)
    if named:
        path = Path(named).expanduser()
        if not path.is_file():
            raise ProfileError(f"config file '{named}' not found")
        return path
    for base in (cwd or Path.cwd(), home or Path.home()):
        candidate = base / PROFILE_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def parse_profile_text(text: str, *, source: str = PROFILE_FILE_NAME) -> ProfileFile:
    """Parse and validate profile file contents (JSON, then YAML)."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ProfileError(f"failed to parse {source}: {exc}") from exc
    if not isinstance(data, dict) or "profiles" not in data:
        raise ProfileError(f"{source} must contain a 'profiles' object")
    try:
        return ProfileFile.model_validate(data)
    except ValidationError as exc:
        raise ProfileError(f"invalid {source}: {_format_validation_error(exc)}") from exc


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


def load_profile_file(path: Path) -> ProfileFile:
    """Read and validate the profile file at ``path``."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ProfileError(f"failed to read {path}: {exc}") from exc
    return parse_profile_text(text, source=str(path))


def _format_float(value: float) -> str:
    return f"{value:.2f}"


def profile_overlay(profile: Profile, env: Mapping[str, str]) -> Dict[str, str]:
    """Return the ``RELAY_*`` variables a profile sets.

    String fields go through :func:`substitute_env_refs` against ``env``.
    Numeric fields are only emitted when positive.
    """
    overlay: Dict[str, str] = {}
    if api_key := substitute_env_refs(profile.api_key, env):
        overlay[UNIFIED_API_KEY_ENV] = api_key
    if base_url := substitute_env_refs(profile.base_url, env):
        overlay[UNIFIED_BASE_URL_ENV] = base_url
    if profile.provider:
        overlay[UNIFIED_PROVIDER_ENV] = profile.provider
    if model := substitute_env_refs(profile.model, env):
        overlay[UNIFIED_MODEL_ENV] = model
    if profile.max_tokens:
        overlay[UNIFIED_MAX_TOKENS_ENV] = str(profile.max_tokens)
    if profile.temperature:
        overlay[UNIFIED_TEMPERATURE_ENV] = _format_float(profile.temperature)
    if profile.top_p:
        overlay[UNIFIED_TOP_P_ENV] = _format_float(profile.top_p)
    return overlay


def apply_profile(profile: Profile, env: Mapping[str, str]) -> Dict[str, str]:
    """Return a copy of ``env`` with the profile overlay merged on top."""
    merged = dict(env)
    merged.update(profile_overlay(profile, env))
    return merged


__all__ = [
    "ProfileError",
    "Profile",
    "ProfileFile",
    "substitute_env_refs",
    "find_profile_file",
    "parse_profile_text",
    "load_profile_file",
    "profile_overlay",
    "apply_profile",
]
