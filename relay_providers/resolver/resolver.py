"""Provider resolution engine.

Purpose
-------
Decide which backend, model, credential and base URL a single invocation uses,
from an explicit environment mapping plus the CLI-supplied model argument.

Precedence (first match wins)
-----------------------------
1. Unified variables. A non-empty ``RELAY_API_KEY`` beats every
   provider-specific credential. Model comes from the argument, else
   ``RELAY_MODEL``. Provider comes from ``RELAY_PROVIDER``, else that model's
   prefix hint, else openai. An empty model then falls back to the default
   model (openai only). Base URL comes from
   ``RELAY_BASE_URL``, else the provider's own base-URL variable.
2. Auto-discovery. Every catalog provider with a non-empty credential is a
   candidate; openai is preferred, otherwise the alphabetically first. A model
   argument whose hint names another candidate re-routes to it; a hint naming
   a provider without a credential is an error. Without a model argument the
   provider's default model is used.

Model indirection
-----------------
A model argument starting with ``$`` names an environment variable holding
the model id; an unset or empty variable is an error.

Side effects
------------
None. The environment mapping is only read. Profile application happens
before this module is called and produces the mapping passed in.
"""
from __future__ import annotations

import os
from typing import List, Mapping, Optional

from ..base.errors import ResolutionError
from ..base.logging import get_logger, log_event
from ..base.models import ProviderName, ResolvedTarget
from ..config.defaults import DEFAULT_MODELS
from ..config.env import (
    DEFAULT_CATALOG,
    MODEL_ENV_SIGIL,
    UNIFIED_API_KEY_ENV,
    UNIFIED_BASE_URL_ENV,
    UNIFIED_MODEL_ENV,
    UNIFIED_PROVIDER_ENV,
    EnvironmentCatalog,
    base_url_from_env,
    env_value,
    infer_provider_from_model,
)

_logger = get_logger("relay.resolver")


def expand_model_argument(model_argument: str, env: Mapping[str, str]) -> str:
    """Apply ``$NAME`` indirection to a model argument.

    Returns the argument unchanged (stripped) when it does not start with the
    sigil.

    Raises
    ------
    ResolutionError
        When the referenced variable is unset or empty.
    """
    model = (model_argument or "").strip()
    if not model.startswith(MODEL_ENV_SIGIL):
        return model
    name = model[len(MODEL_ENV_SIGIL):]
    value = env_value(env, name)
    if not value:
        raise ResolutionError(f"model env '{name}' is empty or unset", variable=name)
    return value


def _resolve_unified(
    model: str, credential: str, env: Mapping[str, str], catalog: EnvironmentCatalog
) -> ResolvedTarget:
    if not model:
        model = env_value(env, UNIFIED_MODEL_ENV)

    raw_provider = env_value(env, UNIFIED_PROVIDER_ENV)
    if raw_provider:
        try:
            provider = ProviderName.parse(raw_provider)
        except ValueError:
            allowed = ", ".join(p.value for p in ProviderName)
            raise ResolutionError(
                f"unknown provider '{raw_provider}' in {UNIFIED_PROVIDER_ENV}; must be one of {allowed}",
                variable=UNIFIED_PROVIDER_ENV,
            ) from None
    else:
        provider = infer_provider_from_model(model, catalog) or ProviderName.OPENAI

    if not model:
        if provider is not ProviderName.OPENAI:
            raise ResolutionError(
                f"no model specified; set --model or {UNIFIED_MODEL_ENV}", variable=UNIFIED_MODEL_ENV
            )
        model = DEFAULT_MODELS[ProviderName.OPENAI.value]

    base_url = env_value(env, UNIFIED_BASE_URL_ENV) or base_url_from_env(provider, env)
    return ResolvedTarget(
        provider=provider,
        model=model,
        credential=credential,
        base_url=base_url,
        credential_source=UNIFIED_API_KEY_ENV,
    )


def discover_providers(env: Mapping[str, str], catalog: EnvironmentCatalog = DEFAULT_CATALOG) -> List[ProviderName]:
    """Return catalog providers whose credential variable is non-empty, sorted by name."""
    found = [p for p, var in catalog.credentials.items() if env_value(env, var)]
    return sorted(found, key=lambda p: p.value)


def _pick_default(matches: List[ProviderName]) -> ProviderName:
    if ProviderName.OPENAI in matches:
        return ProviderName.OPENAI
    return matches[0]


def _resolve_discovered(model: str, env: Mapping[str, str], catalog: EnvironmentCatalog) -> ResolvedTarget:
    matches = discover_providers(env, catalog)
    if not matches:
        names = ", ".join(catalog.credential_env_names())
        raise ResolutionError(
            f"no provider keys found. Set {UNIFIED_API_KEY_ENV}/{UNIFIED_MODEL_ENV} or one of: {names}"
        )
    provider = _pick_default(matches)

    if model:
        hinted = infer_provider_from_model(model, catalog)
        if hinted is not None and hinted is not provider:
            if hinted not in matches:
                var = catalog.credential_env(hinted) or f"{hinted.value.upper()}_API_KEY"
                raise ResolutionError(
                    f"model '{model}' implies provider '{hinted.value}' but no {var} key found",
                    variable=var,
                )
            provider = hinted
    else:
        model = DEFAULT_MODELS[provider.value]

    source = catalog.credential_env(provider) or ""
    return ResolvedTarget(
        provider=provider,
        model=model,
        credential=env_value(env, source),
        base_url=base_url_from_env(provider, env),
        credential_source=source,
    )


def resolve(
    model_argument: str = "",
    env: Optional[Mapping[str, str]] = None,
    catalog: EnvironmentCatalog = DEFAULT_CATALOG,
) -> ResolvedTarget:
    """Resolve provider, model, credential and base URL for one invocation.

    Parameters
    ----------
    model_argument: str
        Model id from the command line; may be empty or ``$NAME``.
    env: Optional[Mapping[str, str]]
        Environment mapping to read. ``None`` reads ``os.environ``.
    catalog: EnvironmentCatalog
        Credential and hint tables.

    Returns
    -------
    ResolvedTarget
        Immutable resolution result with a non-empty model.

    Raises
    ------
    ResolutionError
        For every unrecoverable condition (see module docstring).
    """
    env = os.environ if env is None else env
    model = expand_model_argument(model_argument, env)
    credential = env_value(env, UNIFIED_API_KEY_ENV)
    if credential:
        target = _resolve_unified(model, credential, env, catalog)
    else:
        target = _resolve_discovered(model, env, catalog)
    log_event(_logger, "resolve.done", **target.describe())
    return target


__all__ = ["resolve", "expand_model_argument", "discover_providers"]
