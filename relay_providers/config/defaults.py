"""relay_providers.config.defaults
==============================

Central place for small, stable default values used across the relay_providers
package and its CLI. These defaults can be overridden via environment
variables, profile files, or CLI flags, but provide sensible fallbacks.

Module Purpose
--------------
- Provide a single import location for default constants (no I/O).
- Keep backend and CLI modules free of magic literals.

This module intentionally avoids importing from other packages to prevent
circular dependencies. Only plain constants should live here.
"""

from __future__ import annotations

from typing import Dict

# ---- Default models per provider ----
# Assigned by auto-discovery when no model argument is given. In the unified
# path only the openai entry is ever used as a fallback.
DEFAULT_MODELS: Dict[str, str] = {
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-sonnet",
    "google": "gemini-1.5-pro",
    "groq": "llama3-70b-8192",
    "mistral": "mistral-large-latest",
    "openrouter": "openrouter/auto",
    "together": "meta-llama/Meta-Llama-3.1-70B-Instruct-Turbo",
    "cohere": "command-r-plus",
    "azureopenai": "gpt-4o-mini",
}

# ---- Backend endpoints ----
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENAI_CHAT_PATH = "/chat/completions"
OPENAI_RESPONSES_PATH = "/responses"
OLLAMA_DEFAULT_BASE_URL = "http://localhost:11434"
OLLAMA_GENERATE_PATH = "/api/generate"

# Models routed to the OpenAI responses API (case-insensitive prefixes).
OPENAI_RESPONSES_MODEL_PREFIXES = ("o1", "gpt-4.1", "gpt-5")
# Models that reject temperature/top_p on the responses API.
OPENAI_NO_SAMPLING_MODEL_PREFIXES = ("gpt-5",)

# ---- CLI defaults ----
CLI_DEFAULT_MAX_TOKENS = 1024
CLI_DEFAULT_TEMPERATURE = 0.7
CLI_DEFAULT_TOP_P = 1.0
CLI_DEFAULT_TIMEOUT_SECONDS = 60

# ---- Data-size guard ----
# Data above the warning threshold is sent with a note on stderr; above the
# hard limit it is refused unless ``--force`` is given.
DATA_WARN_BYTES = 50 * 1024
DATA_MAX_BYTES = 500 * 1024

# ---- Profiles ----
PROFILE_FILE_NAME = ".relay"
PROFILE_FILE_ENV = "RELAY_CONFIG_FILE"


__all__ = [
    "DEFAULT_MODELS",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENAI_CHAT_PATH",
    "OPENAI_RESPONSES_PATH",
    "OLLAMA_DEFAULT_BASE_URL",
    "OLLAMA_GENERATE_PATH",
    "OPENAI_RESPONSES_MODEL_PREFIXES",
    "OPENAI_NO_SAMPLING_MODEL_PREFIXES",
    "CLI_DEFAULT_MAX_TOKENS",
    "CLI_DEFAULT_TEMPERATURE",
    "CLI_DEFAULT_TOP_P",
    "CLI_DEFAULT_TIMEOUT_SECONDS",
    "DATA_WARN_BYTES",
    "DATA_MAX_BYTES",
    "PROFILE_FILE_NAME",
    "PROFILE_FILE_ENV",
]
