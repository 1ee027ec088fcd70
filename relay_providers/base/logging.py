"""Base structured logging utilities for the relay package.

Rationale:
- Central place to configure consistent JSON (or plain) logging on stderr.
- Avoid sprinkling ad-hoc logger setup across backends and the CLI.
- Stay on the standard library ``logging`` module; no extra dependency.

``normalized_log_event`` wraps ``log_event`` and injects the canonical keys
every completion event carries: ``phase`` (str), ``error_code`` (str|None),
``emitted`` (int|None) and ``tokens`` (mapping|None). Stdout is reserved for
completion output, so every handler managed here writes to stderr.
"""
from __future__ import annotations

import logging
import json
import sys
import os
import contextlib
from typing import Any, Dict, Mapping

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "relay"
LOG_LEVEL_ENV = "RELAY_LOG_LEVEL"
LOG_FORMAT_ENV = "RELAY_LOG_FORMAT"

_BASE_LOGGER_ATTR = "_relay_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_relay_console_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level string into an integer constant.

    Accepts common names (DEBUG, INFO, WARNING, ERROR, CRITICAL) case-insensitively.
    Falls back to ``default`` on unknown values.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _json_mode_from_env(default: bool) -> bool:
    raw = os.getenv(LOG_FORMAT_ENV)
    if not raw:
        return default
    return raw.strip().lower() != "plain"


def _make_console_handler(json_mode: bool, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    return handler


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize and return the shared ``relay`` logger."""

    logger = logging.getLogger(BASE_LOGGER_NAME)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        return logger
    desired_level = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    logger.setLevel(desired_level)
    logger.handlers[:] = [_make_console_handler(_json_mode_from_env(json_mode), desired_level)]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return ``name`` as a child of the shared ``relay`` logger.

    The base logger is configured on first use; children carry no handlers of
    their own and propagate to it.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    json_mode: bool | None = None,
) -> logging.Logger:
    """Reconfigure the shared relay logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired logging level. Accepts numeric levels or names (e.g., "DEBUG").
        When ``None``, the current level is preserved. ``RELAY_LOG_LEVEL``
        still wins when set, so operators can raise verbosity without flags.
    json_mode: bool | None
        Switch managed console handlers between JSON and plain formatting.
        ``None`` keeps the current formatter.

    Returns
    -------
    logging.Logger
        The configured base logger.
    """
    logger = get_logger()
    if level is not None:
        numeric = _parse_level(level, default=logger.level) if isinstance(level, str) else level
        numeric = _parse_level(os.getenv(LOG_LEVEL_ENV), default=numeric)
        logger.setLevel(numeric)
        for h in logger.handlers:
            h.setLevel(numeric)
    for h in list(logger.handlers):
        if not getattr(h, _CONSOLE_HANDLER_ATTR, False):
            continue
        stream_obj = getattr(h, "stream", None)
        if stream_obj is None or getattr(stream_obj, "closed", False) or stream_obj is not sys.stderr:
            # stderr may have been swapped (pytest capture); rebind to the live stream
            logger.removeHandler(h)
            with contextlib.suppress(Exception):
                h.close()
            use_json = json_mode if json_mode is not None else isinstance(h.formatter, JsonFormatter)
            logger.addHandler(_make_console_handler(use_json, logger.level))
            continue
        if json_mode is not None:
            h.setFormatter(JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT))
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured log event with optional ``None`` preservation.

    Parameters
    ----------
    logger: logging.Logger
        Logger instance (JSON formatted by ``get_logger``).
    event: str
        Event name (e.g. ``stream.start``).
    ctx: LogContext | None
        Provider/model context; merged shallowly.
    level: int
        Logging level for the record.
    keep_none: bool
        When ``True``, preserve keys whose values are ``None``; otherwise drop them.
    **fields: Any
        Arbitrary serializable key/value pairs.
    """
    if not logger.isEnabledFor(level):
        return
    payload = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=str))


# ---------------------- Normalization Layer ---------------------------------
REQUIRED_NORMALIZED_KEYS = (
    "phase",
    "emitted",
    "tokens",
)


def _coerce_tokens(tokens: Any) -> Any:
    """Coerce token usage info into a stable JSON-friendly form.

    Accepts None, mapping-like objects, or objects exposing ``to_dict``.
    Falls back to ``{"value": repr(obj)}`` for opaque values.
    """
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens.items())
    to_dict = getattr(tokens, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return {"value": repr(tokens)}


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    error_code: str | None = None,
    emitted: int | None = None,
    tokens: Any = None,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit a normalized structured log event with required keys.

    ``phase``, ``emitted`` and ``tokens`` are always present (``None`` when
    unknown); ``error_code`` only appears on failures. Extra fields never
    overwrite the normalized ones.
    """
    base_fields: Dict[str, Any] = {
        "phase": phase,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    if error_code is not None:
        base_fields["error_code"] = error_code
    for k, v in extra_fields.items():
        if v is None or k in base_fields:
            continue
        base_fields[k] = v
    log_event(logger, event, ctx, level=level, keep_none=True, **base_fields)


__all__ = [
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
    "BASE_LOGGER_NAME",
    "LOG_LEVEL_ENV",
]
