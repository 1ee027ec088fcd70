"""Input size guard utilities.

Purpose
-------
Protect against accidentally sending very large data payloads to a backend.
Sizes are measured in UTF-8 bytes, the unit that actually goes on the wire.

Two thresholds apply:

- Warning threshold: data above it is allowed, but callers should tell the
  user (the CLI logs a warning and prints a note to stderr).
- Hard limit: data above it is refused unless the caller forces it.

Environment Variables
---------------------
- ``RELAY_DATA_WARN_BYTES``: warning threshold. Default: 51200 (50 KiB).
- ``RELAY_DATA_MAX_BYTES``: hard limit. Default: 512000 (500 KiB).

Invalid or negative values fall back to the defaults. A value of ``0``
disables the corresponding threshold.

Contract
--------
:func:`check_data_size` raises :class:`DataTooLargeError` (a ``ValueError``)
when the hard limit is exceeded and ``force`` is false. It returns a
:class:`SizeCheck` otherwise. Functions read the environment mapping only
when invoked; there are no import-time side effects.

Examples
--------
>>> check_data_size("hello", env={}).warn
False
>>> check_data_size("x" * 10, env={}, warn_bytes=4, max_bytes=0).warn
True
>>> check_data_size("x" * 10, env={}, max_bytes=5)
Traceback (most recent call last):
    ...
relay_providers.utils.input_size_guard.DataTooLargeError: data is 10 bytes, above the 5 byte limit; use --force to send it anyway
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ..config.defaults import DATA_MAX_BYTES, DATA_WARN_BYTES

DATA_WARN_BYTES_ENV = "RELAY_DATA_WARN_BYTES"
DATA_MAX_BYTES_ENV = "RELAY_DATA_MAX_BYTES"


class DataTooLargeError(ValueError):
    """Raised when data exceeds the hard limit without ``force``."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"data is {size} bytes, above the {limit} byte limit; use --force to send it anyway")
        self.size = size
        self.limit = limit


@dataclass(frozen=True)
class SizeCheck:
    """Outcome of a size check that did not refuse the data.

    Attributes:
        size: Data size in UTF-8 bytes.
        warn: True when ``size`` is above the warning threshold.
        forced: True when the hard limit was exceeded but ``force`` allowed it.
    """

    size: int
    warn: bool = False
    forced: bool = False


def _read_threshold(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    return value if value >= 0 else default


def get_warn_bytes(env: Optional[Mapping[str, str]] = None) -> int:
    """Return the configured warning threshold in bytes."""
    return _read_threshold(os.environ if env is None else env, DATA_WARN_BYTES_ENV, DATA_WARN_BYTES)


def get_max_bytes(env: Optional[Mapping[str, str]] = None) -> int:
    """Return the configured hard limit in bytes."""
    return _read_threshold(os.environ if env is None else env, DATA_MAX_BYTES_ENV, DATA_MAX_BYTES)


def measure_bytes(value: str) -> int:
    """Return the UTF-8 encoded length of ``value``."""
    return len((value or "").encode("utf-8"))


def check_data_size(
    value: str,
    *,
    force: bool = False,
    env: Optional[Mapping[str, str]] = None,
    warn_bytes: Optional[int] = None,
    max_bytes: Optional[int] = None,
) -> SizeCheck:
    """Validate ``value`` against the warning threshold and hard limit.

    Parameters
    ----------
    value: str
        Data text to measure.
    force: bool
        Allow data above the hard limit.
    env: Optional[Mapping[str, str]]
        Mapping consulted for threshold overrides (``os.environ`` when None).
    warn_bytes, max_bytes: Optional[int]
        Explicit thresholds; override the environment when given.

    Raises
    ------
    DataTooLargeError
        When the hard limit is active, exceeded, and ``force`` is false.
    """
    eff_warn = get_warn_bytes(env) if warn_bytes is None else warn_bytes
    eff_max = get_max_bytes(env) if max_bytes is None else max_bytes
    size = measure_bytes(value)
    over_limit = eff_max > 0 and size > eff_max
    if over_limit and not force:
        raise DataTooLargeError(size, eff_max)
    return SizeCheck(size=size, warn=eff_warn > 0 and size > eff_warn, forced=over_limit)


__all__ = [
    "DATA_WARN_BYTES_ENV",
    "DATA_MAX_BYTES_ENV",
    "DataTooLargeError",
    "SizeCheck",
    "get_warn_bytes",
    "get_max_bytes",
    "measure_bytes",
    "check_data_size",
]
