"""``relay`` command-line entrypoint.

This package wires argument parsing to the action handler kept in
``cli_actions``. It performs no provider logic directly.

Public API re-exports:
- ``main``: CLI entrypoint callable
"""

from __future__ import annotations

import sys
from typing import Mapping, Optional

import httpx

from .cli_actions import EXIT_INTERRUPTED, handle_run
from .cli_parser import build_parser


def main(
    argv: Optional[list[str]] = None,
    *,
    env: Optional[Mapping[str, str]] = None,
    client: Optional[httpx.Client] = None,
) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.
    env: Optional[Mapping[str, str]]
        Environment mapping; ``os.environ`` when ``None``.
    client: Optional[httpx.Client]
        Injected HTTP client (tests).

    Returns
    -------
    int
        Process exit code (see ``cli_actions`` for the table).
    """
    args = build_parser().parse_args(argv)
    try:
        return handle_run(args, env=env, client=client)
    except KeyboardInterrupt:
        sys.stderr.write("relay: interrupted\n")
        return EXIT_INTERRUPTED


__all__ = ["main"]
