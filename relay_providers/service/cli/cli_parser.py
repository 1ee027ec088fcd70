"""CLI parser construction for ``relay``.

This module wires argument shapes only; execution lives in ``cli_actions``.
Sampling flags default to ``None`` so profile values (surfaced through the
``RELAY_MAX_TOKENS``/``RELAY_TEMPERATURE``/``RELAY_TOP_P`` variables) can fill
them in before the built-in defaults apply.
"""

from __future__ import annotations

import argparse

from ...config.defaults import CLI_DEFAULT_MAX_TOKENS, CLI_DEFAULT_TEMPERATURE, CLI_DEFAULT_TIMEOUT_SECONDS, CLI_DEFAULT_TOP_P

# Value argparse stores when ``-p`` is given without text: read the prompt from stdin.
PROMPT_FROM_STDIN = object()


def build_parser() -> argparse.ArgumentParser:
    """Construct the ``relay`` argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Parser for the single-shot completion command. No I/O happens here.
    """
    p = argparse.ArgumentParser(
        prog="relay",
        description="Send one prompt (plus optional data) to an LLM provider resolved from the environment.",
    )
    p.add_argument(
        "-p",
        "--prompt",
        nargs="?",
        const=PROMPT_FROM_STDIN,
        default=None,
        help="Prompt text. Use '-p' with no value to read the prompt from stdin.",
    )
    p.add_argument("--data", default=None, help="Inline data/payload string.")
    p.add_argument("--data-file", default=None, help="Path to a file containing data/payload.")
    p.add_argument("-m", "--model", default=None, help="Model id (or $ENV to read the model id from an env var).")
    p.add_argument(
        "--max-tokens", type=int, default=None, help=f"Max tokens for the completion (default {CLI_DEFAULT_MAX_TOKENS})."
    )
    p.add_argument(
        "--temperature", type=float, default=None, help=f"Sampling temperature (default {CLI_DEFAULT_TEMPERATURE})."
    )
    p.add_argument("--top-p", type=float, default=None, help=f"Top-p nucleus sampling (default {CLI_DEFAULT_TOP_P}).")
    p.add_argument(
        "--timeout",
        type=float,
        default=float(CLI_DEFAULT_TIMEOUT_SECONDS),
        help=f"Request deadline in seconds (default {CLI_DEFAULT_TIMEOUT_SECONDS}).",
    )
    p.add_argument("--stream", action="store_true", help="Stream deltas to stdout as they arrive.")
    p.add_argument("--json", action="store_true", help="Emit a structured JSON result.")
    p.add_argument("--verbose", action="store_true", help="Verbose diagnostics to stderr.")
    p.add_argument("--profile", default=None, help="Profile name from the .relay file.")
    p.add_argument("--config", default=None, help="Explicit path to a profile file.")
    p.add_argument("--force", action="store_true", help="Send data above the hard size limit.")
    p.add_argument("--version", action="store_true", help="Print version and exit.")
    return p


__all__ = ["build_parser", "PROMPT_FROM_STDIN"]
