"""CLI action handler for ``relay``.

Purpose
-------
Turn parsed arguments into one completion call: source prompt and data,
apply the data-size guard, merge the selected profile over a copy of the
environment, resolve the target, build the backend and print the result.
This module has no top-level side effects and is safe to import in tests.

External Dependencies
---------------------
- ``httpx`` through the backends; tests inject an ``httpx.Client`` backed by
  ``httpx.MockTransport`` via ``handle_run(client=...)``.

Timeout Strategy
----------------
``--timeout`` becomes the deadline of a :class:`CancellationToken`; the
backend derives per-request HTTP timeouts from it.

Error Semantics
---------------
Every failure prints ``relay: <message>`` to stderr and maps to an exit code:

- ``EXIT_USAGE`` (2): flag misuse, unreadable data file, size guard, profiles
- ``EXIT_RESOLUTION`` (3): resolution or backend construction failures
- ``EXIT_COMPLETION`` (4): transport, HTTP, decode and cancellation failures
- ``EXIT_INTERRUPTED`` (130): Ctrl-C
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from dataclasses import replace
from typing import Any, Dict, Mapping, Optional, TextIO, Tuple

import httpx

from ... import __version__
from ...base.cancellation import CancellationToken, CancelledError
from ...base.errors import ProviderError
from ...base.factory import create_backend
from ...base.logging import configure_logger, get_logger, log_event
from ...base.models import CompletionRequest, CompletionResult
from ...config.defaults import CLI_DEFAULT_MAX_TOKENS, CLI_DEFAULT_TEMPERATURE, CLI_DEFAULT_TOP_P
from ...config.env import UNIFIED_MAX_TOKENS_ENV, UNIFIED_TEMPERATURE_ENV, UNIFIED_TOP_P_ENV
from ...config.profiles import ProfileError, apply_profile, find_profile_file, load_profile_file
from ...resolver import resolve
from ...utils.input_size_guard import DataTooLargeError, check_data_size
from .cli_parser import PROMPT_FROM_STDIN

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_RESOLUTION = 3
EXIT_COMPLETION = 4
EXIT_INTERRUPTED = 130

_logger = get_logger("relay.cli")


class UsageError(ValueError):
    """Invalid combination of flags or inputs."""

    def __str__(self) -> str:
        return f"usage error: {self.args[0]}"


def read_stdin(stdin: Optional[TextIO]) -> Optional[str]:
    """Return piped stdin content, or ``None`` when stdin is a terminal or absent."""
    if stdin is None or stdin.isatty():
        return None
    return stdin.read()


def resolve_prompt_and_data(args: argparse.Namespace, stdin: Optional[TextIO]) -> Tuple[str, str]:
    """Apply the prompt/data sourcing rules.

    - Bare ``-p`` consumes piped stdin as the prompt; empty stdin is an error.
    - ``--data`` and ``--data-file`` are mutually exclusive; ``--data`` must be
      non-empty.
    - Without either, piped stdin becomes the data unless ``-p`` consumed it.

    Raises
    ------
    UsageError
        On any rule violation or an unreadable data file.
    """
    if args.data is not None and args.data == "":
        raise UsageError("--data requires a value; use --data-file or pipe stdin")
    if args.data is not None and args.data_file:
        raise UsageError("cannot use both --data and --data-file")

    piped = read_stdin(stdin)
    prompt_from_stdin = args.prompt is PROMPT_FROM_STDIN
    if prompt_from_stdin:
        if not piped:
            raise UsageError("'-p' used with no prompt on stdin")
        prompt = piped
    else:
        prompt = args.prompt or ""

    if args.data is not None:
        data = args.data
    elif args.data_file:
        try:
            with open(args.data_file, encoding="utf-8") as fh:
                data = fh.read()
        except OSError as exc:
            raise UsageError(f"failed to read --data-file: {exc}") from exc
    elif piped is not None and not prompt_from_stdin:
        data = piped
    else:
        data = ""
    return prompt, data


def load_profile_env(args: argparse.Namespace, env: Mapping[str, str]) -> Dict[str, str]:
    """Return ``env`` merged with the selected profile (a new mapping).

    Without a profile file the environment copy is returned unchanged, unless
    ``--profile`` asked for one explicitly.
    """
    path = find_profile_file(args.config, env)
    if path is None:
        if args.profile:
            raise ProfileError(f"profile '{args.profile}' requested but no config file found")
        return dict(env)
    name, profile = load_profile_file(path).select(args.profile)
    log_event(_logger, "profile.applied", profile=name, path=str(path))
    return apply_profile(profile, env)


def _env_number(env: Mapping[str, str], name: str, kind: type) -> Optional[Any]:
    raw = (env.get(name) or "").strip()
    if not raw:
        return None
    try:
        return kind(raw)
    except ValueError:
        raise UsageError(f"invalid {name} value '{raw}'") from None


def sampling_settings(args: argparse.Namespace, env: Mapping[str, str]) -> Tuple[int, float, float]:
    """Return ``(max_tokens, temperature, top_p)``: flag, then env/profile, then default."""
    max_tokens = args.max_tokens
    if max_tokens is None:
        max_tokens = _env_number(env, UNIFIED_MAX_TOKENS_ENV, int)
    temperature = args.temperature
    if temperature is None:
        temperature = _env_number(env, UNIFIED_TEMPERATURE_ENV, float)
    top_p = args.top_p
    if top_p is None:
        top_p = _env_number(env, UNIFIED_TOP_P_ENV, float)
    return (
        CLI_DEFAULT_MAX_TOKENS if max_tokens is None else max_tokens,
        CLI_DEFAULT_TEMPERATURE if temperature is None else temperature,
        CLI_DEFAULT_TOP_P if top_p is None else top_p,
    )


def result_json(result: CompletionResult) -> str:
    """Render ``result`` as the indented JSON document printed by ``--json``."""
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def _fail(stderr: TextIO, exc: BaseException, code: int) -> int:
    message = exc.message if isinstance(exc, ProviderError) else str(exc)
    stderr.write(f"relay: {message}\n")
    return code


def _prepare(
    args: argparse.Namespace, env: Mapping[str, str], stdin: Optional[TextIO], stderr: TextIO
) -> Tuple[Dict[str, str], CompletionRequest]:
    merged = load_profile_env(args, env)
    prompt, data = resolve_prompt_and_data(args, stdin)
    check = check_data_size(data, force=args.force, env=merged)
    if check.warn:
        log_event(_logger, "data.large", level=logging.WARNING, size=check.size, forced=check.forced)
        stderr.write(f"relay: note: data is {check.size} bytes; large inputs are slow and costly\n")
    max_tokens, temperature, top_p = sampling_settings(args, merged)
    request = CompletionRequest(
        model="",
        prompt=prompt,
        data=data,
        max_tokens=max_tokens,
        temperature=temperature,
        top_p=top_p,
        stream=args.stream,
        timeout=args.timeout,
    )
    return merged, request


def handle_run(
    args: argparse.Namespace,
    *,
    env: Optional[Mapping[str, str]] = None,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
    client: Optional[httpx.Client] = None,
) -> int:
    """Execute one completion and return the process exit code.

    Parameters
    ----------
    args: argparse.Namespace
        Output of :func:`build_parser`.
    env: Optional[Mapping[str, str]]
        Environment mapping; ``os.environ`` when omitted. Never mutated.
    stdin, stdout, stderr: Optional[TextIO]
        Streams; the ``sys`` streams when omitted.
    client: Optional[httpx.Client]
        Injected HTTP client forwarded to the backend.
    """
    env = os.environ if env is None else env
    stdin = sys.stdin if stdin is None else stdin
    stdout = sys.stdout if stdout is None else stdout
    stderr = sys.stderr if stderr is None else stderr

    if args.version:
        stdout.write(f"{__version__}\n")
        return EXIT_OK
    configure_logger(level=logging.INFO if args.verbose else logging.WARNING)

    try:
        merged, request = _prepare(args, env, stdin, stderr)
    except (UsageError, DataTooLargeError, ProfileError) as exc:
        return _fail(stderr, exc, EXIT_USAGE)

    try:
        target = resolve(args.model or "", merged)
        backend = create_backend(target, client=client)
    except ProviderError as exc:
        return _fail(stderr, exc, EXIT_RESOLUTION)
    if args.verbose or (args.model and not args.json):
        stderr.write(f"relay: provider={target.provider.value} model={target.model}\n")

    request = replace(request, model=target.model)
    token = CancellationToken.with_timeout(args.timeout)
    try:
        if args.stream:
            result = backend.stream(request, lambda delta: _write_delta(stdout, delta), token=token)
        else:
            result = backend.complete(request, token=token)
    except (ProviderError, CancelledError) as exc:
        return _fail(stderr, exc, EXIT_COMPLETION)
    finally:
        backend.close()

    if args.stream:
        if args.json:
            stdout.write("\n" + result_json(result) + "\n")
    elif args.json:
        stdout.write(result_json(result) + "\n")
    else:
        stdout.write(result.text + "\n")
    stdout.flush()
    return EXIT_OK


def _write_delta(stdout: TextIO, delta: str) -> None:
    stdout.write(delta)
    stdout.flush()


__all__ = [
    "EXIT_OK",
    "EXIT_USAGE",
    "EXIT_RESOLUTION",
    "EXIT_COMPLETION",
    "EXIT_INTERRUPTED",
    "UsageError",
    "read_stdin",
    "resolve_prompt_and_data",
    "load_profile_env",
    "sampling_settings",
    "result_json",
    "handle_run",
]
