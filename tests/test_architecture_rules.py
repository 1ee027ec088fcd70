"""Import-boundary checks for the relay_providers package.

The backends and the resolution layers sit below the CLI: nothing under
``base``, ``config``, ``resolver``, ``openai``, ``ollama`` or ``utils`` may
import ``relay_providers.service``. The base layer must also stay free of
provider packages, which the factory loads lazily by import path.

These tests are static-file scans to avoid import-time side effects, and they
emit clear failure messages for quick remediation.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List, Pattern

PACKAGE_ROOT = Path(__file__).resolve().parent.parent / "relay_providers"
INNER_LAYERS = ("base", "config", "resolver", "openai", "ollama", "utils")

_SERVICE_IMPORT = re.compile(r"^\s*(from|import)\s+(relay_providers\.service|\.+service)\b", re.MULTILINE)
_PROVIDER_IMPORT = re.compile(
    r"^\s*(from|import)\s+(relay_providers\.(openai|ollama)|\.+(openai|ollama))\b", re.MULTILINE
)


def _iter_python_files(root: Path) -> Iterable[Path]:
    """Yield Python source files under ``root``, skipping ``__pycache__``."""
    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts:
            continue
        yield path


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def _offenders(roots: Iterable[Path], pattern: Pattern[str]) -> List[str]:
    found: List[str] = []
    for root in roots:
        for py in _iter_python_files(root):
            for match in pattern.finditer(_read_text(py)):
                found.append(f"{py}: '{match.group(0).strip()}'")
    return found


def test_inner_layers_do_not_import_the_cli() -> None:
    """Fail with the offending files when an inner layer imports ``service``."""
    import pytest

    roots = [PACKAGE_ROOT / name for name in INNER_LAYERS]
    missing = [str(r) for r in roots if not r.is_dir()]
    if missing:
        pytest.fail("expected package directories are missing: " + ", ".join(missing))

    offenders = _offenders(roots, _SERVICE_IMPORT)
    if offenders:
        pytest.fail("Inner layers must not import the service/CLI layer.\n" + "\n".join(offenders))


def test_base_layer_never_imports_provider_packages() -> None:
    """Provider packages are reachable from ``base`` only by import path.

    Indented imports count too: a deferred import inside a function is still
    a dependency of the base layer on a provider package.
    """
    import pytest

    offenders = _offenders([PACKAGE_ROOT / "base"], _PROVIDER_IMPORT)
    if offenders:
        pytest.fail("base must not import provider packages.\n" + "\n".join(offenders))
