from __future__ import annotations

import re
from importlib import metadata
from pathlib import Path

_DIST_NAME = "hostname-tools"
_VERSION_RE = re.compile(r'^version\s*=\s*"([^"]+)"\s*$')


def get_version() -> str:
    """
    Return the package version.

    A source checkout's `pyproject.toml` wins over installed metadata so an
    editable install reports the version being edited.
    """
    pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"
    if pyproject.is_file():
        found = project_version(pyproject.read_text(encoding="utf-8"))
        if found:
            return found

    try:
        return metadata.version(_DIST_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"


def project_version(pyproject_text: str) -> str | None:
    """Read `version` from the `[project]` table of pyproject.toml text."""
    table = None
    for raw in pyproject_text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("[") and line.endswith("]"):
            table = line[1:-1].strip()
            continue
        if table != "project":
            continue
        m = _VERSION_RE.match(line)
        if m:
            return m.group(1).strip()
    return None
