"""Locate the dqcat.toml that applies to an invocation.

Lookup order: an explicit ``--config`` path, then ``DQCAT_CONFIG``, then
the nearest ``dqcat.toml`` in the working directory or any parent. A path
given explicitly (flag or env var) that is not a file means "no config";
it never falls through to the walk-up search.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "dqcat.toml"
CONFIG_ENV_VAR = "DQCAT_CONFIG"


def _existing_file(raw: str | Path) -> Path | None:
    p = Path(raw)
    return p if p.is_file() else None


def find_config(start: Path | None = None) -> Path | None:
    """Return ``DQCAT_CONFIG`` or the nearest dqcat.toml above *start*."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return _existing_file(env_path)

    directory = (start or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_config(explicit: str | Path | None = None, start: Path | None = None) -> Path | None:
    """Apply the full lookup order; *explicit* is the ``--config`` value."""
    if explicit:
        return _existing_file(explicit)
    return find_config(start)
