"""Locate the ``autoprops.toml`` that governs a vault.

The directory holding the config file is the vault root: note paths,
folder exclusions and ``.obsidian/types.json`` are all resolved from it.
``AUTOPROPS_CONFIG`` pins one file for every invocation; ``--config``
bypasses discovery entirely (see :meth:`AutoPropsSettings.from_cli`).
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "autoprops.toml"
CONFIG_ENV_VAR = "AUTOPROPS_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for notes under *start* (default: cwd).

    A set ``AUTOPROPS_CONFIG`` wins even when it names a missing file, in
    which case no config is used. Otherwise the nearest ``autoprops.toml``
    in *start* or one of its parents is returned, or None.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        pinned = Path(env_path)
        return pinned if pinned.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
