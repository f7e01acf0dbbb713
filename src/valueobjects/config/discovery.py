"""Config file discovery and TOML reading.

There is no implicit walk-up search: a library should not pick up files
from whatever directory its host process runs in. A config file is used
only when passed explicitly or named by the ``VALUEOBJECTS_CONFIG`` env var.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_ENV_VAR = "VALUEOBJECTS_CONFIG"


def find_config() -> Path | None:
    """Return the file named by ``VALUEOBJECTS_CONFIG`` if it exists."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse a TOML file.

    Raises:
        ValueError: The file is not valid TOML.
    """
    raw = path.read_text(encoding="utf-8")
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ValueError(msg) from exc

