"""Config file discovery.

Walk-up finder locates unitctl.toml, similar to how git finds .git/.
The UNITCTL_CONFIG env var short-circuits the walk.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "unitctl.toml"
CONFIG_ENV_VAR = "UNITCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest unitctl.toml at or above *start* (default: cwd).

    When UNITCTL_CONFIG is set it wins outright; a dangling path there
    yields None rather than falling back to the walk.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
