"""Config file discovery.

Resolution order for conf.toml: explicit ``--config`` path, then the
``NEXUSCTL_CONFIG`` env var, then ``~/.nexus/conf.toml``. Also locates the
Sui wallet's ``client.yaml``, honouring ``SUI_CONFIG_DIR``.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_ENV_VAR = "NEXUSCTL_CONFIG"
DEFAULT_CONFIG_PATH = "~/.nexus/conf.toml"

SUI_CONFIG_DIR_ENV_VAR = "SUI_CONFIG_DIR"
SUI_CLIENT_CONFIG = "client.yaml"


def expand_tilde(path: str | Path) -> Path:
    """Expand a leading ``~`` to the user's home directory.

    Raises:
        RuntimeError: If the home directory cannot be determined.
    """
    expanded = Path(path).expanduser()
    if str(expanded).startswith("~"):
        raise RuntimeError("Could not find home directory")
    return expanded


def find_config(explicit: str | Path | None = None) -> Path | None:
    """Locate conf.toml. Returns None if the resolved path does not exist."""
    if explicit:
        candidate = expand_tilde(explicit)
    else:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        candidate = expand_tilde(env_path or DEFAULT_CONFIG_PATH)
    return candidate if candidate.is_file() else None


def default_wallet_path() -> Path:
    """Path of the Sui CLI's client.yaml."""
    env_dir = os.environ.get(SUI_CONFIG_DIR_ENV_VAR)
    config_dir = Path(env_dir) if env_dir else expand_tilde("~/.sui/sui_config")
    return config_dir / SUI_CLIENT_CONFIG
