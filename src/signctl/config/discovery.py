"""Locating signctl.toml and vetting the file that holds the secret.

``SIGNCTL_CONFIG`` names the file outright.  Otherwise the nearest
``signctl.toml`` at or above the starting directory is used, the way git
finds ``.git/``.
"""

from __future__ import annotations

import os
import stat
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "signctl.toml"
CONFIG_ENV_VAR = "SIGNCTL_CONFIG"

# Group and other permission bits.
_SHARED_BITS = stat.S_IRWXG | stat.S_IRWXO


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), if any.

    An ``SIGNCTL_CONFIG`` pointing at a missing file disables discovery
    rather than falling back to a different file.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def holds_secret(data: Mapping[str, Any]) -> bool:
    """Whether parsed TOML sets ``[signature] secret``."""
    section = data.get("signature")
    return isinstance(section, Mapping) and bool(section.get("secret"))


def secret_exposure(path: Path) -> str | None:
    """Describe the problem when *path* stores the secret with shared permissions.

    Returns None when the file keeps no secret, is private to its owner,
    or lives on a platform without POSIX modes.
    """
    if os.name != "posix":
        return None
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
        text = path.read_text(encoding="utf-8")
    except OSError:
        # Removed or unreadable since settings were loaded.
        return None
    if not mode & _SHARED_BITS or not holds_secret(tomllib.loads(text)):
        return None
    return (
        f"{path} holds the signature secret but is accessible to other users "
        f"(mode {mode:04o}); restrict it with chmod 600"
    )
