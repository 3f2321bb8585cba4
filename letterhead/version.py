from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import Optional

DIST_NAME = "letterhead"


def _package_version() -> str:
    try:
        return importlib.metadata.version(DIST_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "0+unknown"


def _git_commit(cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", "rev-parse", "--short=7", "HEAD"],
            cwd=str(cwd),
            stderr=subprocess.DEVNULL,
        )
    except (subprocess.CalledProcessError, FileNotFoundError, OSError):
        # Not a checkout, or git is not installed
        return None
    return out.decode().strip() or None


def get_version_string() -> str:
    """Return the installed version, with the git commit when run from a checkout."""
    version = _package_version()
    commit = _git_commit(Path(__file__).resolve().parent)
    return f"{version} ({commit})" if commit else version
