"""Pytest configuration.

Ensures local packages can be imported consistently during test collection.
"""

import sys
from pathlib import Path


def _prepend_sys_path(path: Path) -> None:
    resolved = str(path.resolve())
    if resolved not in sys.path:
        sys.path.insert(0, resolved)


REPO_ROOT = Path(__file__).resolve().parent

# Allow importing `qbo_api` as a top-level package without installing it.
_prepend_sys_path(REPO_ROOT / "src")
