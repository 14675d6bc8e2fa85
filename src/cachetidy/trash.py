"""Move files and directories to the macOS Trash."""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Optional, Protocol

log = logging.getLogger(__name__)

OSASCRIPT = "/usr/bin/osascript"
TRASH_TIMEOUT_SECONDS = 15


class TrashService(Protocol):
    def move_to_trash(self, path: str) -> Optional[str]:
        """Return an identifier for the trashed item, or None on failure."""
        ...


def _finder_delete_script(path: str) -> str:
    escaped = path.replace("\\", "\\\\").replace('"', '\\"')
    return f'tell application "Finder" to delete POSIX file "{escaped}"'


class FinderTrashService:
    """Ask Finder to move an item to the Trash, so it can be put back."""

    def __init__(self, timeout: float = TRASH_TIMEOUT_SECONDS) -> None:
        self.timeout = timeout

    def move_to_trash(self, path: str) -> Optional[str]:
        """
        Move ``path`` to the Trash via AppleScript.

        Finder does not report where the item ended up, so the original path
        is returned on success.

        Args:
            path: File or directory to trash

        Returns:
            The original path on success, None otherwise
        """
        if not path or not path.strip():
            return None
        if not os.path.lexists(path):
            return None

        try:
            result = subprocess.run(
                [OSASCRIPT, "-e", _finder_delete_script(path)],
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            log.warning("Timed out moving %s to Trash", path)
            return None
        except OSError as e:
            log.warning("Could not run osascript for %s: %s", path, e)
            return None

        if result.returncode == 0:
            return path

        log.warning("Finder refused to trash %s: %s", path, result.stderr.strip())
        return None
