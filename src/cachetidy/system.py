"""Host environment adapters: home directory and filesystem primitives."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol

log = logging.getLogger(__name__)


class HomeDirectoryProvider(Protocol):
    def home_directory(self) -> str: ...


class FileSystem(Protocol):
    def directory_exists(self, path: str) -> bool: ...

    def path_exists(self, path: str) -> bool: ...

    def enumerate_directories(self, path: str) -> list[str]: ...


class MacUserPaths:
    """Resolve the current user's home directory."""

    def home_directory(self) -> str:
        try:
            home = str(Path.home())
        except (KeyError, RuntimeError):
            home = ""
        if home.strip():
            return home

        home = os.environ.get("HOME", "")
        if home.strip():
            return home

        return "/"


class OsFileSystem:
    """FileSystem backed by the real disk."""

    def directory_exists(self, path: str) -> bool:
        return os.path.isdir(path)

    def path_exists(self, path: str) -> bool:
        """True if anything (including a dangling symlink) is at ``path``."""
        return os.path.lexists(path)

    def enumerate_directories(self, path: str) -> list[str]:
        """
        List the immediate subdirectories of ``path``, sorted by name.

        Symlinks to directories are included, as Finder shows them. Any error
        while listing yields an empty list.
        """
        try:
            with os.scandir(path) as entries:
                return sorted(e.path for e in entries if _is_dir(e))
        except OSError as e:
            log.debug("Cannot list %s: %s", path, e)
            return []


def _is_dir(entry: os.DirEntry) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False
