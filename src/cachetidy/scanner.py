"""Cache discovery for cachetidy."""

from __future__ import annotations

import logging
import os
from typing import Optional

from cachetidy.cancellation import (
    CANCELED,
    NEVER,
    CancellationToken,
    Canceled,
    Completed,
    Outcome,
)
from cachetidy.classifier import is_apple_cache
from cachetidy.models import CacheScanOptions, CacheTarget, CacheTargetKind
from cachetidy.sizing import DirectorySizeCalculator
from cachetidy.system import FileSystem, HomeDirectoryProvider

log = logging.getLogger(__name__)

USER_CACHES_ROOT_NAME = "User Caches (root)"


def user_caches_root(home: str) -> str:
    """~/Library/Caches"""
    return os.path.join(home, "Library", "Caches")


def containers_root(home: str) -> str:
    """~/Library/Containers"""
    return os.path.join(home, "Library", "Containers")


def container_caches_path(container_dir: str) -> str:
    """<container>/Data/Library/Caches"""
    return os.path.join(container_dir, "Data", "Library", "Caches")


def _sort_key(target: CacheTarget) -> tuple[bool, int, str]:
    size = target.size_bytes if target.size_bytes is not None else -1
    return (target.is_advanced, -size, target.display_name.casefold())


def sort_targets(targets: list[CacheTarget]) -> list[CacheTarget]:
    """
    Order targets for display.

    Non-advanced first, then biggest first with unknown sizes after every
    known size, then by name ignoring case.
    """
    return sorted(targets, key=_sort_key)


class CacheScanner:
    """Find cache directories in the current user's Library."""

    def __init__(
        self,
        filesystem: FileSystem,
        home_provider: HomeDirectoryProvider,
        size_calculator: Optional[DirectorySizeCalculator] = None,
    ) -> None:
        self.filesystem = filesystem
        self.home_provider = home_provider
        self.size_calculator = size_calculator or DirectorySizeCalculator()

    def scan(
        self,
        options: CacheScanOptions,
        token: CancellationToken = NEVER,
    ) -> Outcome[list[CacheTarget]]:
        """
        Scan user caches (and optionally container caches).

        An unusable home directory yields an empty list. A cancellation
        yields ``CANCELED`` and discards everything found so far.

        Args:
            options: Scan options
            token: Cancellation token

        Returns:
            ``Completed(sorted targets)`` or ``CANCELED``
        """
        home = self.home_provider.home_directory()
        if not home or not home.strip() or home == "/":
            log.info("Home directory %r is unusable, nothing to scan", home)
            return Completed([])

        targets: list[CacheTarget] = []

        root = user_caches_root(home)
        log.debug("Scanning %s", root)
        for child in self._list_directories(root):
            target = self._build_target(
                os.path.basename(child), child, CacheTargetKind.USER_CACHE_CHILD, options, token
            )
            if isinstance(target, Canceled):
                return CANCELED
            targets.append(target)

        if not targets and self.filesystem.directory_exists(root):
            target = self._build_target(
                USER_CACHES_ROOT_NAME, root, CacheTargetKind.USER_CACHE_CHILD, options, token
            )
            if isinstance(target, Canceled):
                return CANCELED
            targets.append(target)

        if options.include_containers:
            found = self._scan_containers(home, options, token)
            if isinstance(found, Canceled):
                return CANCELED
            targets.extend(found)

        log.debug("Found %d cache targets", len(targets))
        return Completed(sort_targets(targets))

    def _scan_containers(
        self,
        home: str,
        options: CacheScanOptions,
        token: CancellationToken,
    ) -> list[CacheTarget] | Canceled:
        root = containers_root(home)
        log.debug("Scanning %s", root)
        found = []
        for container_dir in self._list_directories(root):
            if token.cancelled:
                return CANCELED

            caches = container_caches_path(container_dir)
            if not self.filesystem.directory_exists(caches):
                continue

            target = self._build_target(
                os.path.basename(container_dir),
                caches,
                CacheTargetKind.CONTAINER_CACHE,
                options,
                token,
            )
            if isinstance(target, Canceled):
                return CANCELED
            found.append(target)
        return found

    def _list_directories(self, root: str) -> list[str]:
        if not self.filesystem.directory_exists(root):
            return []
        return self.filesystem.enumerate_directories(root)

    def _build_target(
        self,
        name: str,
        path: str,
        kind: CacheTargetKind,
        options: CacheScanOptions,
        token: CancellationToken,
    ) -> CacheTarget | Canceled:
        if token.cancelled:
            return CANCELED

        size: Optional[int] = None
        if not options.fast:
            try:
                outcome = self.size_calculator.compute(path, token)
            except Exception as e:
                log.debug("Could not size %s: %s", path, e)
            else:
                if isinstance(outcome, Canceled):
                    return CANCELED
                size = outcome.value

        return CacheTarget(
            display_name=name,
            path=path,
            size_bytes=size,
            kind=kind,
            is_apple=is_apple_cache(name, path),
        )
