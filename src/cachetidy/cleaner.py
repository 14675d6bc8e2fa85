"""Trash-first cleanup for cachetidy."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from cachetidy.cancellation import CANCELED, NEVER, CancellationToken, Completed, Outcome
from cachetidy.models import CacheCleanResult, CacheTarget
from cachetidy.system import FileSystem
from cachetidy.trash import TrashService

log = logging.getLogger(__name__)


class CacheCleaner:
    """Move cache targets to the Trash and account for the outcome."""

    def __init__(self, trash: TrashService, filesystem: FileSystem) -> None:
        self.trash = trash
        self.filesystem = filesystem

    def move_to_trash(
        self,
        targets: Sequence[CacheTarget],
        dry_run: bool = False,
        token: CancellationToken = NEVER,
        progress_callback: Optional[Callable[[CacheTarget, int, int], None]] = None,
    ) -> Outcome[CacheCleanResult]:
        """
        Trash each target in order.

        A failed move whose path has disappeared anyway still counts as
        trashed: the cache is gone, which is what was asked for.

        Args:
            targets: Targets to trash, in order
            dry_run: If True, count every target as trashed without touching it
            token: Checked before each target
            progress_callback: Optional callback(target, current, total)

        Returns:
            ``Completed(CacheCleanResult)`` or ``CANCELED``
        """
        trashed = 0
        failed_paths: list[str] = []
        total = len(targets)

        for i, target in enumerate(targets):
            if token.cancelled:
                log.info("Cleanup canceled after %d of %d targets", i, total)
                return CANCELED

            if progress_callback:
                progress_callback(target, i + 1, total)

            if dry_run:
                log.debug("Dry run: would trash %s", target.path)
                trashed += 1
                continue

            if self.trash.move_to_trash(target.path) is not None:
                log.debug("Trashed %s", target.path)
                trashed += 1
            elif not self.filesystem.path_exists(target.path):
                log.debug("Trash failed but %s is already gone", target.path)
                trashed += 1
            else:
                log.warning("Could not move %s to Trash", target.path)
                failed_paths.append(target.path)

        return Completed(
            CacheCleanResult(
                requested=total,
                trashed=trashed,
                failed=len(failed_paths),
                failed_paths=failed_paths,
            )
        )
