"""Symlink-safe, cancellable directory size calculation."""

import logging
import os
import stat

from cachetidy.cancellation import CANCELED, NEVER, CancellationToken, Completed, Outcome

log = logging.getLogger(__name__)


class DirectorySizeCalculator:
    """
    Sum the sizes of regular files below a directory.

    Anything reached through a symbolic link is ignored, the root included,
    so a walk never counts a file twice, never leaves the tree and never
    loops. Node policy:

    ================================  ===========================
    directory cannot be listed        skipped, contributes 0
    file cannot be stat'd             skipped
    symlinked directory               skipped, not descended
    symlinked file                    skipped, not counted
    other non-regular files           skipped
    cancellation observed             walk aborted, ``CANCELED``
    ================================  ===========================

    The walk uses an explicit stack, so deep trees cannot exhaust the
    interpreter's recursion limit.
    """

    def compute(self, path: str, token: CancellationToken = NEVER) -> Outcome[int]:
        """
        Calculate the total size of ``path``.

        Args:
            path: Root directory of the walk
            token: Checked at each stack pop, before each file stat and
                before each child directory is queued

        Returns:
            ``Completed(total_bytes)`` or ``CANCELED``
        """
        if os.path.islink(path):
            log.debug("Not descending into symlinked root %s", path)
            return Completed(0)

        total = 0
        stack = [path]

        while stack:
            if token.cancelled:
                return CANCELED

            current = stack.pop()
            try:
                with os.scandir(current) as entries:
                    children = list(entries)
            except OSError as e:
                log.debug("Skipping unreadable directory %s: %s", current, e)
                continue

            for entry in children:
                try:
                    is_link = entry.is_symlink()
                    is_dir = not is_link and entry.is_dir(follow_symlinks=False)
                except OSError as e:
                    log.debug("Skipping %s: %s", entry.path, e)
                    continue

                if is_link:
                    continue

                if is_dir:
                    if token.cancelled:
                        return CANCELED
                    stack.append(entry.path)
                    continue

                if token.cancelled:
                    return CANCELED
                try:
                    st = entry.stat(follow_symlinks=False)
                except OSError as e:
                    log.debug("Skipping unstattable file %s: %s", entry.path, e)
                    continue
                if stat.S_ISREG(st.st_mode):
                    total += st.st_size

        return Completed(total)

