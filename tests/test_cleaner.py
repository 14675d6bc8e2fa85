"""Tests for trash-first cleanup."""

from unittest.mock import MagicMock

from cachetidy.cancellation import CANCELED, CancellationToken, Completed
from cachetidy.cleaner import CacheCleaner
from cachetidy.models import CacheCleanResult, CacheTarget, CacheTargetKind
from cachetidy.system import OsFileSystem


def make_target(path):
    return CacheTarget(
        display_name=str(path).rsplit("/", 1)[-1],
        path=str(path),
        size_bytes=1,
        kind=CacheTargetKind.USER_CACHE_CHILD,
    )


def run(cleaner, targets, **kwargs):
    outcome = cleaner.move_to_trash(targets, **kwargs)
    assert isinstance(outcome, Completed)
    return outcome.value


class TestDryRun:
    def test_counts_everything_as_trashed(self, tmp_path):
        trash = MagicMock()
        cleaner = CacheCleaner(trash, OsFileSystem())
        targets = [make_target(tmp_path / name) for name in ("a", "b", "c")]

        result = run(cleaner, targets, dry_run=True)

        assert result == CacheCleanResult(requested=3, trashed=3, failed=0, failed_paths=[])
        trash.move_to_trash.assert_not_called()

    def test_does_not_touch_disk(self, tmp_path):
        (tmp_path / "a").mkdir()
        cleaner = CacheCleaner(MagicMock(), OsFileSystem())

        run(cleaner, [make_target(tmp_path / "a")], dry_run=True)

        assert (tmp_path / "a").exists()


class TestLiveRun:
    def test_success_failure_and_already_gone(self, tmp_path):
        a, b, c = tmp_path / "a", tmp_path / "b", tmp_path / "c"
        a.mkdir()
        c.mkdir()
        trash = MagicMock()
        trash.move_to_trash.side_effect = lambda p: p if p == str(a) else None
        cleaner = CacheCleaner(trash, OsFileSystem())

        result = run(cleaner, [make_target(a), make_target(b), make_target(c)])

        assert result.requested == 3
        assert result.trashed == 2
        assert result.failed == 1
        assert result.failed_paths == [str(c)]
        assert [call.args[0] for call in trash.move_to_trash.call_args_list] == [
            str(a),
            str(b),
            str(c),
        ]

    def test_existence_checked_only_after_failure(self):
        trash = MagicMock()
        trash.move_to_trash.return_value = "/trashed"
        filesystem = MagicMock()
        cleaner = CacheCleaner(trash, filesystem)

        result = run(cleaner, [make_target("/x/one")])

        assert result.trashed == 1
        filesystem.path_exists.assert_not_called()

    def test_failed_paths_keep_order(self):
        trash = MagicMock()
        trash.move_to_trash.return_value = None
        filesystem = MagicMock()
        filesystem.path_exists.return_value = True
        cleaner = CacheCleaner(trash, filesystem)
        paths = ["/x/3", "/x/1", "/x/2"]

        result = run(cleaner, [make_target(p) for p in paths])

        assert result.failed_paths == paths
        assert result.trashed == 0

    def test_empty_target_list(self):
        result = run(CacheCleaner(MagicMock(), MagicMock()), [])

        assert result == CacheCleanResult(requested=0, trashed=0, failed=0)

    def test_progress_callback(self):
        trash = MagicMock()
        trash.move_to_trash.side_effect = lambda p: p
        calls = []
        targets = [make_target("/x/a"), make_target("/x/b")]

        run(
            CacheCleaner(trash, MagicMock()),
            targets,
            progress_callback=lambda t, i, n: calls.append((t.path, i, n)),
        )

        assert calls == [("/x/a", 1, 2), ("/x/b", 2, 2)]


class TestCancellation:
    def test_cancel_before_start(self):
        trash = MagicMock()
        token = CancellationToken()
        token.cancel()

        outcome = CacheCleaner(trash, MagicMock()).move_to_trash(
            [make_target("/x/a")], token=token
        )

        assert outcome is CANCELED
        trash.move_to_trash.assert_not_called()

    def test_cancel_midway_discards_counts(self):
        token = CancellationToken()
        trash = MagicMock()

        def trash_then_cancel(path):
            token.cancel()
            return path

        trash.move_to_trash.side_effect = trash_then_cancel
        targets = [make_target("/x/a"), make_target("/x/b"), make_target("/x/c")]

        outcome = CacheCleaner(trash, MagicMock()).move_to_trash(targets, token=token)

        assert outcome is CANCELED
        assert trash.move_to_trash.call_count == 1

    def test_cancel_applies_to_dry_run(self):
        token = CancellationToken()
        token.cancel()

        outcome = CacheCleaner(MagicMock(), MagicMock()).move_to_trash(
            [make_target("/x/a")], dry_run=True, token=token
        )

        assert outcome is CANCELED
