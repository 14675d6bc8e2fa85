"""Tests for the Finder trash adapter."""

import subprocess
from unittest.mock import MagicMock, patch

from cachetidy.trash import OSASCRIPT, FinderTrashService, _finder_delete_script


class TestFinderDeleteScript:
    def test_plain_path(self):
        assert _finder_delete_script("/Users/me/Library/Caches/App") == (
            'tell application "Finder" to delete POSIX file "/Users/me/Library/Caches/App"'
        )

    def test_escapes_quotes_and_backslashes(self):
        script = _finder_delete_script('/tmp/we"ird\\name')
        assert 'POSIX file "/tmp/we\\"ird\\\\name"' in script


class TestFinderTrashService:
    def test_blank_path(self):
        assert FinderTrashService().move_to_trash("  ") is None

    def test_missing_path_is_not_sent_to_finder(self, tmp_path):
        with patch("subprocess.run") as mock_run:
            assert FinderTrashService().move_to_trash(str(tmp_path / "missing")) is None
            mock_run.assert_not_called()

    def test_success_returns_path(self, tmp_path):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=0, stderr="")
            assert FinderTrashService().move_to_trash(str(tmp_path)) == str(tmp_path)

            args = mock_run.call_args.args[0]
            assert args[0] == OSASCRIPT
            assert args[1] == "-e"
            assert str(tmp_path) in args[2]
            assert mock_run.call_args.kwargs["timeout"] == 15

    def test_nonzero_exit(self, tmp_path):
        with patch("subprocess.run") as mock_run:
            mock_run.return_value = MagicMock(returncode=1, stderr="not allowed")
            assert FinderTrashService().move_to_trash(str(tmp_path)) is None

    def test_timeout(self, tmp_path):
        with patch("subprocess.run", side_effect=subprocess.TimeoutExpired("osascript", 15)):
            assert FinderTrashService().move_to_trash(str(tmp_path)) is None

    def test_osascript_missing(self, tmp_path):
        with patch("subprocess.run", side_effect=FileNotFoundError(OSASCRIPT)):
            assert FinderTrashService().move_to_trash(str(tmp_path)) is None
