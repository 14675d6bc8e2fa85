"""Shared fixtures for cachetidy tests."""

from pathlib import Path

import pytest

from cachetidy.scanner import CacheScanner
from cachetidy.system import OsFileSystem


class FakeHome:
    def __init__(self, path):
        self.path = str(path)

    def home_directory(self) -> str:
        return self.path


def write_bytes(path: Path, size: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


@pytest.fixture
def make_file():
    """Create a file of the given size, including parent directories."""
    return write_bytes


@pytest.fixture
def home(tmp_path):
    """A fake home directory with an empty ~/Library/Caches."""
    home_dir = tmp_path / "home"
    (home_dir / "Library" / "Caches").mkdir(parents=True)
    return home_dir


@pytest.fixture
def scanner(home):
    return CacheScanner(OsFileSystem(), FakeHome(home))


@pytest.fixture
def fake_home():
    """Factory for home directory providers returning a fixed path."""
    return FakeHome
