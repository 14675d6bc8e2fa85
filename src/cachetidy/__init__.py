"""cachetidy - find disposable macOS caches and move them to the Trash."""

__version__ = "0.1.0"
