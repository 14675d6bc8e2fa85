"""Cooperative cancellation and the outcome types returned by long operations.

Scans and cleanups never raise on cancellation. They check a
``CancellationToken`` at well-defined points and return either
``Completed(value)`` or the ``CANCELED`` singleton.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class CancellationToken:
    """Flag that a caller (or a signal handler) sets to stop work early."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation. Safe to call more than once."""
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class _NeverCancelled(CancellationToken):
    def cancel(self) -> None:
        raise RuntimeError("NEVER token cannot be cancelled")


# Default token for callers that do not need cancellation.
NEVER = _NeverCancelled()


@dataclass(frozen=True, slots=True)
class Completed(Generic[T]):
    """The operation ran to the end and produced ``value``."""

    value: T


@dataclass(frozen=True, slots=True)
class Canceled:
    """The operation observed a cancellation request and stopped."""


CANCELED = Canceled()

Outcome = Union[Completed[T], Canceled]
