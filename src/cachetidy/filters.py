"""Narrowing scan results down to what the user wants to see."""

import math
from typing import Iterable, Optional

from cachetidy.errors import InvalidSizeError
from cachetidy.models import CacheTarget

DEFAULT_MIN_SIZE_BYTES = 1024**2

_UNITS = {
    "TB": 1024**4,
    "GB": 1024**3,
    "MB": 1024**2,
    "KB": 1024,
    "B": 1,
}


def parse_size(text: Optional[str], default: int = DEFAULT_MIN_SIZE_BYTES) -> int:
    """
    Parse a size such as '500KB', '1 MB' or '2gb' into bytes.

    Args:
        text: Size string; None or blank means ``default``
        default: Value for a missing size

    Returns:
        Size in bytes

    Raises:
        InvalidSizeError: If the unit is unknown or the number is invalid
    """
    if text is None or not text.strip():
        return default

    s = text.strip().upper().replace(" ", "")

    for unit, multiplier in _UNITS.items():
        if s.endswith(unit):
            number = s[: -len(unit)]
            break
    else:
        raise InvalidSizeError(f"Unrecognized size '{text}'. Use KB, MB, GB, or TB.")

    try:
        value = float(number)
    except ValueError:
        raise InvalidSizeError(f"Invalid size '{text}'.") from None
    if not math.isfinite(value) or value < 0:
        raise InvalidSizeError(f"Invalid size '{text}'.")

    return int(value * multiplier)


def filter_targets(
    targets: Iterable[CacheTarget],
    min_bytes: int = DEFAULT_MIN_SIZE_BYTES,
    show_zero: bool = False,
    include_apple: bool = False,
    text: Optional[str] = None,
    exclude: Iterable[str] = (),
) -> list[CacheTarget]:
    """
    Keep the targets worth offering, preserving order.

    Targets without a size count as zero bytes.
    """
    needle = text.strip().casefold() if text and text.strip() else None
    excluded = [e.casefold() for e in exclude if e]

    kept = []
    for target in targets:
        if target.is_apple and not include_apple:
            continue

        size = target.size_bytes or 0
        if size == 0 and not show_zero:
            continue
        if size < min_bytes:
            continue

        name = target.display_name.casefold()
        path = target.path.casefold()
        if needle and needle not in name and needle not in path:
            continue
        if any(e in name or e in path for e in excluded):
            continue

        kept.append(target)
    return kept


def top_targets(targets: Iterable[CacheTarget], n: int) -> list[CacheTarget]:
    """The ``n`` biggest targets, unknown sizes last."""
    ranked = sorted(
        targets,
        key=lambda t: t.size_bytes if t.size_bytes is not None else -1,
        reverse=True,
    )
    return ranked[:n]
