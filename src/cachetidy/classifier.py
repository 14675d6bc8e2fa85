"""Heuristic for telling Apple-owned caches apart from third-party ones."""

APPLE_PREFIX = "com.apple."

# Cache roots under which an Apple bundle id directory marks the target as Apple's.
_APPLE_PATH_MARKERS = (
    "/library/caches/" + APPLE_PREFIX,
    "/library/containers/" + APPLE_PREFIX,
)

# Apple system components that keep caches under names without the bundle prefix.
APPLE_COMPONENT_NAMES = frozenset(
    name.casefold()
    for name in (
        "CloudKit",
        "FamilyCircle",
        "GameKit",
        "GeoServices",
        "Metal",
        "PassKit",
        "SiriTTS",
        "akd",
        "nsurlsessiond",
        "storeassetd",
        "storedownloadd",
    )
)


def is_apple_cache(name: str, path: str) -> bool:
    """
    Decide whether a cache directory belongs to Apple.

    Checks, in order: a ``com.apple.`` name prefix, a ``com.apple.`` directory
    directly under ``Library/Caches`` or ``Library/Containers`` in the path,
    and a small allow-list of Apple component names. All comparisons are
    case-insensitive.

    Args:
        name: Display name of the candidate
        path: Full path of the candidate

    Returns:
        True if the cache is attributed to Apple
    """
    folded_name = name.casefold()
    if folded_name.startswith(APPLE_PREFIX):
        return True

    folded_path = path.casefold()
    if any(marker in folded_path for marker in _APPLE_PATH_MARKERS):
        return True

    return folded_name in APPLE_COMPONENT_NAMES
