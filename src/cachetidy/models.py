"""Data models for cachetidy."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CacheTargetKind(str, Enum):
    """Where a cache target was found."""

    USER_CACHE_CHILD = "user_cache_child"  # ~/Library/Caches/<name>
    CONTAINER_CACHE = "container_cache"  # ~/Library/Containers/<id>/Data/Library/Caches

    @property
    def is_advanced(self) -> bool:
        """Advanced kinds are only surfaced on explicit opt-in."""
        return self is CacheTargetKind.CONTAINER_CACHE

    @property
    def label(self) -> str:
        labels = {
            CacheTargetKind.USER_CACHE_CHILD: "User cache",
            CacheTargetKind.CONTAINER_CACHE: "Container cache",
        }
        return labels[self]


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable string (decimal units like macOS)."""
    if size_bytes >= 1000**3:
        return f"{size_bytes / (1000**3):.1f} GB"
    elif size_bytes >= 1000**2:
        return f"{size_bytes / (1000**2):.1f} MB"
    elif size_bytes >= 1000:
        return f"{size_bytes / 1000:.1f} KB"
    else:
        return f"{size_bytes} B"


class CacheTarget(BaseModel):
    """One candidate directory considered for cleaning."""

    model_config = ConfigDict(frozen=True)

    display_name: str = Field(..., description="Name shown to the user")
    path: str = Field(..., description="Absolute path, unique within one scan")
    size_bytes: Optional[int] = Field(
        None, ge=0, description="Total size in bytes, None when not computed"
    )
    kind: CacheTargetKind = Field(..., description="Where the target was found")
    is_advanced: bool = Field(False, description="Requires explicit opt-in to surface")
    is_apple: bool = Field(False, description="Attributed to Apple by heuristic")

    @model_validator(mode="before")
    @classmethod
    def _derive_advanced(cls, data: Any) -> Any:
        if isinstance(data, dict) and "kind" in data and "is_advanced" not in data:
            data = {**data, "is_advanced": CacheTargetKind(data["kind"]).is_advanced}
        return data

    @model_validator(mode="after")
    def _check_advanced(self) -> "CacheTarget":
        if self.is_advanced != self.kind.is_advanced:
            raise ValueError(
                f"is_advanced={self.is_advanced} contradicts kind={self.kind.value}"
            )
        return self

    @property
    def size_human(self) -> str:
        """Human-readable size, or '-' when the size was not computed."""
        if self.size_bytes is None:
            return "-"
        return format_size(self.size_bytes)

    @property
    def kind_label(self) -> str:
        label = self.kind.label
        if self.is_advanced:
            label += " (adv)"
        if self.is_apple:
            label += " (Apple)"
        return label


class CacheScanOptions(BaseModel):
    """Options for a single scan."""

    model_config = ConfigDict(frozen=True)

    fast: bool = Field(False, description="Skip recursive size computation")
    include_containers: bool = Field(
        False, description="Also scan sandbox container caches (advanced)"
    )


class CacheCleanResult(BaseModel):
    """Aggregated outcome of moving targets to the Trash."""

    model_config = ConfigDict(frozen=True)

    requested: int = Field(..., ge=0, description="Number of targets passed in")
    trashed: int = Field(..., ge=0, description="Targets moved to Trash or already gone")
    failed: int = Field(..., ge=0, description="Targets still present after a failed move")
    failed_paths: list[str] = Field(default_factory=list, description="Paths that failed")

    @model_validator(mode="after")
    def _check_counts(self) -> "CacheCleanResult":
        if self.requested != self.trashed + self.failed:
            raise ValueError("requested must equal trashed + failed")
        if len(self.failed_paths) != self.failed:
            raise ValueError("failed_paths must have one entry per failure")
        return self

    @property
    def success(self) -> bool:
        return self.failed == 0
