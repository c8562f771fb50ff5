"""Repository synchronization status"""
from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict


class StatusKind(Enum):
    """Tag of the active status variant."""
    CLEAN = "clean"
    DIRTY = "dirty"
    AHEAD = "ahead"
    BEHIND = "behind"
    DIVERGED = "diverged"
    DETACHED = "detached"
    NO_UPSTREAM = "no-upstream"
    UNKNOWN = "unknown"


_COUNTED_KINDS = {
    StatusKind.AHEAD: (True, False),
    StatusKind.BEHIND: (False, True),
    StatusKind.DIVERGED: (True, True),
}


@dataclass(frozen=True)
class Status:
    """Synchronization state of a working tree and its branch.

    A tagged variant: ``kind`` selects the variant, ``ahead`` and ``behind``
    are only meaningful (and only non-zero) for AHEAD, BEHIND and DIVERGED.
    Use the classmethod constructors rather than building instances directly.
    """
    kind: StatusKind
    ahead: int = 0
    behind: int = 0

    def __post_init__(self):
        uses_ahead, uses_behind = _COUNTED_KINDS.get(self.kind, (False, False))
        if uses_ahead and self.ahead <= 0:
            raise ValueError(f"{self.kind.value} status requires a positive ahead count")
        if uses_behind and self.behind <= 0:
            raise ValueError(f"{self.kind.value} status requires a positive behind count")
        if not uses_ahead and self.ahead != 0:
            raise ValueError(f"{self.kind.value} status cannot carry an ahead count")
        if not uses_behind and self.behind != 0:
            raise ValueError(f"{self.kind.value} status cannot carry a behind count")

    @classmethod
    def clean(cls) -> "Status":
        return cls(StatusKind.CLEAN)

    @classmethod
    def dirty(cls) -> "Status":
        return cls(StatusKind.DIRTY)

    @classmethod
    def ahead_by(cls, count: int) -> "Status":
        return cls(StatusKind.AHEAD, ahead=count)

    @classmethod
    def behind_by(cls, count: int) -> "Status":
        return cls(StatusKind.BEHIND, behind=count)

    @classmethod
    def diverged(cls, ahead: int, behind: int) -> "Status":
        return cls(StatusKind.DIVERGED, ahead=ahead, behind=behind)

    @classmethod
    def detached(cls) -> "Status":
        return cls(StatusKind.DETACHED)

    @classmethod
    def no_upstream(cls) -> "Status":
        return cls(StatusKind.NO_UPSTREAM)

    @classmethod
    def unknown(cls) -> "Status":
        return cls(StatusKind.UNKNOWN)

    @classmethod
    def from_counts(cls, ahead: int, behind: int) -> "Status":
        """Pick the variant matching ahead/behind commit counts."""
        if ahead and behind:
            return cls.diverged(ahead, behind)
        if ahead:
            return cls.ahead_by(ahead)
        if behind:
            return cls.behind_by(behind)
        return cls.clean()

    def to_dict(self) -> Dict[str, Any]:
        """Fixed field set for every variant; counts are 0 where unused."""
        return {"kind": self.kind.value, "ahead": self.ahead, "behind": self.behind}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Status":
        return cls(
            StatusKind(data["kind"]),
            ahead=data.get("ahead", 0),
            behind=data.get("behind", 0),
        )

    def __str__(self) -> str:
        if self.kind == StatusKind.DIVERGED:
            return f"diverged +{self.ahead} -{self.behind}"
        if self.kind == StatusKind.AHEAD:
            return f"ahead {self.ahead}"
        if self.kind == StatusKind.BEHIND:
            return f"behind {self.behind}"
        return self.kind.value
