"""Core Note and Link dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

#: Reported in place of a modification time when the file cannot be stat'ed.
UNKNOWN_MODIFIED = "unknown"


@dataclass(frozen=True)
class Note:
    """A single markdown note, as seen by one scan of the vault."""

    #: Path relative to the vault root, ``/``-separated. Identity of the note.
    path: str
    word_count: int = 0
    tags: list[str] = field(default_factory=list)
    #: Raw ``[[WikiLink]]`` targets in document order (not de-duped)
    links: list[str] = field(default_factory=list)
    modified: str = UNKNOWN_MODIFIED

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "word_count": self.word_count,
            "link_count": len(self.links),
            "tag_count": len(self.tags),
            "modified": self.modified,
        }


@dataclass(frozen=True)
class Link:
    """A directed ``[[WikiLink]]`` from *source* to *target*.

    ``target`` is the resolved note path when ``exists`` is true, otherwise the
    raw link text as written in the source note.
    """

    source: str
    target: str
    exists: bool

    def to_dict(self) -> dict[str, Any]:
        return {"source": self.source, "target": self.target, "exists": self.exists}
