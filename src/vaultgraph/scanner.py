"""Vault scanner: walk a vault, parse every note, resolve every link.

Scanning is a two-step pipeline:

1. :func:`scan_notes` reads each ``*.md`` file once and extracts its tags,
   raw links, word count and modification time.
2. :func:`resolve_links` resolves every raw link against the complete, sorted
   note index built from step 1.

Tag and file reports only need step 1; :func:`build_vault` runs both.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from vaultgraph.note import UNKNOWN_MODIFIED, Link, Note
from vaultgraph.parser import count_words, extract_links, extract_tags
from vaultgraph.resolver import resolve_link

logger = logging.getLogger(__name__)

NOTE_SUFFIX = ".md"


class VaultError(Exception):
    """Base class for errors raised while scanning a vault."""


class VaultNotFoundError(VaultError):
    """The vault root does not exist or is not a directory."""


@dataclass(frozen=True)
class Vault:
    """Result of one full scan: every readable note plus every resolved link."""

    root: Path
    notes: dict[str, Note] = field(default_factory=dict)
    links: list[Link] = field(default_factory=list)

    @property
    def note_paths(self) -> frozenset[str]:
        return frozenset(self.notes)


# ---------------------------------------------------------------------------
# Filesystem
# ---------------------------------------------------------------------------


def _check_root(root: str | os.PathLike[str]) -> Path:
    root = Path(root)
    if not root.exists():
        raise VaultNotFoundError(f"Vault path does not exist: {root}")
    if not root.is_dir():
        raise VaultNotFoundError(f"Vault path is not a directory: {root}")
    return root


def iter_markdown_files(root: Path) -> Iterator[Path]:
    """Yield every ``*.md`` file under *root*, following symlinks, sorted.

    Files of a directory come before its subdirectories.  A directory reached
    through a symlink is walked under every path that reaches it, unless it is
    one of its own ancestors (a symlink loop).  Unreadable directories are
    skipped.
    """
    yield from _walk(root, ())


def _walk(directory: Path, ancestors: tuple[str, ...]) -> Iterator[Path]:
    real = os.path.realpath(directory)
    if real in ancestors:
        return
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        logger.debug("Skipping unreadable directory %s: %s", directory, exc)
        return

    subdirs: list[Path] = []
    for entry in entries:
        path = Path(directory, entry.name)
        try:
            if entry.is_dir():
                subdirs.append(path)
            elif path.suffix == NOTE_SUFFIX and entry.is_file():
                yield path
        except OSError:
            continue
    for subdir in subdirs:
        yield from _walk(subdir, ancestors + (real,))


def read_note_text(path: Path) -> str | None:
    """Return the UTF-8 text of *path*, or ``None`` if it cannot be read."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Skipping unreadable note %s: %s", path, exc)
        return None


def modified_time(path: Path) -> str:
    """Return the file's mtime as an ISO-8601 UTC string, or ``"unknown"``."""
    try:
        mtime = path.stat().st_mtime
        return datetime.fromtimestamp(mtime, tz=UTC).isoformat()
    except (OSError, OverflowError, ValueError):
        return UNKNOWN_MODIFIED


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def parse_note(path: Path, root: Path) -> Note | None:
    """Read and parse one note; ``None`` when the file cannot be read."""
    content = read_note_text(path)
    if content is None:
        return None
    return Note(
        path=path.relative_to(root).as_posix(),
        word_count=count_words(content),
        tags=extract_tags(content),
        links=extract_links(content),
        modified=modified_time(path),
    )


def scan_notes(root: str | os.PathLike[str]) -> list[Note]:
    """Parse every readable note under *root*, in walk order.

    Raises :class:`VaultNotFoundError` if *root* is not a directory.
    """
    root = _check_root(root)
    notes: list[Note] = []
    for path in iter_markdown_files(root):
        note = parse_note(path, root)
        if note is not None:
            notes.append(note)
    logger.debug("Scanned %d notes under %s", len(notes), root)
    return notes


def resolve_links(notes: Iterable[Note], index: Iterable[str]) -> list[Link]:
    """Resolve the raw links of *notes* against the note *index*."""
    candidates = sorted(index)
    links: list[Link] = []
    for note in notes:
        for raw in note.links:
            target = resolve_link(raw, candidates)
            if target is None:
                links.append(Link(source=note.path, target=raw, exists=False))
            else:
                links.append(Link(source=note.path, target=target, exists=True))
    return links


def build_vault(root: str | os.PathLike[str]) -> Vault:
    """Scan *root* and return the full :class:`Vault` with resolved links."""
    notes = scan_notes(root)
    by_path = {note.path: note for note in notes}
    links = resolve_links(notes, by_path)
    return Vault(root=Path(root), notes=by_path, links=links)
