"""Resolve ``[[WikiLink]]`` targets to note paths.

Obsidian lets a link name a note by its bare name (``[[Note]]``), by any
trailing part of its path (``[[folder/Note]]``), or by its full path, with or
without the ``.md`` extension.  Comparison is extension-insensitive; the
returned path is always the note path as indexed.
"""

from __future__ import annotations

from collections.abc import Iterable

_EXTENSION = ".md"


def normalize_note_path(path: str) -> str:
    """Strip one trailing ``.md`` from *path*."""
    if path.endswith(_EXTENSION):
        return path[: -len(_EXTENSION)]
    return path


def _is_suffix(path: str, ref: str) -> bool:
    # Both arguments must already be normalised.
    return path == ref or path.endswith("/" + ref)


def resolve_link(link: str, note_paths: Iterable[str]) -> str | None:
    """Return the note path *link* points to, or ``None`` if it is dangling.

    The first match in *note_paths* wins; pass the paths sorted for a result
    that does not depend on the order the vault was walked in.
    """
    ref = normalize_note_path(link)
    for path in note_paths:
        if _is_suffix(normalize_note_path(path), ref):
            return path
    return None


def targets_match(target: str, query: str) -> bool:
    """True when link *target* and note *query* name the same note.

    The suffix rule of :func:`resolve_link` is applied in both directions so a
    query can be more or less qualified than the link target.
    """
    target = normalize_note_path(target)
    query = normalize_note_path(query)
    return _is_suffix(target, query) or _is_suffix(query, target)
