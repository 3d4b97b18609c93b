"""One function per report.  Each call performs one fresh scan of *root*.

All functions raise :class:`~vaultgraph.scanner.VaultNotFoundError` when
*root* is not a directory.
"""

from __future__ import annotations

import os
from typing import Any

from vaultgraph.backlinks import backlinks_to
from vaultgraph.graph import (
    VaultStats,
    build_link_graph,
    notes_with_tag,
    orphan_notes,
    tag_frequencies,
    vault_stats,
)
from vaultgraph.note import Link
from vaultgraph.scanner import build_vault, scan_notes

VaultPath = str | os.PathLike[str]


def collect_tags(root: VaultPath) -> dict[str, int]:
    """Tag → occurrence count across the vault, sorted by tag."""
    return tag_frequencies(scan_notes(root))


def collect_files(root: VaultPath) -> list[dict[str, Any]]:
    """Per-note metadata rows: path, word/link/tag counts, modified time."""
    return [note.to_dict() for note in scan_notes(root)]


def collect_links(root: VaultPath) -> tuple[list[Link], frozenset[str]]:
    """Every link (resolved or not) plus the set of note paths."""
    vault = build_vault(root)
    return vault.links, vault.note_paths


def find_orphans(root: VaultPath) -> list[str]:
    return orphan_notes(build_link_graph(build_vault(root)))


def find_notes_with_tag(root: VaultPath, tag: str) -> list[str]:
    return notes_with_tag(scan_notes(root), tag)


def find_backlinks(root: VaultPath, target: str) -> list[str]:
    return backlinks_to(build_vault(root), target)


def compute_stats(root: VaultPath) -> VaultStats:
    return vault_stats(build_vault(root))
