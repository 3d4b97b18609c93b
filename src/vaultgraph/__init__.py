"""vaultgraph: tags, links, orphans and backlinks for Obsidian vaults."""

from vaultgraph.graph import VaultStats
from vaultgraph.note import Link, Note
from vaultgraph.parser import extract_links, extract_tags
from vaultgraph.reports import (
    collect_files,
    collect_links,
    collect_tags,
    compute_stats,
    find_backlinks,
    find_notes_with_tag,
    find_orphans,
)
from vaultgraph.resolver import resolve_link
from vaultgraph.scanner import Vault, VaultError, VaultNotFoundError, build_vault, scan_notes

__version__ = "0.1.0"

__all__ = [
    "Link",
    "Note",
    "Vault",
    "VaultError",
    "VaultNotFoundError",
    "VaultStats",
    "build_vault",
    "scan_notes",
    "extract_links",
    "extract_tags",
    "resolve_link",
    "collect_files",
    "collect_links",
    "collect_tags",
    "compute_stats",
    "find_backlinks",
    "find_notes_with_tag",
    "find_orphans",
]
