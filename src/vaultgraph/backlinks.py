"""Backlinks: which notes link *to* a given note."""

from __future__ import annotations

from vaultgraph.resolver import targets_match
from vaultgraph.scanner import Vault


def backlinks_to(vault: Vault, target: str) -> list[str]:
    """Return the sorted, de-duplicated sources of links pointing at *target*.

    *target* may be a full note path, a partial path or a bare name, with or
    without ``.md``.  Dangling links are matched on their raw text.
    """
    sources = {link.source for link in vault.links if targets_match(link.target, target)}
    return sorted(sources)
