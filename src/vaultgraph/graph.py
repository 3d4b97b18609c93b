"""Graph analysis over a scanned vault.

The link graph is a :class:`networkx.MultiDiGraph`: one node per note, one
node per dangling link target, and one edge per ``[[WikiLink]]`` (duplicates
kept).  Dangling targets are keyed ``("missing", raw_target)`` so they can
never collide with a note path.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from typing import Any

import networkx as nx

from vaultgraph.note import Note
from vaultgraph.scanner import Vault

MISSING = "missing"


@dataclass(frozen=True)
class VaultStats:
    total_notes: int
    total_tags: int
    total_links: int
    broken_links: int
    orphaned_notes: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Graph builder
# ---------------------------------------------------------------------------


def build_link_graph(vault: Vault) -> nx.MultiDiGraph:
    """Return the vault's link graph.

    Note nodes carry ``kind="note"``, ``word_count`` and ``tags``; dangling
    targets carry ``kind="missing"``.  Every edge carries ``exists``.
    """
    G: nx.MultiDiGraph = nx.MultiDiGraph()
    for path, note in vault.notes.items():
        G.add_node(path, kind="note", word_count=note.word_count, tags=note.tags)
    for link in vault.links:
        if link.exists:
            G.add_edge(link.source, link.target, exists=True)
        else:
            missing = (MISSING, link.target)
            G.add_node(missing, kind=MISSING)
            G.add_edge(link.source, missing, exists=False)
    return G


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------


def tag_frequencies(notes: Iterable[Note]) -> dict[str, int]:
    """Count every tag occurrence across *notes*, sorted by tag name."""
    counts: Counter[str] = Counter()
    for note in notes:
        counts.update(note.tags)
    return dict(sorted(counts.items()))


def notes_with_tag(notes: Iterable[Note], tag: str) -> list[str]:
    """Paths of notes declaring *tag* (exact, case-sensitive), in scan order."""
    return [note.path for note in notes if tag in note.tags]


def orphan_notes(G: nx.MultiDiGraph) -> list[str]:
    """Notes with no resolved link in or out, sorted.

    Links to dangling targets do not connect a note to anything.
    """
    orphans: list[str] = []
    for node, data in G.nodes(data=True):
        if data.get("kind") != "note":
            continue
        outgoing = any(d["exists"] for _, _, d in G.out_edges(node, data=True))
        incoming = any(d["exists"] for _, _, d in G.in_edges(node, data=True))
        if not outgoing and not incoming:
            orphans.append(node)
    return sorted(orphans)


def broken_link_count(vault: Vault) -> int:
    return sum(1 for link in vault.links if not link.exists)


def vault_stats(vault: Vault) -> VaultStats:
    """Summary counts for one scan."""
    return VaultStats(
        total_notes=len(vault.notes),
        total_tags=len(tag_frequencies(vault.notes.values())),
        total_links=len(vault.links),
        broken_links=broken_link_count(vault),
        orphaned_notes=len(orphan_notes(build_link_graph(vault))),
    )
