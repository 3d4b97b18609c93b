"""VaultDB: SQL and table views over one vault scan.

Loads a :class:`~vaultgraph.scanner.Vault` into an in-memory DuckDB database
and returns :mod:`polars` DataFrames.

Usage::

    with VaultDB(build_vault("~/notes")) as db:
        df = db.query("SELECT path, word_count FROM notes ORDER BY word_count DESC")
        broken = db.links_table(broken_only=True)
        tags = db.tag_counts()

Tables
------
``notes(path, word_count, link_count, tag_count, modified, tags, links)``
    one row per note; ``tags`` and ``links`` are ``VARCHAR[]``.
``links(source, target, exists)``
    one row per ``[[WikiLink]]``, duplicates included.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import duckdb
import polars as pl

if TYPE_CHECKING:
    from vaultgraph.scanner import Vault

NOTE_COLUMNS = ("path", "word_count", "link_count", "tag_count", "modified")


class VaultDB:
    """In-memory DuckDB database over note metadata and the link table."""

    def __init__(self, vault: "Vault") -> None:
        self.conn: duckdb.DuckDBPyConnection = duckdb.connect(":memory:")
        self._vault = vault
        self._create_schema()
        self._load()

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def _create_schema(self) -> None:
        self.conn.execute("""
            CREATE TABLE notes (
                path        VARCHAR PRIMARY KEY,
                word_count  INTEGER,
                link_count  INTEGER,
                tag_count   INTEGER,
                modified    VARCHAR,
                tags        VARCHAR[],
                links       VARCHAR[]
            )
        """)
        # "exists" is a keyword in DuckDB, quote it
        self.conn.execute("""
            CREATE TABLE links (
                source   VARCHAR,
                target   VARCHAR,
                "exists" BOOLEAN
            )
        """)

    def _load(self) -> None:
        note_rows = [
            (
                note.path,
                note.word_count,
                len(note.links),
                len(note.tags),
                note.modified,
                note.tags,
                note.links,
            )
            for note in self._vault.notes.values()
        ]
        if note_rows:
            self.conn.executemany("INSERT INTO notes VALUES (?,?,?,?,?,?,?)", note_rows)

        link_rows = [(link.source, link.target, link.exists) for link in self._vault.links]
        if link_rows:
            self.conn.executemany("INSERT INTO links VALUES (?,?,?)", link_rows)

    # ------------------------------------------------------------------
    # Query
    # ------------------------------------------------------------------

    def query(self, sql: str) -> pl.DataFrame:
        """Run a raw SQL query and return a Polars DataFrame.

        Raises :class:`duckdb.Error` for invalid SQL.
        """
        return self.conn.execute(sql).pl()

    def notes_table(self, *, order_by: str = "path") -> pl.DataFrame:
        """Note metadata (without the tag / link lists).

        *order_by* must be one of :data:`NOTE_COLUMNS`; ``ValueError`` otherwise.
        """
        if order_by not in NOTE_COLUMNS:
            raise ValueError(f"Cannot order notes by {order_by!r}; expected one of {', '.join(NOTE_COLUMNS)}")
        columns = ", ".join(NOTE_COLUMNS)
        order = order_by if order_by == "path" else f"{order_by}, path"
        return self.conn.execute(f"SELECT {columns} FROM notes ORDER BY {order}").pl()

    def links_table(self, *, broken_only: bool = False) -> pl.DataFrame:
        where = 'WHERE NOT "exists"' if broken_only else ""
        return self.conn.execute(
            f'SELECT source, target, "exists" FROM links {where} ORDER BY source, target'
        ).pl()

    def tag_counts(self) -> pl.DataFrame:
        """Tag → occurrence count, most frequent first."""
        return self.conn.execute(
            """
            SELECT tag, COUNT(*) AS occurrences
            FROM (SELECT unnest(tags) AS tag FROM notes)
            GROUP BY tag
            ORDER BY occurrences DESC, tag
            """
        ).pl()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "VaultDB":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()
