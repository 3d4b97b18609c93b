"""Unit tests for vaultgraph.db.VaultDB."""

from pathlib import Path

import duckdb
import polars as pl
import pytest

from vaultgraph.db import VaultDB
from vaultgraph.scanner import build_vault


@pytest.fixture()
def db(graph_vault: Path):
    with VaultDB(build_vault(graph_vault)) as database:
        yield database


class TestVaultDBQuery:
    def test_query_returns_polars(self, db: VaultDB):
        assert isinstance(db.query("SELECT * FROM notes"), pl.DataFrame)

    def test_all_notes_loaded(self, db: VaultDB):
        df = db.query("SELECT path FROM notes ORDER BY path")
        assert df["path"].to_list() == ["Beta.md", "index.md", "lonely.md", "projects/alpha.md"]

    def test_list_columns(self, db: VaultDB):
        df = db.query("SELECT tags FROM notes WHERE path = 'Beta.md'")
        assert df["tags"].to_list() == [["project/active", "Draft"]]

    def test_tag_filter(self, db: VaultDB):
        df = db.query("SELECT path FROM notes WHERE list_contains(tags, 'hub')")
        assert df["path"].to_list() == ["index.md"]

    def test_invalid_sql_raises(self, db: VaultDB):
        with pytest.raises(duckdb.Error):
            db.query("SELECT nope FROM nowhere")


class TestVaultDBViews:
    def test_notes_table_columns(self, db: VaultDB):
        df = db.notes_table()
        assert df.columns == ["path", "word_count", "link_count", "tag_count", "modified"]
        assert df.height == 4

    def test_notes_table_order_by_column(self, db: VaultDB):
        df = db.notes_table(order_by="link_count")
        assert df["link_count"].to_list() == sorted(df["link_count"].to_list())

    @pytest.mark.parametrize("order_by", ["title", "path; DROP TABLE notes", "1"])
    def test_notes_table_rejects_unknown_order(self, db: VaultDB, order_by: str):
        with pytest.raises(ValueError, match="Cannot order notes"):
            db.notes_table(order_by=order_by)
        assert db.notes_table().height == 4

    def test_links_table_keeps_duplicates(self, db: VaultDB):
        df = db.links_table()
        assert df.height == 7
        assert df.filter(pl.col("source") == "projects/alpha.md").height == 2

    def test_broken_links_only(self, db: VaultDB):
        df = db.links_table(broken_only=True)
        assert sorted(df["target"].to_list()) == ["Ghost", "Missing Note", "Nowhere"]
        assert not any(df["exists"].to_list())

    def test_tag_counts(self, db: VaultDB):
        df = db.tag_counts()
        assert dict(zip(df["tag"].to_list(), df["occurrences"].to_list())) == {
            "hub": 2,
            "project/active": 2,
            "Draft": 1,
        }
        assert df["occurrences"].to_list() == [2, 2, 1]


class TestVaultDBEmpty:
    def test_empty_vault(self, tmp_path: Path):
        with VaultDB(build_vault(tmp_path)) as db:
            assert db.notes_table().height == 0
            assert db.links_table().height == 0
            assert db.tag_counts().height == 0
