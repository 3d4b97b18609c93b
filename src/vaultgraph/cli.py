"""Command-line interface: ``vaultgraph [VAULT_PATH] [--tags | --stats | ...]``."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import duckdb
import polars as pl
import yaml

from vaultgraph import __version__
from vaultgraph.config import FORMATS, ConfigError, load_settings
from vaultgraph.db import VaultDB
from vaultgraph.reports import (
    collect_files,
    collect_links,
    collect_tags,
    compute_stats,
    find_backlinks,
    find_notes_with_tag,
    find_orphans,
)
from vaultgraph.scanner import VaultError, build_vault

logger = logging.getLogger(__name__)

EPILOG = """\
examples:
  # List all tags with counts
  vaultgraph --tags

  # Show vault statistics
  vaultgraph --stats

  # List all files with metadata
  vaultgraph --files

  # Find broken links
  vaultgraph --links

  # Find orphaned notes
  vaultgraph --orphans

  # Find notes with a specific tag
  vaultgraph --tag writing

  # Show backlinks to a note
  vaultgraph --backlinks "My Note.md"

  # Query the scan with SQL (tables: notes, links)
  vaultgraph --query "SELECT path FROM notes WHERE word_count > 500"
"""


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for CLI."""
    logging.basicConfig(
        format="%(message)s",
        level=logging.DEBUG if verbose else logging.WARNING,
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vaultgraph",
        description="Read an Obsidian vault: tags, links, orphans, backlinks and stats.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "vault_path",
        nargs="?",
        type=Path,
        metavar="VAULT_PATH",
        help="Path to the Obsidian vault (defaults to the current directory)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--tags", action="store_true", help="List all tags found in the vault with occurrence counts")
    mode.add_argument("--stats", action="store_true", help="Show vault statistics (default)")
    mode.add_argument("--files", action="store_true", help="List all markdown files with metadata")
    mode.add_argument("--links", action="store_true", help="List all links and show broken links")
    mode.add_argument(
        "--orphans",
        action="store_true",
        help="Find orphaned notes (notes with no incoming or outgoing links)",
    )
    mode.add_argument("--tag", metavar="TAG", help="Find notes containing a specific tag")
    mode.add_argument("--backlinks", metavar="FILE", help="Show which notes link to a specific note")
    mode.add_argument("--query", metavar="SQL", help="Run SQL against the notes and links tables")

    parser.add_argument("--format", choices=FORMATS, help="Output format (default: json)")
    parser.add_argument("--config", type=Path, metavar="PATH", help="Read defaults from a TOML file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log skipped files and scan details")
    return parser


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


def describe_action(args: argparse.Namespace) -> str:
    """Name of the selected report, for error messages."""
    if args.tags:
        return "collecting tags"
    if args.files:
        return "collecting files"
    if args.links:
        return "collecting links"
    if args.orphans:
        return "finding orphans"
    if args.tag is not None:
        return "finding notes with tag"
    if args.backlinks is not None:
        return "finding backlinks"
    if args.query is not None:
        return "running query"
    return "calculating stats"


def build_document(args: argparse.Namespace, root: Path) -> dict[str, Any]:
    """Run the selected report and return it as a plain, serialisable dict."""
    if args.tags:
        tags = [{"tag": tag, "count": count} for tag, count in collect_tags(root).items()]
        return {"tags": tags}
    if args.files:
        return {"files": collect_files(root)}
    if args.links:
        links, _ = collect_links(root)
        return {
            "links": [link.to_dict() for link in links],
            "broken_count": sum(1 for link in links if not link.exists),
        }
    if args.orphans:
        return {"orphans": find_orphans(root)}
    if args.tag is not None:
        return {"tag": args.tag, "files": find_notes_with_tag(root, args.tag)}
    if args.backlinks is not None:
        return {"file": args.backlinks, "backlinks": find_backlinks(root, args.backlinks)}
    if args.query is not None:
        with VaultDB(build_vault(root)) as db:
            return {"rows": db.query(args.query).to_dicts()}
    return compute_stats(root).to_dict()


def _table_frame(document: dict[str, Any]) -> pl.DataFrame:
    # Render the first list in the document; flat documents become one row.
    for key, value in document.items():
        if isinstance(value, list):
            if value and isinstance(value[0], dict):
                return pl.DataFrame(value)
            return pl.DataFrame({key: value}, schema={key: pl.String})
    return pl.DataFrame([document])


def render(document: dict[str, Any], fmt: str) -> str:
    """Serialise *document*; raises ``TypeError``/``ValueError``/``yaml.YAMLError``."""
    if fmt == "yaml":
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True).rstrip("\n")
    if fmt == "table":
        with pl.Config(tbl_rows=-1, tbl_cols=-1, fmt_str_lengths=200):
            return str(_table_frame(document))
    return json.dumps(document, indent=2, ensure_ascii=False, default=str)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        print(f"Error loading config: {exc}", file=sys.stderr)
        return 1

    setup_logging(args.verbose or settings.verbose)
    root = args.vault_path or settings.vault_path
    fmt = args.format or settings.format
    logger.debug("Scanning vault %s", root)

    try:
        document = build_document(args, root)
    except (VaultError, duckdb.Error) as exc:
        print(f"Error {describe_action(args)}: {exc}", file=sys.stderr)
        return 1

    try:
        output = render(document, fmt)
    except (TypeError, ValueError, yaml.YAMLError) as exc:
        print(f"Error serializing to {fmt.upper()}: {exc}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
