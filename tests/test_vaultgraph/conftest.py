"""Shared vault fixtures.

``graph_vault`` layout::

    Beta.md              -> [[Nowhere]] (dangling)        #project/active #Draft
    index.md             -> projects/alpha, Beta, [[Missing Note]] (dangling)
    lonely.md            -> [[Ghost]] (dangling only, nobody links here)
    notes/readme.txt     (not a note)
    projects/alpha.md    -> [[index]] and [[index.md]]    #project/active
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest


def _write_note(root: Path, rel: str, content: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


@pytest.fixture()
def small_vault(tmp_path: Path) -> Path:
    """Three notes: A links B, B has frontmatter tags, C stands alone."""
    _write_note(tmp_path, "A.md", "#work\n[[B]]")
    _write_note(tmp_path, "B.md", "---\ntags: [home]\n---\ncontent")
    _write_note(tmp_path, "C.md", "Nothing to see here.")
    return tmp_path


@pytest.fixture()
def graph_vault(tmp_path: Path) -> Path:
    _write_note(tmp_path, "index.md", """\
        ---
        tags: [hub]
        ---
        # Index
        See [[projects/alpha]], [[Beta|the beta note]] and [[Missing Note]].
        #hub
    """)
    _write_note(tmp_path, "projects/alpha.md", """\
        Alpha links [[index]] twice: [[index.md]]. #project/active
    """)
    _write_note(tmp_path, "Beta.md", """\
        Beta has a dangling link [[Nowhere]]. #project/active #Draft
    """)
    _write_note(tmp_path, "lonely.md", """\
        Nobody links here. [[Ghost]]
    """)
    _write_note(tmp_path, "notes/readme.txt", "[[index]] #ignored")
    return tmp_path
