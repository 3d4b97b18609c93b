"""WikiLink, tag, and frontmatter-tag parser.

Frontmatter is *not* run through a YAML parser.  Only the ``tags`` key is
read, line by line:

- ``tags: solo`` and ``tags: [a, "b", 'c']`` declare tags directly;
- once a tag has been found, every later ``- item`` line in the block is read
  as one more tag.

The second rule means a bare ``tags:`` followed by a block list yields
nothing, and an unrelated list *after* a populated ``tags:`` line is read as
tags too.  Both are known limitations kept for reproducible output.
"""

from __future__ import annotations

import re

# [[Target]] or [[Target|Alias]]
_WIKILINK_RE = re.compile(r"\[\[([^\]|]+)(?:\|[^\]]*)?\]\]")
# Inline #tags at start of text or after whitespace (#tag, #tag/subtag)
_TAG_RE = re.compile(r"(?:^|\s)#([A-Za-z0-9_/-]+)")

_FRONTMATTER_OPEN = "---\n"
_FRONTMATTER_CLOSE = "\n---\n"
_QUOTES = ("\"", "'")


def extract_frontmatter(content: str) -> str | None:
    """Return the raw text between the leading ``---`` fences, if any."""
    if not content.startswith(_FRONTMATTER_OPEN):
        return None
    start = len(_FRONTMATTER_OPEN)
    end = content.find(_FRONTMATTER_CLOSE, start)
    if end == -1:
        return None
    return content[start:end]


def _unquote(value: str) -> str:
    """Strip one pair of matching surrounding quotes from *value*."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in _QUOTES:
        return value[1:-1]
    return value


def parse_frontmatter_tags(frontmatter: str) -> list[str]:
    """Return the tags declared in a frontmatter block (see module docstring)."""
    tags: list[str] = []
    for raw_line in frontmatter.splitlines():
        line = raw_line.strip()

        if line.startswith("tags:"):
            value = line[len("tags:") :].strip()
            if value.startswith("[") and value.endswith("]"):
                for piece in value[1:-1].split(","):
                    tag = _unquote(piece.strip())
                    if tag:
                        tags.append(tag)
            elif value:
                tag = _unquote(value)
                if tag:
                    tags.append(tag)
        elif line.startswith("- ") and tags:
            tag = _unquote(line[2:].strip())
            if tag:
                tags.append(tag)
    return tags


def extract_inline_tags(text: str) -> list[str]:
    """Return every inline ``#tag`` in *text*, in order, duplicates included."""
    return [m.group(1) for m in _TAG_RE.finditer(text)]


def extract_tags(content: str) -> list[str]:
    """Return inline tags followed by frontmatter tags for a whole note."""
    tags = extract_inline_tags(content)
    frontmatter = extract_frontmatter(content)
    if frontmatter is not None:
        tags.extend(parse_frontmatter_tags(frontmatter))
    return tags


def extract_links(content: str) -> list[str]:
    """Return all ``[[WikiLink]]`` targets in *content* (ordered, not de-duped).

    Aliases are dropped; targets are returned exactly as written.
    """
    return [m.group(1) for m in _WIKILINK_RE.finditer(content)]


def count_words(content: str) -> int:
    return len(content.split())
