"""CLI defaults loaded from a TOML file.

Example::

    [vaultgraph]
    vault_path = "~/Documents/notes"
    format     = "yaml"        # json | yaml | table
    verbose    = false

The ``[vaultgraph]`` table is optional; a flat file works too.  A relative
``vault_path`` is resolved against the directory holding the config file.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

FORMATS = ("json", "yaml", "table")


class ConfigError(Exception):
    """The config file is missing, unreadable or has invalid values."""


@dataclass
class Settings:
    vault_path: Path = Path(".")
    format: str = "json"
    verbose: bool = False
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None) -> "Settings":
        """Build settings from parsed TOML.

        A relative ``vault_path`` is taken relative to *base_dir* when given.
        """
        section = data.get("vaultgraph", data)
        if not isinstance(section, dict):
            raise ConfigError(f"[vaultgraph] must be a table, not {type(section).__name__}")

        fmt = section.get("format", "json")
        if fmt not in FORMATS:
            raise ConfigError(f"Unknown output format {fmt!r}; expected one of {', '.join(FORMATS)}")

        raw_path = section.get("vault_path", ".")
        if not isinstance(raw_path, str):
            raise ConfigError(f"vault_path must be a string, not {type(raw_path).__name__}")
        vault_path = Path(raw_path).expanduser()
        if base_dir is not None and not vault_path.is_absolute():
            vault_path = base_dir / vault_path

        verbose = section.get("verbose", False)
        if not isinstance(verbose, bool):
            raise ConfigError(f"verbose must be true or false, not {verbose!r}")

        return cls(
            vault_path=vault_path,
            format=fmt,
            verbose=verbose,
            extra={k: v for k, v in section.items() if k not in {"vault_path", "format", "verbose"}},
        )


def load_settings(path: Path | None = None) -> Settings:
    """Load :class:`Settings` from *path*; defaults when *path* is ``None``.

    A relative ``vault_path`` in the file is resolved against the file's own
    directory, not the working directory.
    """
    if path is None:
        return Settings()
    try:
        with open(path, "rb") as fh:
            data = tomllib.load(fh)
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    return Settings.from_dict(data, base_dir=Path(path).parent)
