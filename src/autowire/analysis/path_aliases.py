"""Path-alias remapping loaded from ``tsconfig.json``."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import json5

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PathAlias:
    """One ``compilerOptions.paths`` entry with wildcards removed."""

    prefix: str
    replacement: str


@dataclass(frozen=True)
class PathAliasTable:
    entries: tuple[PathAlias, ...] = ()
    base_dir: Path | None = None

    @classmethod
    def load(cls, tsconfig_path: Path) -> PathAliasTable:
        """Read ``compilerOptions.paths`` from ``tsconfig_path``.

        A missing, unreadable or malformed file yields an empty table.
        """
        try:
            raw: Any = json5.loads(tsconfig_path.read_text(encoding="utf-8"))
            paths = raw["compilerOptions"]["paths"]
            if not isinstance(paths, dict):
                raise TypeError("compilerOptions.paths is not a mapping")
            entries = tuple(
                PathAlias(
                    prefix=key.replace("*", ""),
                    replacement=targets[0].replace("*", ""),
                )
                for key, targets in paths.items()
            )
        except (OSError, ValueError, KeyError, TypeError, IndexError,
                AttributeError):
            logger.debug(
                "No usable path aliases in %s", tsconfig_path, exc_info=True
            )
            return cls()

        return cls(entries=entries, base_dir=tsconfig_path.parent)

    def __len__(self) -> int:
        return len(self.entries)

    def remap(self, import_source: str) -> str | None:
        """Rewrite ``import_source`` through the first matching entry.

        Returns None when no entry applies. Entries whose literal
        prefix is empty never match.
        """
        for entry in self.entries:
            if entry.prefix and entry.prefix in import_source:
                return import_source.replace(
                    entry.prefix, entry.replacement, 1
                )
        return None
