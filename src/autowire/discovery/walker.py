"""Enumerate candidate source files under the analysis root."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

import pathspec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExclusionSet:
    """Absolute path prefixes that must never be analyzed."""

    paths: tuple[str, ...] = ()

    @classmethod
    def from_relative(
        cls, root: Path, relative_paths: Iterable[str]
    ) -> ExclusionSet:
        return cls(paths=tuple(str(root / rel) for rel in relative_paths))

    def matches(self, file_path: Path) -> bool:
        candidate = str(file_path)
        return any(excluded in candidate for excluded in self.paths)


class TreeWalker:
    """Lazy depth-first walk, deterministic per sorted directory listing."""

    def __init__(
        self,
        root: Path,
        exclusions: ExclusionSet | None = None,
        *,
        respect_gitignore: bool = False,
    ) -> None:
        self._root = root
        self._resolved_root = root.resolve()
        self._exclusions = exclusions or ExclusionSet()
        self._gitignore = (
            _load_gitignore(root) if respect_gitignore else None
        )
        self.excluded_count = 0

    def walk(self) -> Iterator[Path]:
        yield from self._walk(self._root)

    def _walk(self, current: Path) -> Iterator[Path]:
        for item in sorted(current.iterdir()):
            # Symlinks resolving outside the root are never followed
            if item.is_symlink():
                if not item.resolve().is_relative_to(self._resolved_root):
                    continue
            if self._ignored(item):
                continue
            if item.is_dir():
                yield from self._walk(item)
            elif item.is_file():
                if self._exclusions.matches(item):
                    self.excluded_count += 1
                    continue
                yield item

    def _ignored(self, item: Path) -> bool:
        if self._gitignore is None:
            return False
        rel = str(item.relative_to(self._root))
        if item.is_dir():
            rel += "/"
        return self._gitignore.match_file(rel)


def _load_gitignore(root: Path) -> pathspec.PathSpec:
    """Load .gitignore patterns using pathspec."""
    gitignore = root / ".gitignore"
    if not gitignore.exists():
        return pathspec.PathSpec.from_lines("gitignore", [])
    try:
        with open(gitignore, encoding="utf-8") as f:
            return pathspec.PathSpec.from_lines("gitignore", f)
    except OSError:
        logger.debug("Unreadable .gitignore at %s", gitignore)
        return pathspec.PathSpec.from_lines("gitignore", [])
