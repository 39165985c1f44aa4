"""Derive a dotted namespace from a file's location under the source root."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath

from autowire.errors import MalformedPathError


@dataclass(frozen=True)
class Namespace:
    segments: tuple[str, ...]

    @property
    def depth(self) -> int:
        return len(self.segments)

    def qualify(self, name: str) -> str:
        """Join ``name`` onto the namespace (bare name at depth 0)."""
        if self.depth > 0:
            return ".".join(self.segments) + "." + name
        return name


def namespace_of(path: str | PurePath, marker: str = "src") -> Namespace:
    """Return the capitalized directory segments below ``marker``.

    ``src/Domain/User/UserService.ts`` → ``("Domain", "User")``.
    The file's own name never contributes a segment, and lowercase
    directories are ignored. The innermost ``marker`` component counts.
    Raises :class:`MalformedPathError` when no component equals ``marker``.
    """
    parts = PurePath(path).parts
    try:
        start = len(parts) - 1 - parts[::-1].index(marker)
    except ValueError:
        raise MalformedPathError(str(path), marker) from None

    directories = parts[start + 1 : -1]
    return Namespace(
        segments=tuple(p for p in directories if p[:1].isupper())
    )


def service_id_for(
    path: str | PurePath, class_name: str, marker: str = "src"
) -> str:
    """Canonical service identifier for ``class_name`` declared at ``path``."""
    return namespace_of(path, marker).qualify(class_name)
