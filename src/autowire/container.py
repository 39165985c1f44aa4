"""Container collaborator protocols and an in-memory implementation.

Real containers satisfy :class:`ContainerBuilder` structurally (no
inheritance). :class:`InMemoryContainer` is what the CLI and the
tests register into.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from autowire.analysis.schemas import Definition


class ContainerBuilder(Protocol):
    @property
    def default_dir(self) -> Path | None: ...
    @property
    def definitions(self) -> Mapping[str, Definition]: ...
    @property
    def aliases(self) -> Mapping[str, str]: ...
    def set_definition(self, service_id: str, definition: Definition) -> None: ...
    def set_alias(self, alias: str, service_id: str) -> None: ...
    def has_alias(self, alias: str) -> bool: ...


class ManifestExporter(Protocol):
    async def generate_from_container(
        self, container: ContainerBuilder
    ) -> None: ...


class InMemoryContainer:
    """Dict-backed ContainerBuilder."""

    def __init__(self, default_dir: Path | None = None) -> None:
        self._default_dir = default_dir
        self._definitions: dict[str, Definition] = {}
        self._aliases: dict[str, str] = {}

    @property
    def default_dir(self) -> Path | None:
        return self._default_dir

    @property
    def definitions(self) -> Mapping[str, Definition]:
        return self._definitions

    @property
    def aliases(self) -> Mapping[str, str]:
        return self._aliases

    def set_definition(self, service_id: str, definition: Definition) -> None:
        self._definitions[service_id] = definition

    def set_alias(self, alias: str, service_id: str) -> None:
        """Register ``alias``; an existing alias keeps its target."""
        self._aliases.setdefault(alias, service_id)

    def has_alias(self, alias: str) -> bool:
        return alias in self._aliases
