"""Resolve referenced type names to service identifiers via imports."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from autowire.analysis.path_aliases import PathAliasTable
from autowire.analysis.schemas import Resolution
from autowire.analysis.syntax import ModuleSyntax
from autowire.constants import SkipReason
from autowire.discovery.namespace import service_id_for
from autowire.errors import MalformedPathError

logger = logging.getLogger(__name__)


class IdentifierResolver:
    """Maps ``(type name, importing file)`` to a service identifier.

    The import that binds the name gives a module path; the path is
    remapped through the alias table, made absolute, and turned into
    an identifier the same way a declaring class's path is.
    """

    def __init__(
        self,
        aliases: PathAliasTable | None = None,
        marker: str = "src",
    ) -> None:
        self._aliases = aliases or PathAliasTable()
        self._marker = marker

    @property
    def aliases(self) -> PathAliasTable:
        return self._aliases

    def resolve_import_path(self, source: str, file_dir: Path) -> Path:
        """Absolute location of an import ``source`` seen from ``file_dir``."""
        root = file_dir
        remapped = self._aliases.remap(source)
        if remapped is not None and self._aliases.base_dir is not None:
            source = remapped
            root = self._aliases.base_dir
        return Path(os.path.normpath(root / source))

    def resolve(
        self,
        type_name: str,
        module: ModuleSyntax,
        file_path: Path,
        aka_name: str | None = None,
    ) -> Resolution[str]:
        """Resolve ``type_name`` as referenced from ``file_path``.

        ``aka_name`` overrides the local name looked up among the
        imports (qualified references bind the qualifier, not the
        member).
        """
        local_name = aka_name or type_name
        decl = module.find_import(local_name)
        if decl is None:
            return Resolution.skipped(
                SkipReason.UNRESOLVED_IMPORT,
                f"{local_name} is not imported in {file_path}",
            )

        target = self.resolve_import_path(decl.source, file_path.parent)
        try:
            service_id = service_id_for(target, type_name, self._marker)
        except MalformedPathError as exc:
            return Resolution.skipped(SkipReason.MALFORMED_PATH, str(exc))
        return Resolution.resolved(service_id)
