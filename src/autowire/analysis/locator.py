"""Locate the exported service class of a source file."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from autowire.analysis.ast_parser import GrammarUnavailableError, parse_module
from autowire.analysis.schemas import LocatedClass, Resolution
from autowire.analysis.syntax import (
    ClassDecl,
    ExportDecl,
    ModuleSyntax,
    NamespaceDecl,
    Statement,
)
from autowire.config import Settings
from autowire.constants import SkipReason
from autowire.discovery.namespace import namespace_of
from autowire.errors import MalformedPathError

logger = logging.getLogger(__name__)


def locate_class(module: ModuleSyntax, depth: int) -> ClassDecl | None:
    """Find the file's service class.

    The ``export default`` class wins. Otherwise, for files below at
    least one namespace directory, descend exactly ``depth`` namespace
    levels and take the first named-exported class there.
    """
    for stmt in module.statements:
        if (
            isinstance(stmt, ExportDecl)
            and stmt.default
            and isinstance(stmt.declaration, ClassDecl)
        ):
            return stmt.declaration
    if depth > 0:
        return _descend(module.statements, depth)
    return None


def _descend(
    statements: Sequence[Statement], remaining: int
) -> ClassDecl | None:
    if remaining == 0:
        for stmt in statements:
            if (
                isinstance(stmt, ExportDecl)
                and not stmt.default
                and isinstance(stmt.declaration, ClassDecl)
            ):
                return stmt.declaration
        return None

    for stmt in statements:
        ns = stmt.declaration if isinstance(stmt, ExportDecl) else stmt
        # `namespace A.B` spans two levels at once
        if isinstance(ns, NamespaceDecl) and 0 < len(ns.path) <= remaining:
            found = _descend(ns.body, remaining - len(ns.path))
            if found is not None:
                return found
    return None


def locate_declaration(
    file_path: Path, settings: Settings
) -> Resolution[LocatedClass]:
    """Read, parse and locate the service class declared in ``file_path``."""
    extension = file_path.suffix.lower()
    if extension not in settings.source_extensions:
        return Resolution.skipped(SkipReason.UNSUPPORTED_EXTENSION)

    try:
        namespace = namespace_of(file_path, settings.source_root_marker)
    except MalformedPathError as exc:
        return Resolution.skipped(SkipReason.MALFORMED_PATH, str(exc))

    source = file_path.read_text(encoding="utf-8")
    try:
        module = parse_module(source, extension)
    except GrammarUnavailableError:
        return Resolution.skipped(SkipReason.GRAMMAR_UNAVAILABLE, extension)
    if module.has_error:
        return Resolution.skipped(SkipReason.PARSE_ERROR, str(file_path))

    declaration = locate_class(module, namespace.depth)
    if declaration is None or not declaration.name:
        return Resolution.skipped(SkipReason.NO_CLASS, str(file_path))

    return Resolution.resolved(
        LocatedClass(
            declaration=declaration,
            module=module,
            file_path=file_path,
            namespace=namespace.segments,
        )
    )
