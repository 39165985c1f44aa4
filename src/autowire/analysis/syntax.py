"""Typed statement model built from the tree-sitter tree.

Only the shapes autowiring needs are represented. Each statement is
one of :data:`Statement`; anything else in the source is dropped
during conversion, so downstream code never touches raw nodes.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TypeRef:
    """A (possibly qualified) type reference such as ``Ns.Repo``."""

    parts: tuple[str, ...]

    @property
    def name(self) -> str:
        return self.parts[-1]

    @property
    def qualifier(self) -> tuple[str, ...]:
        return self.parts[:-1]

    @property
    def is_qualified(self) -> bool:
        return len(self.parts) > 1


@dataclass(frozen=True)
class Parameter:
    """A constructor parameter and its declared type, if any."""

    name: str
    type_ref: TypeRef | None


@dataclass(frozen=True)
class ClassDecl:
    name: str | None
    abstract: bool = False
    superclass: TypeRef | None = None
    interfaces: tuple[TypeRef, ...] = ()
    # None when the class declares no constructor at all
    constructor: tuple[Parameter, ...] | None = None
    members: tuple[str, ...] = ()
    line: int = 1


@dataclass(frozen=True)
class NamespaceDecl:
    """``namespace A.B { ... }``: ``path`` is ``("A", "B")``."""

    path: tuple[str, ...]
    body: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class ImportDecl:
    """An import statement and the local names it binds."""

    source: str
    bindings: tuple[str, ...] = ()


@dataclass(frozen=True)
class ExportDecl:
    default: bool
    declaration: ClassDecl | NamespaceDecl | None = None


Statement = ImportDecl | NamespaceDecl | ClassDecl | ExportDecl


@dataclass(frozen=True)
class ModuleSyntax:
    """All recognized top-level statements of one source file."""

    statements: tuple[Statement, ...] = ()
    has_error: bool = False
    imports: tuple[ImportDecl, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "imports",
            tuple(s for s in self.statements if isinstance(s, ImportDecl)),
        )

    def find_import(self, local_name: str) -> ImportDecl | None:
        """Return the first import binding ``local_name``."""
        for decl in self.imports:
            if local_name in decl.bindings:
                return decl
        return None
