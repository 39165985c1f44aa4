"""Static analysis: locate service classes and assemble definitions."""

from autowire.analysis.definitions import DefinitionAssembler
from autowire.analysis.identifiers import IdentifierResolver
from autowire.analysis.locator import locate_class, locate_declaration
from autowire.analysis.path_aliases import PathAlias, PathAliasTable
from autowire.analysis.schemas import (
    Assembly,
    ClassSymbol,
    Definition,
    LocatedClass,
    ProcessReport,
    Reference,
    Resolution,
)

__all__ = [
    "Assembly",
    "ClassSymbol",
    "Definition",
    "DefinitionAssembler",
    "IdentifierResolver",
    "LocatedClass",
    "PathAlias",
    "PathAliasTable",
    "ProcessReport",
    "Reference",
    "Resolution",
    "locate_class",
    "locate_declaration",
]
