"""Assemble container definitions from located class declarations."""

from __future__ import annotations

import logging

from autowire.analysis.identifiers import IdentifierResolver
from autowire.analysis.schemas import (
    Assembly,
    ClassSymbol,
    Definition,
    LocatedClass,
    Reference,
    Resolution,
)
from autowire.analysis.syntax import TypeRef
from autowire.constants import SkipReason
from autowire.discovery.namespace import Namespace

logger = logging.getLogger(__name__)


class DefinitionAssembler:
    """Builds a :class:`Definition` plus alias candidates for one class."""

    def __init__(self, resolver: IdentifierResolver) -> None:
        self._resolver = resolver

    def assemble(self, located: LocatedClass) -> Assembly:
        decl = located.declaration
        name = decl.name or ""
        skipped: list[SkipReason] = []

        definition = Definition(
            target=ClassSymbol(
                name=name,
                file_path=located.file_path,
                abstract=decl.abstract,
                members=decl.members,
            ),
            abstract=decl.abstract,
        )

        if decl.superclass is not None:
            parent = self._resolve_bare(decl.superclass, located)
            if parent.ok:
                definition.parent = parent.value
            else:
                logger.debug(
                    "Parent of %s (%s:%d) unresolved: %s",
                    name,
                    located.file_path,
                    decl.line,
                    parent.detail,
                )

        for param in decl.constructor or ():
            if param.type_ref is None:
                skipped.append(SkipReason.UNSUPPORTED_TYPE)
                continue
            argument = self.resolve_argument(param.type_ref, located)
            if argument.value is None:
                logger.debug(
                    "Skipping argument %s of %s (%s:%d): %s",
                    param.name,
                    name,
                    located.file_path,
                    decl.line,
                    argument.reason,
                )
                skipped.append(argument.reason or SkipReason.UNRESOLVED_IMPORT)
                continue
            definition.add_argument(Reference(id=argument.value))

        interface_ids: list[str] = []
        for iface in decl.interfaces:
            resolved = self._resolve_bare(iface, located)
            if resolved.value is not None:
                interface_ids.append(resolved.value)
            else:
                skipped.append(resolved.reason or SkipReason.UNRESOLVED_IMPORT)

        return Assembly(
            service_id=Namespace(located.namespace).qualify(name),
            definition=definition,
            interface_ids=interface_ids,
            skipped=skipped,
        )

    def resolve_argument(
        self, type_ref: TypeRef, located: LocatedClass
    ) -> Resolution[str]:
        """Resolve a constructor parameter type.

        For ``Q1.Q2.T`` the left-hand side is unwrapped ``depth + 1``
        times: a single remaining identifier is the imported local
        name; a longer remainder means no override; nothing left
        means the reference is too short for this file's depth.
        """
        if not type_ref.is_qualified:
            return self._resolver.resolve(
                type_ref.name, located.module, located.file_path
            )

        remaining = len(type_ref.parts) - (located.depth + 1)
        # Only this argument is dropped; the definition still registers
        if remaining <= 0:
            return Resolution.skipped(
                SkipReason.QUALIFIER_EXHAUSTED, ".".join(type_ref.parts)
            )
        aka_name = type_ref.parts[0] if remaining == 1 else None
        return self._resolver.resolve(
            type_ref.name, located.module, located.file_path, aka_name
        )

    def _resolve_bare(
        self, type_ref: TypeRef, located: LocatedClass
    ) -> Resolution[str]:
        # Superclasses and interfaces only resolve by bare name
        if type_ref.is_qualified:
            return Resolution.skipped(
                SkipReason.UNSUPPORTED_TYPE, ".".join(type_ref.parts)
            )
        return self._resolver.resolve(
            type_ref.name, located.module, located.file_path
        )
