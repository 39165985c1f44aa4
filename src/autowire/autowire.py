"""Orchestrate discovery, analysis and container registration."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from autowire.analysis.aliases import AliasRegistrar
from autowire.analysis.definitions import DefinitionAssembler
from autowire.analysis.identifiers import IdentifierResolver
from autowire.analysis.locator import locate_declaration
from autowire.analysis.path_aliases import PathAliasTable
from autowire.analysis.schemas import Assembly, ProcessReport, Resolution
from autowire.config import Settings
from autowire.constants import DEFAULT_TSCONFIG_NAME, Outcome, SkipReason
from autowire.container import ContainerBuilder, ManifestExporter
from autowire.discovery.walker import ExclusionSet, TreeWalker
from autowire.errors import ContainerDefaultDirMustBeSet

logger = logging.getLogger(__name__)


@dataclass
class _FileResult:
    outcome: Outcome
    skipped: list[SkipReason]
    definitions: int = 0
    aliases: int = 0


class Autowire:
    """Discover service classes under the container's default directory.

    Every candidate file is analyzed concurrently; each registers
    its definition and interface aliases on the container when done.
    One file failing never affects the others.
    """

    def __init__(
        self,
        container: ContainerBuilder,
        tsconfig_path: Path | None = None,
        *,
        settings: Settings | None = None,
        manifest_exporter: ManifestExporter | None = None,
    ) -> None:
        if container.default_dir is None:
            raise ContainerDefaultDirMustBeSet()
        self._container = container
        self._root_directory = Path(container.default_dir)
        self._settings = settings or Settings()
        self._excluded: list[str] = []
        self._manifest_exporter = manifest_exporter

        self._tsconfig_path = (
            tsconfig_path
            or self._settings.tsconfig_path
            or Path.cwd() / DEFAULT_TSCONFIG_NAME
        )
        self._resolver = IdentifierResolver(
            PathAliasTable.load(self._tsconfig_path),
            marker=self._settings.source_root_marker,
        )
        self._assembler = DefinitionAssembler(self._resolver)
        self._alias_registrar = AliasRegistrar(container)

    @property
    def container(self) -> ContainerBuilder:
        return self._container

    @property
    def root_directory(self) -> Path:
        return self._root_directory

    @property
    def tsconfig_path(self) -> Path:
        return self._tsconfig_path

    @property
    def path_aliases(self) -> PathAliasTable:
        return self._resolver.aliases

    @property
    def manifest_exporter(self) -> ManifestExporter | None:
        return self._manifest_exporter

    @manifest_exporter.setter
    def manifest_exporter(self, exporter: ManifestExporter | None) -> None:
        self._manifest_exporter = exporter

    def add_exclude(self, relative_path: str) -> None:
        """Never analyze files under ``relative_path`` (relative to root)."""
        self._excluded.append(relative_path)

    async def process(self) -> ProcessReport:
        """Analyze every candidate file and populate the container.

        All per-file tasks are started before any is awaited, and
        completion is awaited as a single barrier. The manifest
        exporter, if attached, then runs once.
        """
        walker = TreeWalker(
            self._root_directory,
            ExclusionSet.from_relative(self._root_directory, self._excluded),
            respect_gitignore=self._settings.respect_gitignore,
        )
        tasks = [
            asyncio.ensure_future(self._execute_file_path(file_path))
            for file_path in walker.walk()
        ]
        results: list[_FileResult] = list(await asyncio.gather(*tasks))

        report = ProcessReport(
            files_discovered=len(results),
            files_excluded=walker.excluded_count,
        )
        for result in results:
            report.definitions += result.definitions
            report.aliases += result.aliases
            if result.outcome is Outcome.FAILED:
                report.failed += 1
            report.count_skips(result.skipped)

        logger.info(
            "Autowired %d definitions and %d aliases from %d files "
            "(%d excluded, %d failed)",
            report.definitions,
            report.aliases,
            report.files_discovered,
            report.files_excluded,
            report.failed,
        )

        if self._manifest_exporter is not None:
            await self._manifest_exporter.generate_from_container(
                self._container
            )
        return report

    async def _execute_file_path(self, file_path: Path) -> _FileResult:
        """Run the per-file pipeline; errors stay inside this file."""
        try:
            analysis = await asyncio.to_thread(self._analyze_file, file_path)
            if analysis.value is None:
                logger.debug(
                    "Skipped %s: %s %s",
                    file_path,
                    analysis.reason,
                    analysis.detail,
                )
                return _FileResult(
                    outcome=Outcome.SKIPPED,
                    skipped=[analysis.reason] if analysis.reason else [],
                )
            return self._register(analysis.value)
        except Exception:  # noqa: BLE001
            logger.warning("Autowiring failed for %s", file_path, exc_info=True)
            return _FileResult(outcome=Outcome.FAILED, skipped=[])

    def _register(self, assembly: Assembly) -> _FileResult:
        # Runs on the event loop thread, so the alias check-then-set
        # below cannot interleave with another file.
        self._container.set_definition(assembly.service_id, assembly.definition)
        aliases = self._alias_registrar.register(
            assembly.interface_ids, assembly.service_id
        )
        skipped = list(assembly.skipped)
        skipped.extend([SkipReason.ALIAS_EXISTS] * aliases.already_aliased)
        return _FileResult(
            outcome=Outcome.RESOLVED,
            skipped=skipped,
            definitions=1,
            aliases=aliases.registered,
        )

    def _analyze_file(self, file_path: Path) -> Resolution[Assembly]:
        located = locate_declaration(file_path, self._settings)
        if located.value is None:
            return Resolution(
                outcome=located.outcome,
                reason=located.reason,
                detail=located.detail,
            )
        return Resolution.resolved(self._assembler.assemble(located.value))
