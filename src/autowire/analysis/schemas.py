"""Pydantic models for autowiring output, plus the resolution result type."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from autowire.analysis.syntax import ClassDecl, ModuleSyntax
from autowire.constants import Outcome, SkipReason

T = TypeVar("T")


class ClassSymbol(BaseModel):
    """Static stand-in for a class reference, built from its declaration."""

    model_config = ConfigDict(frozen=True)

    name: str
    file_path: Path
    abstract: bool = False
    members: tuple[str, ...] = ()


class Reference(BaseModel):
    """Lazy pointer to another service by identifier."""

    model_config = ConfigDict(frozen=True)

    id: str

    def __str__(self) -> str:
        return f"@{self.id}"


class Definition(BaseModel):
    """Discovered metadata for one service class."""

    target: ClassSymbol
    abstract: bool = False
    parent: str | None = None
    arguments: list[Reference] = Field(default_factory=list)

    def add_argument(self, reference: Reference) -> None:
        self.arguments.append(reference)


@dataclass(frozen=True)
class Resolution(Generic[T]):
    """Result of one resolution step: a value, or why there is none."""

    outcome: Outcome
    value: T | None = None
    reason: SkipReason | None = None
    detail: str = ""

    @classmethod
    def resolved(cls, value: T) -> Resolution[T]:
        return cls(outcome=Outcome.RESOLVED, value=value)

    @classmethod
    def skipped(cls, reason: SkipReason, detail: str = "") -> Resolution[T]:
        return cls(outcome=Outcome.SKIPPED, reason=reason, detail=detail)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.RESOLVED


@dataclass(frozen=True)
class LocatedClass:
    """Declaration Locator output: the class and its whole file."""

    declaration: ClassDecl
    module: ModuleSyntax
    file_path: Path
    namespace: tuple[str, ...]

    @property
    def depth(self) -> int:
        return len(self.namespace)


@dataclass
class Assembly:
    """Definition Assembler output for one class."""

    service_id: str
    definition: Definition
    interface_ids: list[str]
    skipped: list[SkipReason]


class ProcessReport(BaseModel):
    """Aggregated outcome of one ``Autowire.process()`` run."""

    files_discovered: int = 0
    files_excluded: int = 0
    definitions: int = 0
    aliases: int = 0
    failed: int = 0
    skipped: dict[str, int] = Field(default_factory=dict)

    def count_skip(self, reason: SkipReason, n: int = 1) -> None:
        self.skipped[reason.value] = self.skipped.get(reason.value, 0) + n

    def count_skips(self, reasons: list[SkipReason]) -> None:
        for reason, n in Counter(reasons).items():
            self.count_skip(reason, n)
