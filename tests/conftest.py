"""Shared test fixtures: copied TypeScript project, recording container."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from autowire.analysis.schemas import Definition
from autowire.config import Settings
from autowire.container import InMemoryContainer

FIXTURE_PROJECT = Path(__file__).resolve().parent / "fixtures" / "ts_project"


class RecordingContainer(InMemoryContainer):
    """InMemoryContainer that also records every call made on it."""

    def __init__(self, default_dir: Path | None = None) -> None:
        super().__init__(default_dir)
        self.definition_calls: list[tuple[str, Definition]] = []
        self.alias_calls: list[tuple[str, str]] = []

    def set_definition(self, service_id: str, definition: Definition) -> None:
        self.definition_calls.append((service_id, definition))
        super().set_definition(service_id, definition)

    def set_alias(self, alias: str, service_id: str) -> None:
        self.alias_calls.append((alias, service_id))
        super().set_alias(alias, service_id)


def write_ts(root: Path, relative: str, content: str) -> Path:
    """Write a TypeScript file under ``root`` and return its path."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def ts_project(tmp_path: Path) -> Path:
    """A private copy of the fixture project (tsconfig.json + src/)."""
    target = tmp_path / "project"
    shutil.copytree(FIXTURE_PROJECT, target)
    return target


@pytest.fixture
def src_root(tmp_path: Path) -> Path:
    """An empty ``src`` directory for hand-built trees."""
    root = tmp_path / "app" / "src"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def container(ts_project: Path) -> RecordingContainer:
    return RecordingContainer(default_dir=ts_project / "src")
