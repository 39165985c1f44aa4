"""Tests for service manifest export."""

import json
from pathlib import Path

import yaml

from autowire.analysis.schemas import ClassSymbol, Definition, Reference
from autowire.container import InMemoryContainer
from autowire.export import ManifestFile, build_manifest


def _container(root: Path) -> InMemoryContainer:
    container = InMemoryContainer(root / "src")
    container.set_definition(
        "Foo",
        Definition(
            target=ClassSymbol(name="Foo", file_path=root / "src" / "Foo.ts"),
            arguments=[Reference(id="Bar")],
        ),
    )
    container.set_definition(
        "Domain.Repo",
        Definition(
            target=ClassSymbol(
                name="Repo",
                file_path=root / "src" / "Domain" / "Repo.ts",
                abstract=True,
            ),
            abstract=True,
            parent="Domain.Base",
        ),
    )
    container.set_alias("IFoo", "Foo")
    return container


def test_build_manifest(tmp_path: Path) -> None:
    manifest = build_manifest(_container(tmp_path), tmp_path)
    assert manifest == {
        "services": {
            "Domain.Repo": {
                "class": "./src/Domain/Repo",
                "arguments": [],
                "abstract": True,
                "parent": "Domain.Base",
            },
            "Foo": {"class": "./src/Foo", "arguments": ["@Bar"]},
            "IFoo": "@Foo",
        }
    }


def test_class_path_relative_to_manifest_dir(tmp_path: Path) -> None:
    manifest = build_manifest(_container(tmp_path), tmp_path / "config")
    assert manifest["services"]["Foo"]["class"] == "../src/Foo"


async def test_writes_json(tmp_path: Path) -> None:
    path = tmp_path / "out" / "services.json"
    await ManifestFile(path).generate_from_container(_container(tmp_path))
    data = json.loads(path.read_text())
    assert data["services"]["IFoo"] == "@Foo"
    assert data["services"]["Foo"]["class"] == "../src/Foo"


async def test_writes_yaml(tmp_path: Path) -> None:
    path = tmp_path / "services.yaml"
    await ManifestFile(path).generate_from_container(_container(tmp_path))
    data = yaml.safe_load(path.read_text())
    assert data["services"]["Domain.Repo"]["parent"] == "Domain.Base"
    assert list(data["services"]) == ["Domain.Repo", "Foo", "IFoo"]
