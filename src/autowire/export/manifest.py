"""Service manifest export: ``services`` map as JSON or YAML."""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Any

import yaml

from autowire.analysis.schemas import Definition
from autowire.container import ContainerBuilder

_YAML_SUFFIXES = frozenset({".yml", ".yaml"})


def build_manifest(
    container: ContainerBuilder, manifest_dir: Path
) -> dict[str, Any]:
    """Build the ``{"services": {...}}`` payload for ``container``.

    Definitions become mappings, aliases become ``"@target"`` strings.
    Class paths are relative to ``manifest_dir`` and extension-less.
    """
    services: dict[str, Any] = {}
    for service_id in sorted(container.definitions):
        services[service_id] = _definition_to_dict(
            container.definitions[service_id], manifest_dir
        )
    for alias in sorted(container.aliases):
        services[alias] = f"@{container.aliases[alias]}"
    return {"services": services}


def _definition_to_dict(
    definition: Definition, manifest_dir: Path
) -> dict[str, Any]:
    module_path = definition.target.file_path.with_suffix("")
    rel = os.path.relpath(module_path, manifest_dir).replace(os.sep, "/")
    entry: dict[str, Any] = {
        "class": rel if rel.startswith(".") else f"./{rel}",
        "arguments": [str(ref) for ref in definition.arguments],
    }
    if definition.abstract:
        entry["abstract"] = True
    if definition.parent is not None:
        entry["parent"] = definition.parent
    return entry


class ManifestFile:
    """Writes the container manifest to ``path`` once processing ends."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    async def generate_from_container(
        self, container: ContainerBuilder
    ) -> None:
        payload = build_manifest(container, self._path.parent)
        await asyncio.to_thread(self._write, payload)

    def _write(self, payload: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        if self._path.suffix.lower() in _YAML_SUFFIXES:
            text = yaml.safe_dump(payload, sort_keys=False)
        else:
            text = json.dumps(payload, indent=2, ensure_ascii=False) + "\n"
        self._path.write_text(text, encoding="utf-8")
