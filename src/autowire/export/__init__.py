"""Manifest export: serialize a populated container."""

from autowire.export.manifest import ManifestFile, build_manifest

__all__ = ["ManifestFile", "build_manifest"]
