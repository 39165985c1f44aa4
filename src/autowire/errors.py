"""Exception hierarchy.

Only configuration errors are fatal. Everything raised while
analyzing a single file is converted into a skip or a failed
outcome at the per-file boundary.
"""

from __future__ import annotations


class AutowireError(Exception):
    """Base class for all autowiring errors."""


class ConfigurationError(AutowireError):
    """Invalid global configuration, raised at construction time."""


class ContainerDefaultDirMustBeSet(ConfigurationError):
    """The container has no default directory to analyze."""

    def __init__(self) -> None:
        super().__init__(
            "The container default_dir must be set before autowiring"
        )


class MalformedPathError(AutowireError):
    """A path does not contain the source-root marker."""

    def __init__(self, path: str, marker: str) -> None:
        self.path = path
        self.marker = marker
        super().__init__(
            f"Path {path!r} has no {marker!r} component"
        )
