"""Environment-based configuration and application constants."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and AUTOWIRE_* environment variables."""

    # Namespace derivation
    source_root_marker: str = "src"

    # Analysis
    source_extensions: Annotated[list[str], NoDecode] = [".ts"]
    tsconfig_path: Path | None = None
    respect_gitignore: bool = False

    # Logging
    log_level: str = "INFO"

    @field_validator("source_root_marker")
    @classmethod
    def _validate_marker(cls, v: str) -> str:
        v = v.strip().strip("/\\")
        if not v:
            raise ValueError("source_root_marker must not be empty")
        return v

    @field_validator("source_extensions", mode="before")
    @classmethod
    def _parse_extensions(cls, v: Any) -> Any:
        """Accept comma-separated string or JSON array."""
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("source_extensions")
    @classmethod
    def _validate_extensions(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError(
                "source_extensions must contain at least one extension"
            )
        normalized: list[str] = []
        for ext in v:
            ext = ext.lower()
            if not ext.startswith("."):
                ext = "." + ext
            if ext not in GRAMMAR_MODULES:
                logger.warning(
                    "No tree-sitter grammar registered for %s", ext
                )
            normalized.append(ext)
        return normalized

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "AUTOWIRE_",
        "extra": "ignore",
    }


# File extension → (grammar module, language factory) for tree-sitter
GRAMMAR_MODULES: dict[str, tuple[str, str]] = {
    ".ts": ("tree_sitter_typescript", "language_typescript"),
    ".mts": ("tree_sitter_typescript", "language_typescript"),
    ".cts": ("tree_sitter_typescript", "language_typescript"),
    ".tsx": ("tree_sitter_typescript", "language_tsx"),
}
