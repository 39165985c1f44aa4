"""Shared constants: outcome and skip vocabulary for the pipeline.

StrEnum members are str-compatible, so report payloads serialize
unchanged.
"""

from __future__ import annotations

from enum import StrEnum


class Outcome(StrEnum):
    """Outcome of a single resolution step or per-file unit."""

    RESOLVED = "resolved"
    SKIPPED = "skipped"
    FAILED = "failed"


class SkipReason(StrEnum):
    """Why a file, argument or alias produced nothing."""

    UNSUPPORTED_EXTENSION = "unsupported_extension"
    MALFORMED_PATH = "malformed_path"
    GRAMMAR_UNAVAILABLE = "grammar_unavailable"
    PARSE_ERROR = "parse_error"
    NO_CLASS = "no_class"
    UNRESOLVED_IMPORT = "unresolved_import"
    UNSUPPORTED_TYPE = "unsupported_type"
    QUALIFIER_EXHAUSTED = "qualifier_exhausted"
    ALIAS_EXISTS = "alias_exists"


CONSTRUCTOR_NAME = "constructor"
DEFAULT_TSCONFIG_NAME = "tsconfig.json"
