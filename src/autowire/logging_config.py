"""Singleton logging configuration.

setup_logging() configures the root logger once; later calls are
no-ops so the CLI and embedding applications can both call it.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

# Third-party loggers to suppress to WARNING
_SUPPRESSED_LOGGERS = (
    "tree_sitter",
    "json5",
)

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure root logger and quiet third-party loggers.

    Idempotent: the second call is a no-op.
    """
    global _configured  # noqa: PLW0603
    if _configured:
        return
    _configured = True

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

    for name in _SUPPRESSED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def set_package_level(level: str) -> None:
    """Adjust the ``autowire`` logger level after setup (e.g. --verbose)."""
    logging.getLogger("autowire").setLevel(getattr(logging, level.upper()))
