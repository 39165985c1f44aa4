"""Static autowiring of TypeScript service classes."""

__version__ = "0.1.0"
