"""Infrastructure layer implementations."""

from stockroom.infrastructure import export, storage

__all__ = ["storage", "export"]
