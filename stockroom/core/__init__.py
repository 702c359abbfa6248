"""Core domain layer - entities, interfaces, exceptions and services."""

from stockroom.core import entities, exceptions, interfaces

__all__ = ["entities", "interfaces", "exceptions"]
