"""Exports for test fakes."""

from .text_source import InMemoryTextSource

__all__ = ["InMemoryTextSource"]
