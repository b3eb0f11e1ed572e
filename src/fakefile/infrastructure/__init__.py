"""Concrete infrastructure implementations."""

from .filesystem import LocalTextSource

__all__ = ["LocalTextSource"]
