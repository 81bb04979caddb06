"""Ports - interfaces/protocols for external dependencies."""

from .record_source import RecordSource
from .renderer import Renderer

__all__ = [
    "RecordSource",
    "Renderer",
]
