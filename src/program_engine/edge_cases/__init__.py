"""Impossible-combination handling."""

from program_engine.edge_cases.handler import EdgeCaseHandler, resolve_edge_case
from program_engine.edge_cases.strategies import (
    EdgeCaseResolution,
    EdgeCaseStrategy,
    RedirectToNearestRealistic,
)

__all__ = [
    "EdgeCaseHandler",
    "EdgeCaseResolution",
    "EdgeCaseStrategy",
    "RedirectToNearestRealistic",
    "resolve_edge_case",
]
