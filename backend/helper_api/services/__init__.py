"""Service layer for the refresh loop and download decisions."""

from .query import Decision, DecisionOutcome, QueryService
from .refresh import RefreshCycle, RefreshState, exit_process

__all__ = [
    "Decision",
    "DecisionOutcome",
    "QueryService",
    "RefreshCycle",
    "RefreshState",
    "exit_process",
]
