"""Structured asyncio building blocks: lazy tasks, fail-fast joins, scoped teardown and event-loop threads."""

__version__ = "0.1.0"
__all__ = ["errors", "results", "cancellation", "task", "scoped", "join", "thread"]