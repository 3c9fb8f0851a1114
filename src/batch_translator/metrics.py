"""
Metrics collaborator used by the metering decorators.

The translator only depends on the ``CounterSink`` protocol. Any backend that
offers ``increment_counter(name)`` and is safe for concurrent increments can
be plugged in; ``InMemoryMetricRegistry`` is the in-process implementation
used by default wiring and in tests.
"""

import threading
from typing import Dict

from typing_extensions import Protocol, runtime_checkable


@runtime_checkable
class CounterSink(Protocol):
    """Anything that can count named events."""

    def increment_counter(self, name: str) -> None:
        """Increment the counter called ``name`` by one."""


class InMemoryMetricRegistry:
    """
    Thread-safe registry of named counters.

    Examples:
        >>> registry = InMemoryMetricRegistry()
        >>> registry.increment_counter("translation.parse.error")
        >>> registry.count("translation.parse.error")
        1
        >>> registry.count("never.seen")
        0
    """

    def __init__(self) -> None:
        self._counters: Dict[str, int] = {}
        self._lock = threading.Lock()

    def increment_counter(self, name: str, amount: int = 1) -> None:
        with self._lock:
            self._counters[name] = self._counters.get(name, 0) + amount

    def count(self, name: str) -> int:
        with self._lock:
            return self._counters.get(name, 0)

    def snapshot(self) -> Dict[str, int]:
        """Return a copy of all counters (for logging/tests)."""
        with self._lock:
            return dict(self._counters)

    def reset(self) -> None:
        with self._lock:
            self._counters.clear()


__all__ = ["CounterSink", "InMemoryMetricRegistry"]
