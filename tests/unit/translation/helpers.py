"""
Stage functions and recording doubles used across the translation tests.

Stage functions here are also referenced by dotted path from configuration
tests, so they must stay importable as module attributes.
"""

from typing import Any, Dict, List


def double(element, context):
    return [element * 2]


def keep_even(element, context):
    return [element] if element % 2 == 0 else []


def reciprocal(element, context):
    return [1 / element]


def duplicate(element, context):
    return [element, element]


def make_multiplier(factor: int):
    def stage(element, context):
        return [element * factor]

    return stage


class Stages:
    """Holder for factory-style import paths (``Class.factory``)."""

    @staticmethod
    def adder(amount: int):
        def stage(element, context):
            return [element + amount]

        return stage


NOT_CALLABLE = 42


class StageSpy:
    """Stage function wrapper that records every call."""

    def __init__(self, fn):
        self.fn = fn
        self.calls: List[tuple] = []

    def __call__(self, element, context):
        self.calls.append((element, context))
        return self.fn(element, context)


class RecordingElementHandler:
    """Element handler that journals entry/exit and delegates to ``next``."""

    def __init__(self, next, label: str, journal: List[str]):
        self.next = next
        self.label = label
        self.journal = journal

    def translate_element(self, stage_name, stage_fn, element, context):
        self.journal.append(f"enter:{self.label}")
        try:
            return self.next.translate_element(stage_name, stage_fn, element, context)
        finally:
            self.journal.append(f"exit:{self.label}")


class CaptureLogger:
    def __init__(self):
        self.events: List[Dict[str, Any]] = []

    def bind(self, **kwargs):
        bound = CaptureLogger()
        bound.events = self.events
        bound.events.append({"event": "bind", "bound": kwargs})
        return bound

    def _record(self, level: str, event: str, **kwargs):
        self.events.append({"level": level, "event": event, "payload": kwargs})

    def debug(self, event: str, **kwargs):
        self._record("debug", event, **kwargs)

    def info(self, event: str, **kwargs):
        self._record("info", event, **kwargs)

    def warning(self, event: str, **kwargs):
        self._record("warning", event, **kwargs)

    def error(self, event: str, **kwargs):
        self._record("error", event, **kwargs)

    def named(self, event: str) -> List[Dict[str, Any]]:
        return [entry for entry in self.events if entry.get("event") == event]
