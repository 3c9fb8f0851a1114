"""
Element error metering.

``ElementErrorMeteringDecorator`` counts failures of the handler it wraps and
re-raises them. It never changes the outcome of a call, so where it sits in
the element chain decides what happens after the count:

* ``ErrorIsolationDecorator(ElementErrorMeteringDecorator(StageCaller()))``
  counts the failure, then the element is dropped (the default composition
  produced by ``TranslatorBuilder.with_error_metering``).
* ``ElementErrorMeteringDecorator(StageCaller())`` without isolation counts
  the failure and lets it abort the whole batch.
* ``ElementErrorMeteringDecorator(ErrorIsolationDecorator(...))`` never sees
  a failure, because isolation has already swallowed it.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from batch_translator.metrics import CounterSink

from .types import ElementHandler, StageFunction

MeterNameTemplate = Callable[[str], str]


def default_meter_name(metrics_base_name: str) -> MeterNameTemplate:
    """
    Build the default ``<base>.<stage_name>.error`` template.

    Examples:
        >>> default_meter_name("ingest")("parse")
        'ingest.parse.error'
        >>> default_meter_name("")("parse")
        'parse.error'
    """
    prefix = metrics_base_name.rstrip(".")

    def meter_name(stage_name: str) -> str:
        if prefix:
            return f"{prefix}.{stage_name}.error"
        return f"{stage_name}.error"

    return meter_name


class ElementErrorMeteringDecorator:
    """
    Counts element errors per stage and re-raises them unmodified.

    Args:
        next: Element handler to be decorated
        metrics: Counter sink receiving one increment per failing element
        metrics_base_name: Prefix for counter names
        meter_name: Optional ``stage_name -> counter name`` template, replacing
            the default ``<base>.<stage_name>.error``
    """

    def __init__(
        self,
        next: ElementHandler,
        metrics: CounterSink,
        metrics_base_name: str,
        meter_name: Optional[MeterNameTemplate] = None,
    ) -> None:
        self.next = next
        self.metrics = metrics
        self.metrics_base_name = metrics_base_name
        self.meter_name = meter_name or default_meter_name(metrics_base_name)

    def translate_element(
        self,
        stage_name: str,
        stage_fn: StageFunction,
        element: Any,
        context: Any,
    ) -> Optional[List[Any]]:
        try:
            return self.next.translate_element(stage_name, stage_fn, element, context)
        except Exception:
            self.metrics.increment_counter(self.meter_name(stage_name))
            raise


__all__ = ["ElementErrorMeteringDecorator", "MeterNameTemplate", "default_meter_name"]
