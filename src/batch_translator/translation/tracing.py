"""
Batch- and stage-level tracing decorators.

Both decorators emit structured events and re-raise failures unchanged, so
adding them never alters the result of a translation.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, List, Optional, Sequence

from batch_translator.utils.logging import get_logger

from .types import BatchHandler, StageFunction, StageHandler

logger = get_logger(__name__)


def _elapsed_ms(started: datetime) -> int:
    return int((datetime.now(timezone.utc) - started).total_seconds() * 1000)


class BatchLoggingDecorator:
    """
    Logs the start, completion and failure of every batch.

    Args:
        next: Batch handler to trace
        name: Translator name bound to every event
    """

    def __init__(self, next: BatchHandler, name: str = "translator") -> None:
        self.next = next
        self.name = name

    def translate_batch(
        self, elements: Optional[Sequence[Any]], context: Any
    ) -> List[Any]:
        log = logger.bind(translator=self.name)
        size = len(elements) if elements is not None else 0
        started = datetime.now(timezone.utc)
        log.info("translation.batch.started", elements=size)

        try:
            result = self.next.translate_batch(elements, context)
        except Exception as exc:
            log.error(
                "translation.batch.failed",
                elements=size,
                duration_ms=_elapsed_ms(started),
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise

        log.info(
            "translation.batch.completed",
            elements=size,
            results=len(result),
            duration_ms=_elapsed_ms(started),
        )
        return result


class StageLoggingDecorator:
    """Logs element counts and duration of every stage application."""

    def __init__(self, next: StageHandler) -> None:
        self.next = next

    def apply_stage(
        self,
        stage_name: str,
        stage_fn: StageFunction,
        elements: Sequence[Any],
        context: Any,
    ) -> List[Any]:
        started = datetime.now(timezone.utc)
        try:
            result = self.next.apply_stage(stage_name, stage_fn, elements, context)
        except Exception as exc:
            logger.error(
                "translation.stage.failed",
                stage=stage_name,
                elements_in=len(elements),
                duration_ms=_elapsed_ms(started),
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise

        logger.info(
            "translation.stage.completed",
            stage=stage_name,
            elements_in=len(elements),
            elements_out=len(result),
            duration_ms=_elapsed_ms(started),
        )
        return result


__all__ = ["BatchLoggingDecorator", "StageLoggingDecorator"]
