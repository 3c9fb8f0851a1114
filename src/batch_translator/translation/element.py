"""
Element-level handlers: the stage caller and its error policy decorators.

The default element chain of a translator is
``ErrorIsolationDecorator(StageCaller())``: every stage function call goes
through the isolation decorator, which drops the element when the stage
raises a recoverable error ("best effort" translation).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, List, Optional, Tuple, Type

from batch_translator.utils.logging import get_logger

from .exceptions import StageResultError
from .types import ElementHandler, ElementOutcome, StageFunction

logger = get_logger(__name__)

_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class StageCaller:
    """Calls the stage function on one element and normalizes its result."""

    def translate_element(
        self,
        stage_name: str,
        stage_fn: StageFunction,
        element: Any,
        context: Any,
    ) -> List[Any]:
        result = stage_fn(element, context)
        if result is None:
            return []
        if isinstance(result, (str, bytes, Mapping)) or not isinstance(
            result, Iterable
        ):
            raise StageResultError(stage_name, result)
        return list(result)


class IsolationPolicy:
    """
    Decides which element failures are suppressed by ``ErrorIsolationDecorator``.

    Args:
        recoverable: Exception types that are suppressed. Defaults to
            ``(Exception,)``; ``BaseException`` subclasses outside
            ``Exception`` are never recoverable.
    """

    def __init__(
        self, recoverable: Tuple[Type[BaseException], ...] = (Exception,)
    ) -> None:
        self.recoverable = tuple(recoverable)

    def is_recoverable(self, error: BaseException) -> bool:
        if not isinstance(error, Exception):
            return False
        return isinstance(error, self.recoverable)

    def __repr__(self) -> str:
        names = ", ".join(exc.__name__ for exc in self.recoverable)
        return f"IsolationPolicy(recoverable=({names}))"


class ErrorIsolationDecorator:
    """
    Suppresses recoverable element errors and yields no output instead.

    The failed element is dropped from the stage output and the rest of the
    batch continues. Nothing is counted or reported above debug level; put an
    ``ElementErrorMeteringDecorator`` or ``ErrorLoggingDecorator`` inside this
    one to observe suppressed failures.

    Args:
        next: Element handler to protect
        policy: Which errors to suppress (defaults to every ``Exception``)
    """

    def __init__(
        self, next: ElementHandler, policy: Optional[IsolationPolicy] = None
    ) -> None:
        self.next = next
        self.policy = policy or IsolationPolicy()

    def translate_element(
        self,
        stage_name: str,
        stage_fn: StageFunction,
        element: Any,
        context: Any,
    ) -> List[Any]:
        outcome = ElementOutcome.capture(
            self.next, stage_name, stage_fn, element, context
        )
        if not outcome.failed:
            return list(outcome.elements)

        if not self.policy.is_recoverable(outcome.error):
            raise outcome.error

        logger.debug(
            "translation.element.suppressed",
            stage=stage_name,
            error_type=type(outcome.error).__name__,
            error=str(outcome.error),
        )
        return []


class ErrorLoggingDecorator:
    """
    Logs element failures and re-raises them unchanged.

    Args:
        next: Element handler to observe
        level: Log method used for the failure event ("warning" by default)

    Raises:
        ValueError: If ``level`` is not a known log level
    """

    def __init__(self, next: ElementHandler, level: str = "warning") -> None:
        level = level.lower()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"Unknown log level '{level}', expected one of {list(_LOG_LEVELS)}"
            )
        self.next = next
        self.level = level

    def translate_element(
        self,
        stage_name: str,
        stage_fn: StageFunction,
        element: Any,
        context: Any,
    ) -> Optional[List[Any]]:
        try:
            return self.next.translate_element(stage_name, stage_fn, element, context)
        except Exception as exc:
            getattr(logger, self.level)(
                "translation.element.failed",
                stage=stage_name,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise


__all__ = [
    "ErrorIsolationDecorator",
    "ErrorLoggingDecorator",
    "IsolationPolicy",
    "StageCaller",
]
