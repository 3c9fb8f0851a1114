"""
Core data types and handler protocols for the staged batch translator.

A translator is assembled from three levels of handlers:

* ``BatchHandler``   - runs a whole batch through every stage
* ``StageHandler``   - runs one stage over every element of a batch
* ``ElementHandler`` - runs one stage function over a single element

Every decorator implements the protocol of the level it wraps and holds a
single ``next`` handler, so chains at each level are plain nested calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
    Union,
)

from typing_extensions import Protocol, runtime_checkable

O = TypeVar("O")
R = TypeVar("R")
C = TypeVar("C")

# A stage function takes one element plus the translation context and returns
# zero (filter), one (map) or many (expand) output elements. ``None`` is
# accepted as "no output".
StageFunction = Callable[[Any, Any], Optional[Iterable[Any]]]

StageSpec = Union["Stage", Tuple[str, StageFunction]]


@dataclass(frozen=True)
class Stage:
    """
    A named transformation step.

    Attributes:
        name: Unique stage identifier used in logs and metric names
        fn: Stage function ``(element, context) -> iterable of elements``
    """

    name: str
    fn: StageFunction

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("Stage name cannot be empty")
        if not callable(self.fn):
            raise TypeError(f"Stage '{self.name}' function must be callable")


def normalize_stages(
    stages: Union[Sequence[StageSpec], Mapping[str, StageFunction], None],
) -> Tuple[Stage, ...]:
    """
    Turn the accepted registration forms into an ordered tuple of ``Stage``.

    Accepts a sequence of ``Stage`` objects or ``(name, fn)`` pairs, or a
    mapping of name to function (iterated in insertion order).
    """
    if stages is None:
        return ()
    if isinstance(stages, Mapping):
        return tuple(Stage(name, fn) for name, fn in stages.items())

    normalized: List[Stage] = []
    for spec in stages:
        if isinstance(spec, Stage):
            normalized.append(spec)
        else:
            name, fn = spec
            normalized.append(Stage(name, fn))
    return tuple(normalized)


@runtime_checkable
class BatchHandler(Protocol):
    """Handles a whole ``translate_batch`` call."""

    def translate_batch(
        self, elements: Optional[Sequence[Any]], context: Any
    ) -> List[Any]:
        """Return the translated batch."""


@runtime_checkable
class StageHandler(Protocol):
    """Applies a single stage to every element of a batch."""

    def apply_stage(
        self,
        stage_name: str,
        stage_fn: StageFunction,
        elements: Sequence[Any],
        context: Any,
    ) -> List[Any]:
        """Return the stage output for the whole batch."""


@runtime_checkable
class ElementHandler(Protocol):
    """Applies a single stage function to a single element."""

    def translate_element(
        self,
        stage_name: str,
        stage_fn: StageFunction,
        element: Any,
        context: Any,
    ) -> Optional[List[Any]]:
        """Return the output elements produced for ``element``."""


@dataclass(frozen=True)
class ElementOutcome:
    """
    Result-or-error of running one element through an element handler.

    Exactly one of ``elements`` and ``error`` is meaningful: ``error`` is set
    when the handler raised, ``elements`` otherwise.
    """

    elements: Tuple[Any, ...] = ()
    error: Optional[BaseException] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def capture(
        cls,
        handler: ElementHandler,
        stage_name: str,
        stage_fn: StageFunction,
        element: Any,
        context: Any,
    ) -> "ElementOutcome":
        """
        Run ``handler`` and capture its result or the ``Exception`` it raised.

        Non-``Exception`` errors (``KeyboardInterrupt``, ``SystemExit``) are
        not captured.
        """
        try:
            produced = handler.translate_element(stage_name, stage_fn, element, context)
        except Exception as exc:
            return cls(error=exc)
        return cls(elements=tuple(produced or ()))
