"""
Staged batch translator with decoratable batch, stage and element handlers.

With default settings every registered stage is applied one by one: the first
stage receives the input batch, each following stage receives the output of
the previous one, and the output of the last stage is the result.

Errors raised by a stage for a single element are suppressed by default and
the element is dropped from that stage's output ("best effort"). This and any
other per-batch, per-stage or per-element behaviour is changed by replacing or
decorating ``around_batch``, ``around_stage`` and ``around_element``.
"""

from __future__ import annotations

from collections.abc import Sequence as SequenceABC
from typing import (
    Any,
    Callable,
    Generic,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from .element import ErrorIsolationDecorator, StageCaller
from .types import (
    BatchHandler,
    C,
    ElementHandler,
    O,
    R,
    Stage,
    StageFunction,
    StageHandler,
    StageSpec,
    normalize_stages,
)


class StagesCaller:
    """
    Runs a batch through every stage of the translator in order.

    Each stage is applied through the translator's current ``around_stage``
    handler, looked up on every call.
    """

    def __init__(self, translator: "StagedBatchTranslator") -> None:
        self.translator = translator

    def translate_batch(
        self, elements: Optional[Sequence[Any]], context: Any
    ) -> List[Any]:
        result: List[Any] = list(elements) if elements is not None else []
        for stage in self.translator.stages:
            result = self.translator.around_stage.apply_stage(
                stage.name, stage.fn, result, context
            )
        return result


class StageProcessor:
    """
    Applies one stage to a batch by delegating every element to the
    translator's current ``around_element`` handler and flattening results.
    """

    def __init__(self, translator: "StagedBatchTranslator") -> None:
        self.translator = translator

    def apply_stage(
        self,
        stage_name: str,
        stage_fn: StageFunction,
        elements: Sequence[Any],
        context: Any,
    ) -> List[Any]:
        around_element = self.translator.around_element
        output: List[Any] = []
        for element in elements:
            produced = around_element.translate_element(
                stage_name, stage_fn, element, context
            )
            if produced:
                output.extend(produced)
        return output


class StagedBatchTranslator(Generic[O, R, C]):
    """
    Batch translator that can be finely tuned.

    O - type of source elements, R - type of result elements,
    C - type of translation context.

    Args:
        stages: Ordered stages as ``Stage`` objects, ``(name, fn)`` pairs or
            an insertion-ordered mapping of name to function

    Attributes:
        around_batch: Translates a whole batch. Defaults to ``StagesCaller``.
        around_stage: Applies one stage to a batch. Defaults to
            ``StageProcessor``.
        around_element: Applies one stage to one element. Defaults to
            ``ErrorIsolationDecorator(StageCaller())``.

    Example:
        >>> translator = StagedBatchTranslator([
        ...     ("double", lambda e, ctx: [e * 2]),
        ...     ("keep_even", lambda e, ctx: [e] if e % 2 == 0 else []),
        ... ])
        >>> translator.translate_batch([1, 2, 3, 4])
        [2, 4, 6, 8]
    """

    def __init__(
        self,
        stages: Union[Sequence[StageSpec], Mapping[str, StageFunction], None] = None,
    ) -> None:
        self.stages: Tuple[Stage, ...] = normalize_stages(stages)
        self.around_batch: BatchHandler = StagesCaller(self)
        self.around_stage: StageHandler = StageProcessor(self)
        self.around_element: ElementHandler = ErrorIsolationDecorator(StageCaller())

    @property
    def stage_names(self) -> List[str]:
        return [stage.name for stage in self.stages]

    def translate_batch(
        self, elements: Optional[Iterable[O]] = None, context: Optional[C] = None
    ) -> List[R]:
        """
        Translate a batch of elements.

        Args:
            elements: Input batch; ``None`` is treated as an empty batch
            context: Opaque value passed unchanged to every stage call

        Returns:
            Output of the last stage (a new list)

        Raises:
            Exception: Whatever escapes the handler chain. With the default
                element chain, stage errors never escape.
        """
        if elements is not None and not isinstance(elements, SequenceABC):
            elements = list(elements)
        return self.around_batch.translate_batch(elements, context)

    def decorate_batch(
        self, factory: Callable[[BatchHandler], BatchHandler]
    ) -> "StagedBatchTranslator[O, R, C]":
        """Wrap the current batch handler with ``factory(current)``."""
        self.around_batch = factory(self.around_batch)
        return self

    def decorate_stage(
        self, factory: Callable[[StageHandler], StageHandler]
    ) -> "StagedBatchTranslator[O, R, C]":
        """Wrap the current stage handler with ``factory(current)``."""
        self.around_stage = factory(self.around_stage)
        return self

    def decorate_element(
        self, factory: Callable[[ElementHandler], ElementHandler]
    ) -> "StagedBatchTranslator[O, R, C]":
        """Wrap the current element handler with ``factory(current)``."""
        self.around_element = factory(self.around_element)
        return self

    def __repr__(self) -> str:
        return f"StagedBatchTranslator(stages={self.stage_names!r})"


__all__ = ["StageProcessor", "StagedBatchTranslator", "StagesCaller"]
