"""
Staged, decoratable batch translation.

A translator applies an ordered list of named stages to a batch of elements.
Each stage function takes ``(element, context)`` and returns zero, one or
many output elements, so stages can filter, map and expand. Batch, stage and
element execution are separate handlers that can be replaced or decorated.

Example Usage:
    >>> from batch_translator.translation import TranslatorBuilder
    >>> from batch_translator.metrics import InMemoryMetricRegistry
    >>>
    >>> registry = InMemoryMetricRegistry()
    >>> translator = (
    ...     TranslatorBuilder("numbers")
    ...     .add_stage("double", lambda e, ctx: [e * 2])
    ...     .add_stage("keep_even", lambda e, ctx: [e] if e % 2 == 0 else [])
    ...     .with_error_metering(registry, "numbers")
    ...     .build()
    ... )
    >>> translator.translate_batch([1, 2, 3, 4])
    [2, 4, 6, 8]

Available Components:
    - StagedBatchTranslator: Core engine with replaceable handlers
    - TranslatorBuilder / build_translator: Programmatic and config assembly
    - StageCaller, ErrorIsolationDecorator, IsolationPolicy: element chain
    - ElementErrorMeteringDecorator, ErrorLoggingDecorator: element observers
    - BatchLoggingDecorator, StageLoggingDecorator: tracing
    - TranslatorConfig/StageConfig: Pydantic configuration models
    - translate_frame: DataFrame integration
"""

from .builder import TranslatorBuilder, build_translator
from .config import StageConfig, TranslatorConfig, load_translator_config
from .element import (
    ErrorIsolationDecorator,
    ErrorLoggingDecorator,
    IsolationPolicy,
    StageCaller,
)
from .exceptions import (
    FieldMappingError,
    StageResultError,
    TranslationError,
    TranslatorAssemblyError,
)
from .frames import translate_frame
from .metering import ElementErrorMeteringDecorator, default_meter_name
from .tracing import BatchLoggingDecorator, StageLoggingDecorator
from .translator import StagedBatchTranslator, StageProcessor, StagesCaller
from .types import (
    BatchHandler,
    ElementHandler,
    ElementOutcome,
    Stage,
    StageFunction,
    StageHandler,
)

__all__ = [
    # Core engine
    "StagedBatchTranslator",
    "StagesCaller",
    "StageProcessor",
    "Stage",
    "StageFunction",
    # Handler protocols
    "BatchHandler",
    "StageHandler",
    "ElementHandler",
    "ElementOutcome",
    # Element chain
    "StageCaller",
    "ErrorIsolationDecorator",
    "IsolationPolicy",
    "ErrorLoggingDecorator",
    "ElementErrorMeteringDecorator",
    "default_meter_name",
    # Tracing
    "BatchLoggingDecorator",
    "StageLoggingDecorator",
    # Assembly
    "TranslatorBuilder",
    "build_translator",
    "TranslatorConfig",
    "StageConfig",
    "load_translator_config",
    # DataFrame integration
    "translate_frame",
    # Exception hierarchy
    "TranslationError",
    "StageResultError",
    "TranslatorAssemblyError",
    "FieldMappingError",
]
