"""
Translator builder and assembly utilities.

This module provides the fluent ``TranslatorBuilder`` and ``build_translator``
for constructing translators from configuration, including dynamic stage
loading and element-chain composition.

Element chains are always composed in the same order, from outermost to
innermost::

    ErrorIsolationDecorator        (omitted by fail_fast() or when the
                                    isolate_element_errors setting is off)
      ErrorLoggingDecorator        (with_error_logging())
        ElementErrorMeteringDecorator  (with_error_metering())
          StageCaller

so failures are logged and counted before the isolation policy decides
whether to suppress them.
"""

import importlib
import logging
from typing import Any, Dict, List, Optional, Union

from batch_translator.config import get_settings
from batch_translator.metrics import CounterSink

from .config import StageConfig, TranslatorConfig
from .element import (
    ErrorIsolationDecorator,
    ErrorLoggingDecorator,
    IsolationPolicy,
    StageCaller,
)
from .exceptions import TranslatorAssemblyError
from .metering import ElementErrorMeteringDecorator, MeterNameTemplate
from .tracing import BatchLoggingDecorator, StageLoggingDecorator
from .translator import StagedBatchTranslator
from .types import ElementHandler, Stage, StageFunction

logger = logging.getLogger(__name__)


class TranslatorBuilder:
    """
    Fluent API builder for constructing staged batch translators.

    Example:
        >>> from batch_translator.metrics import InMemoryMetricRegistry
        >>> registry = InMemoryMetricRegistry()
        >>> translator = (
        ...     TranslatorBuilder("orders")
        ...     .add_stage("reciprocal", lambda e, ctx: [1 / e])
        ...     .with_error_metering(registry, "orders")
        ...     .build()
        ... )
        >>> translator.translate_batch([1, 0, 2])
        [1.0, 0.5]
        >>> registry.count("orders.reciprocal.error")
        1
    """

    def __init__(self, name: str = "translator"):
        self._name = name
        self._stages: List[Stage] = []
        self._isolate: Optional[bool] = None
        self._isolation_policy: Optional[IsolationPolicy] = None
        self._metrics: Optional[CounterSink] = None
        self._metrics_base_name: Optional[str] = None
        self._meter_name: Optional[MeterNameTemplate] = None
        self._log_errors = False
        self._log_level = "warning"
        self._trace = False

    def add_stage(self, name: str, fn: StageFunction) -> "TranslatorBuilder":
        """Append a stage; stages run in the order they are added."""
        if any(stage.name == name for stage in self._stages):
            raise TranslatorAssemblyError("Duplicate stage name", stage_name=name)
        self._stages.append(Stage(name, fn))
        return self

    def with_error_metering(
        self,
        metrics: CounterSink,
        metrics_base_name: Optional[str] = None,
        meter_name: Optional[MeterNameTemplate] = None,
    ) -> "TranslatorBuilder":
        """Count element failures per stage on ``metrics``."""
        self._metrics = metrics
        self._metrics_base_name = metrics_base_name
        self._meter_name = meter_name
        return self

    def with_error_logging(self, level: str = "warning") -> "TranslatorBuilder":
        """Log every element failure."""
        self._log_errors = True
        self._log_level = level
        return self

    def with_tracing(self) -> "TranslatorBuilder":
        """Log batch and stage start/completion events."""
        self._trace = True
        return self

    def with_isolation_policy(self, policy: IsolationPolicy) -> "TranslatorBuilder":
        """Restrict which element errors are suppressed."""
        self._isolation_policy = policy
        return self

    def best_effort(self) -> "TranslatorBuilder":
        """Drop elements whose stage raises, whatever the settings say."""
        self._isolate = True
        return self

    def fail_fast(self) -> "TranslatorBuilder":
        """Let any element error abort the whole batch."""
        self._isolate = False
        return self

    def build(self) -> StagedBatchTranslator:
        """
        Build the configured translator.

        Raises:
            TranslatorAssemblyError: If no stage was added
        """
        if not self._stages:
            raise TranslatorAssemblyError("Translator must have at least one stage")

        translator: StagedBatchTranslator = StagedBatchTranslator(self._stages)
        translator.around_element = self._build_element_chain()
        if self._trace:
            translator.decorate_stage(StageLoggingDecorator)
            translator.decorate_batch(
                lambda handler: BatchLoggingDecorator(handler, name=self._name)
            )

        logger.debug(
            f"Built translator '{self._name}' with {len(self._stages)} stages",
            extra={
                "translator": self._name,
                "stages": translator.stage_names,
                "isolate": isinstance(translator.around_element, ErrorIsolationDecorator),
                "metered": self._metrics is not None,
            },
        )
        return translator

    def _build_element_chain(self) -> ElementHandler:
        chain: ElementHandler = StageCaller()
        if self._metrics is not None:
            base_name = self._metrics_base_name
            if base_name is None:
                base_name = get_settings().metrics_base_name
            chain = ElementErrorMeteringDecorator(
                chain, self._metrics, base_name, meter_name=self._meter_name
            )
        if self._log_errors:
            chain = ErrorLoggingDecorator(chain, level=self._log_level)
        isolate = self._isolate
        if isolate is None:
            isolate = get_settings().isolate_element_errors
        if isolate:
            chain = ErrorIsolationDecorator(chain, policy=self._isolation_policy)
        return chain


def _import_stage_target(import_path: str) -> Any:
    """
    Import a stage function or factory from its dotted path.

    Supports module attributes ("pkg.module.func") and class attributes
    ("pkg.module.Class.factory").

    Raises:
        TranslatorAssemblyError: If nothing can be imported from the path
    """
    module_path, _, attr_name = import_path.rpartition(".")
    try:
        module = importlib.import_module(module_path)
    except ImportError:
        module = None

    if module is not None:
        if hasattr(module, attr_name):
            return getattr(module, attr_name)
        raise TranslatorAssemblyError(
            f"Module '{module_path}' has no attribute '{attr_name}'"
        )

    # Try as a class attribute (Class.factory)
    class_path, _, class_name = module_path.rpartition(".")
    if class_path:
        try:
            module = importlib.import_module(class_path)
        except ImportError as e:
            raise TranslatorAssemblyError(
                f"Failed to import '{import_path}': {e}"
            ) from e
        owner = getattr(module, class_name, None)
        if owner is not None and hasattr(owner, attr_name):
            return getattr(owner, attr_name)

    raise TranslatorAssemblyError(f"Could not import '{import_path}'")


def _create_stage(stage_config: StageConfig) -> Stage:
    """
    Create a stage from configuration.

    With options, the imported target is a factory called with them;
    otherwise the target is the stage function itself.
    """
    try:
        target = _import_stage_target(stage_config.import_path)
        stage_fn = target(**stage_config.options) if stage_config.options else target
    except TranslatorAssemblyError as e:
        raise TranslatorAssemblyError(str(e), stage_name=stage_config.name) from e
    except Exception as e:
        raise TranslatorAssemblyError(
            f"Failed to create stage: {e}", stage_name=stage_config.name
        ) from e

    if not callable(stage_fn):
        raise TranslatorAssemblyError(
            f"'{stage_config.import_path}' did not produce a callable stage function",
            stage_name=stage_config.name,
        )

    return Stage(stage_config.name, stage_fn)


def build_translator(
    config: Union[Dict[str, Any], TranslatorConfig],
    metrics: Optional[CounterSink] = None,
) -> StagedBatchTranslator:
    """
    Build a translator from configuration.

    Args:
        config: Translator configuration as dict or TranslatorConfig object
        metrics: Counter sink, required when ``meter_errors`` is enabled

    Returns:
        Assembled StagedBatchTranslator

    Raises:
        TranslatorAssemblyError: If configuration is invalid or assembly fails

    Example:
        >>> translator = build_translator({
        ...     "name": "cleanup",
        ...     "stages": [
        ...         {"name": "strip", "import_path": "my_pkg.stages.strip_text"},
        ...     ],
        ... })
    """
    if isinstance(config, dict):
        try:
            translator_config = TranslatorConfig.model_validate(config)
        except Exception as e:
            raise TranslatorAssemblyError(f"Invalid translator configuration: {e}") from e
    else:
        translator_config = config

    if translator_config.meter_errors and metrics is None:
        raise TranslatorAssemblyError(
            "meter_errors requires a metrics sink", config_path=translator_config.name
        )

    builder = TranslatorBuilder(translator_config.name)
    for stage_config in translator_config.stages:
        stage = _create_stage(stage_config)
        builder.add_stage(stage.name, stage.fn)

    if translator_config.meter_errors:
        builder.with_error_metering(metrics, translator_config.metrics_base_name)
    if translator_config.log_errors:
        builder.with_error_logging()
    if translator_config.trace:
        builder.with_tracing()
    if translator_config.isolate_element_errors is False:
        builder.fail_fast()
    elif translator_config.isolate_element_errors:
        builder.best_effort()

    translator = builder.build()

    logger.info(
        f"Translator '{translator_config.name}' built successfully",
        extra={
            "translator": translator_config.name,
            "stages": translator.stage_names,
        },
    )
    return translator


__all__ = ["TranslatorBuilder", "build_translator"]
