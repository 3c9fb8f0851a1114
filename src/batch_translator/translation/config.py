"""
Configuration models for assembling translators.

This module defines Pydantic models for translator configuration, supporting
both programmatic construction and YAML-based configuration files.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import TranslatorAssemblyError

_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9_.-]+$")
_IMPORT_PATH_PATTERN = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_.]*[a-zA-Z0-9_]$")


class StageConfig(BaseModel):
    """
    Configuration for a single translation stage.

    Args:
        name: Unique identifier for this stage within the translator; used
            verbatim in metric names
        import_path: Dotted path to the stage function, or to a factory
            that returns one (e.g. "my_pkg.stages.make_filter")
        options: Keyword arguments passed to the factory. When empty, the
            imported object is used as the stage function directly.
    """

    name: str = Field(..., description="Unique stage name")
    import_path: str = Field(..., description="Dotted path to stage function")
    options: Dict[str, Any] = Field(
        default_factory=dict, description="Stage factory options"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate stage name is suitable for logging and metric names."""
        if not v or not v.strip():
            raise ValueError("Stage name cannot be empty")

        if not _NAME_PATTERN.match(v.strip()):
            raise ValueError(
                "Stage name must contain only alphanumeric characters, "
                "underscores, dots and hyphens"
            )

        return v.strip()

    @field_validator("import_path")
    @classmethod
    def validate_import_path(cls, v: str) -> str:
        """Validate import path format."""
        if not v or not v.strip():
            raise ValueError("Import path cannot be empty")

        if not _IMPORT_PATH_PATTERN.match(v.strip()) or "." not in v:
            raise ValueError("Import path must be a valid Python module attribute path")

        return v.strip()


class TranslatorConfig(BaseModel):
    """
    Configuration for a complete staged batch translator.

    Args:
        name: Human-readable translator identifier
        stages: Stage configurations in execution order
        isolate_element_errors: Drop elements whose stage raises instead of
            aborting the batch (defaults to the ``isolate_element_errors``
            setting)
        meter_errors: Count element errors per stage (needs a metrics sink)
        metrics_base_name: Prefix for error counters (defaults to the
            ``metrics_base_name`` setting)
        log_errors: Log every element failure before the isolation policy
            applies
        trace: Log batch and stage start/completion events
    """

    name: str = Field(..., description="Translator name")
    stages: List[StageConfig] = Field(
        ..., description="Translation stages in execution order"
    )
    isolate_element_errors: Optional[bool] = Field(
        default=None, description="Suppress per-element errors (best effort)"
    )
    meter_errors: bool = Field(
        default=False, description="Count element errors per stage"
    )
    metrics_base_name: Optional[str] = Field(
        default=None, description="Prefix for error counter names"
    )
    log_errors: bool = Field(default=False, description="Log element failures")
    trace: bool = Field(default=False, description="Log batch and stage events")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate translator name is provided."""
        if not v or not v.strip():
            raise ValueError("Translator name cannot be empty")
        return v.strip()

    @field_validator("stages")
    @classmethod
    def validate_stages(cls, v: List[StageConfig]) -> List[StageConfig]:
        """Validate stage configuration list."""
        if not v:
            raise ValueError("Translator must have at least one stage")

        stage_names = [stage.name for stage in v]
        if len(stage_names) != len(set(stage_names)):
            duplicates = sorted(
                {name for name in stage_names if stage_names.count(name) > 1}
            )
            raise ValueError(f"Duplicate stage names found: {duplicates}")

        return v


def load_translator_config(path: Union[str, Path]) -> TranslatorConfig:
    """
    Load and validate a translator configuration from a YAML file.

    Raises:
        TranslatorAssemblyError: If the file is missing, unparsable or invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise TranslatorAssemblyError(
            "Translator configuration file not found", config_path=str(config_path)
        )

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            raw = yaml.safe_load(handle)
    except yaml.YAMLError as e:
        raise TranslatorAssemblyError(
            f"Invalid YAML: {e}", config_path=str(config_path)
        ) from e

    if not isinstance(raw, dict):
        raise TranslatorAssemblyError(
            "Translator configuration must be a mapping", config_path=str(config_path)
        )

    try:
        return TranslatorConfig.model_validate(raw)
    except ValidationError as e:
        raise TranslatorAssemblyError(
            f"Invalid translator configuration: {e}", config_path=str(config_path)
        ) from e
