"""
Exception hierarchy for the staged batch translator.

Errors raised by stage functions themselves are never wrapped: they travel
through the decorator chain as the original exception object so that metering
and isolation decorators see exactly what the stage raised. The types below
cover failures that originate in the translator machinery.
"""

from typing import Optional


class TranslationError(Exception):
    """Base exception for all translator-related errors."""

    pass


class StageResultError(TranslationError, TypeError):
    """
    Raised when a stage function returns something that is not a sequence.

    Stage functions must return an iterable of output elements (or ``None``
    for "no output"). Strings, bytes and mappings are rejected because
    iterating them silently would explode one element into characters or keys.

    Args:
        stage_name: Name of the stage that produced the result
        result: The offending value
    """

    def __init__(self, stage_name: str, result: object):
        self.stage_name = stage_name
        self.result_type = type(result).__name__
        super().__init__(
            f"Stage must return a sequence of elements, got {self.result_type} "
            f"(stage='{stage_name}')"
        )


class TranslatorAssemblyError(TranslationError):
    """
    Raised when translator assembly or configuration fails.

    Args:
        message: Error description
        config_path: Path or name of the configuration that failed (optional)
        stage_name: Name of the stage that caused assembly failure (optional)
    """

    def __init__(
        self,
        message: str,
        config_path: Optional[str] = None,
        stage_name: Optional[str] = None,
    ):
        self.config_path = config_path
        self.stage_name = stage_name

        context_parts = []
        if config_path:
            context_parts.append(f"config='{config_path}'")
        if stage_name:
            context_parts.append(f"stage='{stage_name}'")

        if context_parts:
            full_message = f"{message} ({', '.join(context_parts)})"
        else:
            full_message = message

        super().__init__(full_message)


class FieldMappingError(TranslationError):
    """
    Raised when a mandatory field cannot be mapped.

    Args:
        message: Error description
        field_name: Name of the field being mapped (optional)
    """

    def __init__(self, message: str, field_name: Optional[str] = None):
        self.field_name = field_name
        if field_name:
            message = f"{message} (field='{field_name}')"
        super().__init__(message)
