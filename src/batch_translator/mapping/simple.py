"""
Simple object mapper and stock field mappers.

``SimpleObjectMapper`` applies field mappers one by one in the calling
thread: mandatory fields go to ``mandatory_field_mapper`` and optional fields
to ``optional_field_mapper``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from batch_translator.translation.exceptions import FieldMappingError
from batch_translator.utils.logging import get_logger

from .types import Field, FieldMapper, MappingContext

logger = get_logger(__name__)


class MandatoryFieldMapper:
    """
    Maps a field that must be present.

    Raises:
        FieldMappingError: If reading or writing fails or the value is ``None``
    """

    def map_field(self, field: Field, context: MappingContext) -> None:
        try:
            value = field.read(context)
        except Exception as e:
            raise FieldMappingError(
                f"Failed to read mandatory field: {e}", field.name
            ) from e

        if value is None:
            raise FieldMappingError("Mandatory field has no value", field.name)

        try:
            field.write(context, value)
        except Exception as e:
            raise FieldMappingError(
                f"Failed to write mandatory field: {e}", field.name
            ) from e


class OptionalFieldMapper:
    """
    Maps a field that may be absent.

    ``None`` values are not written. Failures are logged and the field is
    skipped.
    """

    def map_field(self, field: Field, context: MappingContext) -> None:
        try:
            value = field.read(context)
            if value is not None:
                field.write(context, value)
        except Exception as e:
            logger.warning(
                "mapping.optional_field.skipped",
                field=field.name,
                error_type=type(e).__name__,
                error=str(e),
            )


class SimpleObjectMapper:
    """
    Object mapper that applies field mappers one by one.

    Args:
        mandatory_field_mapper: Mapper for fields flagged ``True``
        optional_field_mapper: Mapper for fields flagged ``False``

    Example:
        >>> mapper = SimpleObjectMapper()
        >>> result = {}
        >>> mapper.map_all_fields(
        ...     {"id": 7, "note": None},
        ...     result,
        ...     {Field("id"): True, Field("note"): False},
        ... )
        >>> result
        {'id': 7}
    """

    def __init__(
        self,
        mandatory_field_mapper: Optional[FieldMapper] = None,
        optional_field_mapper: Optional[FieldMapper] = None,
    ) -> None:
        self.mandatory_field_mapper = mandatory_field_mapper or MandatoryFieldMapper()
        self.optional_field_mapper = optional_field_mapper or OptionalFieldMapper()

    def map_all_fields(
        self,
        source: Any,
        destination: Any,
        fields: Mapping[Field, bool],
        parameters: Any = None,
    ) -> None:
        if source is None:
            raise ValueError("source is required")
        if destination is None:
            raise ValueError("destination is required")
        if fields is None:
            raise ValueError("fields is required")

        context = MappingContext(
            original_object=source, result_object=destination, parameters=parameters
        )
        for field, mandatory in fields.items():
            mapper = (
                self.mandatory_field_mapper if mandatory else self.optional_field_mapper
            )
            mapper.map_field(field, context)
