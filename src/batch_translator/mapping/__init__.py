"""Field mapping between two object representations."""

from .simple import MandatoryFieldMapper, OptionalFieldMapper, SimpleObjectMapper
from .types import Field, FieldMapper, MappingContext, ObjectMapper

__all__ = [
    "Field",
    "FieldMapper",
    "MandatoryFieldMapper",
    "MappingContext",
    "ObjectMapper",
    "OptionalFieldMapper",
    "SimpleObjectMapper",
]
