"""
Contracts for single-pass field mapping between two object representations.

A ``Field`` knows how to read one value from the original object and write
it to the result object. Field mappers decide what happens when that fails;
object mappers drive the fields of one object.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from typing_extensions import Protocol, runtime_checkable

OO = TypeVar("OO")
RO = TypeVar("RO")
P = TypeVar("P")


def read_value(source: Any, name: str) -> Any:
    """Read ``name`` from a mapping key or attribute; ``None`` when absent."""
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def write_value(target: Any, name: str, value: Any) -> None:
    """Write ``value`` to a mapping key or attribute called ``name``."""
    if isinstance(target, MutableMapping):
        target[name] = value
    else:
        setattr(target, name, value)


@dataclass
class MappingContext(Generic[OO, RO, P]):
    """
    Objects shared by every field mapped in one ``map_all_fields`` call.

    Attributes:
        original_object: Object values are read from
        result_object: Object values are written to
        parameters: Optional caller-supplied parameters
    """

    original_object: OO
    result_object: RO
    parameters: Optional[P] = None


@dataclass(frozen=True)
class Field:
    """
    One mapped field.

    Args:
        name: Field name, used for the default read/write and in errors
        extract: ``(original_object, parameters) -> value``; defaults to
            reading ``name`` from the original object
        assign: ``(result_object, value) -> None``; defaults to writing
            ``name`` on the result object
    """

    name: str
    extract: Optional[Callable[[Any, Any], Any]] = None
    assign: Optional[Callable[[Any, Any], None]] = None

    def read(self, context: MappingContext) -> Any:
        if self.extract is None:
            return read_value(context.original_object, self.name)
        return self.extract(context.original_object, context.parameters)

    def write(self, context: MappingContext, value: Any) -> None:
        if self.assign is None:
            write_value(context.result_object, self.name, value)
        else:
            self.assign(context.result_object, value)


@runtime_checkable
class FieldMapper(Protocol):
    """Maps a single field within a mapping context."""

    def map_field(self, field: Field, context: MappingContext) -> None:
        """Copy/transform ``field`` from the original to the result object."""


@runtime_checkable
class ObjectMapper(Protocol):
    """Maps a set of fields from one object to another."""

    def map_all_fields(
        self,
        source: Any,
        destination: Any,
        fields: Mapping[Field, bool],
        parameters: Any = None,
    ) -> None:
        """Map every field; the flag marks the field as mandatory."""
