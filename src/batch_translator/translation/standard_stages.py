"""
Standard record-level stage factories.

Each factory validates its options and returns a stage function working on
``dict`` records. Stage functions never mutate their input record; they
return new records. They can be referenced from translator configuration::

    stages:
      - name: rename
        import_path: batch_translator.translation.standard_stages.rename_fields
        options:
          field_mapping: {plan_code: plan, customer: customer_name}

Factories:
- rename_fields: rename keys (map)
- replace_values: replace values per field (map)
- drop_fields: remove keys (map)
- require_fields: keep records whose fields are all present (filter)
- split_field: one record per separated value (expand)
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from batch_translator.utils.logging import get_logger

from .types import StageFunction

logger = get_logger(__name__)

Record = Dict[str, Any]


def rename_fields(field_mapping: Dict[str, str]) -> StageFunction:
    """
    Rename record keys based on configuration.

    Example:
        >>> stage = rename_fields({"plan_code": "plan"})
        >>> stage({"plan_code": "P1", "amount": 3}, None)
        [{'plan': 'P1', 'amount': 3}]

    Raises:
        TypeError: If field_mapping is not a dictionary
        ValueError: If field_mapping is empty
    """
    if not isinstance(field_mapping, dict):
        raise TypeError(
            f"field_mapping must be a dict, got {type(field_mapping).__name__}"
        )
    if not field_mapping:
        raise ValueError("field_mapping cannot be empty")

    def stage(record: Record, context: Any) -> List[Record]:
        return [{field_mapping.get(key, key): value for key, value in record.items()}]

    return stage


def replace_values(field_mapping: Dict[str, Dict[Any, Any]]) -> StageFunction:
    """
    Replace values per field, e.g. ``{"status": {"draft": "pending"}}``.

    Fields missing from a record are left alone.
    """
    if not isinstance(field_mapping, dict):
        raise TypeError("field_mapping must be a dict of field->mapping")
    if not field_mapping:
        raise ValueError("field_mapping cannot be empty")

    def stage(record: Record, context: Any) -> List[Record]:
        replaced = dict(record)
        for field, mapping in field_mapping.items():
            if field in replaced and replaced[field] in mapping:
                replaced[field] = mapping[replaced[field]]
        return [replaced]

    return stage


def drop_fields(fields: Sequence[str]) -> StageFunction:
    """Remove the listed keys from every record."""
    if isinstance(fields, str) or not fields:
        raise ValueError("fields must be a non-empty list of field names")
    to_drop = frozenset(fields)

    def stage(record: Record, context: Any) -> List[Record]:
        return [{key: value for key, value in record.items() if key not in to_drop}]

    return stage


def require_fields(fields: Sequence[str]) -> StageFunction:
    """Keep only records where every listed field is present and not ``None``."""
    if isinstance(fields, str) or not fields:
        raise ValueError("fields must be a non-empty list of field names")
    required = tuple(fields)

    def stage(record: Record, context: Any) -> List[Record]:
        missing = [field for field in required if record.get(field) is None]
        if missing:
            logger.debug("record_filtered", missing=missing)
            return []
        return [record]

    return stage


def split_field(
    field: str, separator: str = ",", target: Optional[str] = None
) -> StageFunction:
    """
    Expand a record into one record per separated value of ``field``.

    Values are stripped and empty parts are skipped. The split value is written
    to ``target`` (defaults to ``field``). Records without the field, or with a
    non-string value, pass through unchanged.

    Example:
        >>> stage = split_field("tags")
        >>> stage({"id": 1, "tags": "a, b"}, None)
        [{'id': 1, 'tags': 'a'}, {'id': 1, 'tags': 'b'}]
    """
    if not field:
        raise ValueError("field cannot be empty")
    if not separator:
        raise ValueError("separator cannot be empty")
    target_field = target or field

    def stage(record: Record, context: Any) -> List[Record]:
        value = record.get(field)
        if not isinstance(value, str):
            return [record]
        parts = [part.strip() for part in value.split(separator)]
        return [{**record, target_field: part} for part in parts if part]

    return stage


__all__ = [
    "drop_fields",
    "rename_fields",
    "replace_values",
    "require_fields",
    "split_field",
]
