"""
pandas integration for staged batch translators.

Rows of a DataFrame are translated as dict records, so stage functions work
on ``Dict[str, Any]`` elements and may filter, map or expand rows like any
other batch.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd

from .translator import StagedBatchTranslator

Record = Dict[str, Any]


def translate_frame(
    translator: StagedBatchTranslator,
    frame: pd.DataFrame,
    context: Optional[Any] = None,
) -> pd.DataFrame:
    """
    Translate every row of ``frame`` and return a new DataFrame.

    The input frame is never mutated. When every row is filtered out, the
    result is an empty frame with the input's columns.

    Example:
        >>> translator = StagedBatchTranslator([
        ...     ("positive", lambda row, ctx: [row] if row["value"] > 0 else []),
        ... ])
        >>> translate_frame(translator, pd.DataFrame([{"value": -1}, {"value": 2}]))
           value
        0      2
    """
    records: List[Record] = frame.to_dict("records")
    translated = translator.translate_batch(records, context)
    if not translated:
        return pd.DataFrame(columns=list(frame.columns))
    return pd.DataFrame.from_records(translated)


__all__ = ["Record", "translate_frame"]
