"""Tests for DataFrame translation (AC: rows flow through stages as records)."""

import pandas as pd
import pytest

from batch_translator.translation import StagedBatchTranslator, translate_frame
from batch_translator.translation.standard_stages import rename_fields, split_field


@pytest.fixture
def sample_dataframe() -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"plan_code": "P1", "amount": 10, "tags": "a,b"},
            {"plan_code": "P2", "amount": -5, "tags": "c"},
        ]
    )


@pytest.mark.unit
def test_translate_frame_filters_maps_and_expands(sample_dataframe):
    translator = StagedBatchTranslator(
        [
            ("positive", lambda row, ctx: [row] if row["amount"] > 0 else []),
            ("rename", rename_fields({"plan_code": "plan"})),
            ("split", split_field("tags")),
        ]
    )

    result = translate_frame(translator, sample_dataframe)

    assert list(result.columns) == ["plan", "amount", "tags"]
    assert result.to_dict("records") == [
        {"plan": "P1", "amount": 10, "tags": "a"},
        {"plan": "P1", "amount": 10, "tags": "b"},
    ]


@pytest.mark.unit
def test_translate_frame_does_not_mutate_input(sample_dataframe):
    original = sample_dataframe.copy(deep=True)
    translator = StagedBatchTranslator(
        [("scale", lambda row, ctx: [{**row, "amount": row["amount"] * ctx}])]
    )

    result = translate_frame(translator, sample_dataframe, context=3)

    pd.testing.assert_frame_equal(sample_dataframe, original)
    assert result["amount"].tolist() == [30, -15]


@pytest.mark.unit
def test_fully_filtered_frame_keeps_columns(sample_dataframe):
    translator = StagedBatchTranslator([("drop_all", lambda row, ctx: [])])

    result = translate_frame(translator, sample_dataframe)

    assert result.empty
    assert list(result.columns) == ["plan_code", "amount", "tags"]


@pytest.mark.unit
def test_failing_rows_are_dropped_by_default(sample_dataframe):
    def strict(row, context):
        if row["amount"] < 0:
            raise ValueError("negative amount")
        return [row]

    result = translate_frame(StagedBatchTranslator([("strict", strict)]), sample_dataframe)

    assert result["plan_code"].tolist() == ["P1"]
