"""Tests for standard record-level stage factories."""

import pytest

from batch_translator.translation import StagedBatchTranslator, build_translator
from batch_translator.translation import standard_stages as standard_stages_module
from batch_translator.translation.standard_stages import (
    drop_fields,
    rename_fields,
    replace_values,
    require_fields,
    split_field,
)

STAGES = "batch_translator.translation.standard_stages"


class TestRenameFields:
    @pytest.mark.unit
    def test_renames_and_keeps_other_fields(self):
        stage = rename_fields({"old": "new"})
        record = {"old": 1, "other": 2}

        assert stage(record, None) == [{"new": 1, "other": 2}]
        assert record == {"old": 1, "other": 2}

    @pytest.mark.unit
    def test_validates_mapping(self):
        with pytest.raises(TypeError):
            rename_fields(["old"])
        with pytest.raises(ValueError):
            rename_fields({})


class TestReplaceValues:
    @pytest.mark.unit
    def test_replaces_only_mapped_values(self):
        stage = replace_values({"status": {"draft": "pending"}})

        assert stage({"status": "draft"}, None) == [{"status": "pending"}]
        assert stage({"status": "done"}, None) == [{"status": "done"}]
        assert stage({"other": "draft"}, None) == [{"other": "draft"}]

    @pytest.mark.unit
    def test_validates_mapping(self):
        with pytest.raises(TypeError):
            replace_values("status")
        with pytest.raises(ValueError):
            replace_values({})


class TestDropFields:
    @pytest.mark.unit
    def test_drops_listed_fields(self):
        stage = drop_fields(["secret", "absent"])

        assert stage({"id": 1, "secret": "x"}, None) == [{"id": 1}]

    @pytest.mark.unit
    def test_rejects_plain_string(self):
        with pytest.raises(ValueError):
            drop_fields("secret")


class TestRequireFields:
    @pytest.mark.unit
    def test_filters_records_with_missing_values(self):
        stage = require_fields(["id", "amount"])

        assert stage({"id": 1, "amount": 0}, None) == [{"id": 1, "amount": 0}]
        assert stage({"id": 1, "amount": None}, None) == []
        assert stage({"id": 1}, None) == []

    @pytest.mark.unit
    def test_filtered_records_are_logged(self, monkeypatch, capture_logger):
        monkeypatch.setattr(standard_stages_module, "logger", capture_logger)
        stage = require_fields(["id", "amount"])

        assert stage({"id": 1}, None) == []

        events = capture_logger.named("record_filtered")
        assert len(events) == 1
        assert events[0]["level"] == "debug"
        assert events[0]["payload"]["missing"] == ["amount"]

    @pytest.mark.unit
    def test_rejects_empty_list(self):
        with pytest.raises(ValueError):
            require_fields([])


class TestSplitField:
    @pytest.mark.unit
    def test_expands_one_record_per_value(self):
        stage = split_field("tags", separator=";", target="tag")

        assert stage({"id": 1, "tags": "a; ;b"}, None) == [
            {"id": 1, "tags": "a; ;b", "tag": "a"},
            {"id": 1, "tags": "a; ;b", "tag": "b"},
        ]

    @pytest.mark.unit
    def test_non_string_values_pass_through(self):
        stage = split_field("tags")

        assert stage({"id": 1}, None) == [{"id": 1}]
        assert stage({"id": 1, "tags": ["a"]}, None) == [{"id": 1, "tags": ["a"]}]

    @pytest.mark.unit
    def test_validates_arguments(self):
        with pytest.raises(ValueError):
            split_field("")
        with pytest.raises(ValueError):
            split_field("tags", separator="")


@pytest.mark.unit
def test_standard_stages_compose_in_a_translator():
    translator = StagedBatchTranslator(
        [
            ("require", require_fields(["id"])),
            ("split", split_field("tags")),
            ("rename", rename_fields({"tags": "tag"})),
            ("drop", drop_fields(["internal"])),
        ]
    )

    result = translator.translate_batch(
        [
            {"id": 1, "tags": "x,y", "internal": True},
            {"id": None, "tags": "z"},
        ]
    )

    assert result == [{"id": 1, "tag": "x"}, {"id": 1, "tag": "y"}]


@pytest.mark.unit
def test_standard_stages_are_configurable():
    translator = build_translator(
        {
            "name": "records",
            "stages": [
                {
                    "name": "status",
                    "import_path": f"{STAGES}.replace_values",
                    "options": {"field_mapping": {"status": {"draft": "pending"}}},
                },
                {
                    "name": "require",
                    "import_path": f"{STAGES}.require_fields",
                    "options": {"fields": ["status"]},
                },
            ],
        }
    )

    assert translator.translate_batch([{"status": "draft"}, {"status": None}]) == [
        {"status": "pending"}
    ]
