"""Tests for element error metering and its composition with isolation."""

import pytest

from batch_translator.translation import (
    ElementErrorMeteringDecorator,
    ErrorIsolationDecorator,
    StageCaller,
    StagedBatchTranslator,
    default_meter_name,
)

from .helpers import double, reciprocal


@pytest.mark.unit
def test_default_meter_name_template():
    assert default_meter_name("orders")("parse") == "orders.parse.error"
    assert default_meter_name("orders.")("parse") == "orders.parse.error"
    assert default_meter_name("")("parse") == "parse.error"


@pytest.mark.unit
def test_failure_is_counted_and_reraised_unmodified(registry):
    error = ValueError("broken")

    def failing(element, context):
        raise error

    decorator = ElementErrorMeteringDecorator(StageCaller(), registry, "orders")

    with pytest.raises(ValueError) as exc_info:
        decorator.translate_element("parse", failing, 1, None)

    assert exc_info.value is error
    assert registry.snapshot() == {"orders.parse.error": 1}


@pytest.mark.unit
def test_interrupts_are_not_counted(registry):
    def interrupted(element, context):
        raise KeyboardInterrupt

    decorator = ElementErrorMeteringDecorator(StageCaller(), registry, "orders")

    with pytest.raises(KeyboardInterrupt):
        decorator.translate_element("parse", interrupted, 1, None)

    assert registry.snapshot() == {}


@pytest.mark.unit
def test_success_is_not_counted_and_result_untouched(registry):
    decorator = ElementErrorMeteringDecorator(StageCaller(), registry, "orders")

    assert decorator.translate_element("double", double, 2, None) == [4]
    assert registry.snapshot() == {}


@pytest.mark.unit
def test_custom_meter_name(registry):
    decorator = ElementErrorMeteringDecorator(
        StageCaller(), registry, "ignored", meter_name=lambda stage: f"errors[{stage}]"
    )

    with pytest.raises(ZeroDivisionError):
        decorator.translate_element("reciprocal", reciprocal, 0, None)

    assert registry.count("errors[reciprocal]") == 1


@pytest.mark.unit
def test_metering_inside_isolation_counts_then_suppresses(registry):
    translator = StagedBatchTranslator([("reciprocal", reciprocal)])
    translator.around_element = ErrorIsolationDecorator(
        ElementErrorMeteringDecorator(StageCaller(), registry, "numbers")
    )

    assert translator.translate_batch([0, 1, 0, 2]) == [1, 0.5]
    assert registry.count("numbers.reciprocal.error") == 2


@pytest.mark.unit
def test_metering_without_isolation_counts_then_aborts(registry):
    translator = StagedBatchTranslator([("reciprocal", reciprocal)])
    translator.around_element = ElementErrorMeteringDecorator(
        StageCaller(), registry, "numbers"
    )

    with pytest.raises(ZeroDivisionError):
        translator.translate_batch([1, 0, 2])

    assert registry.count("numbers.reciprocal.error") == 1


@pytest.mark.unit
def test_metering_outside_isolation_sees_no_failures(registry):
    translator = StagedBatchTranslator([("reciprocal", reciprocal)])
    translator.around_element = ElementErrorMeteringDecorator(
        ErrorIsolationDecorator(StageCaller()), registry, "numbers"
    )

    assert translator.translate_batch([1, 0]) == [1]
    assert registry.snapshot() == {}


@pytest.mark.unit
def test_one_increment_per_failing_element_per_stage(registry):
    def fail_on_odd(element, context):
        if element % 2:
            raise ValueError(element)
        return [element + 1]

    translator = StagedBatchTranslator([("first", fail_on_odd), ("second", fail_on_odd)])
    translator.around_element = ErrorIsolationDecorator(
        ElementErrorMeteringDecorator(StageCaller(), registry, "pipe")
    )

    # first: 1 and 3 fail; 2 -> 3, 4 -> 5. second: both 3 and 5 fail.
    assert translator.translate_batch([1, 2, 3, 4]) == []
    assert registry.snapshot() == {"pipe.first.error": 2, "pipe.second.error": 2}


@pytest.mark.unit
def test_metering_decorator_accepts_any_counter_sink():
    class ListSink:
        def __init__(self):
            self.names = []

        def increment_counter(self, name):
            self.names.append(name)

    sink = ListSink()
    decorator = ElementErrorMeteringDecorator(StageCaller(), sink, "base")

    with pytest.raises(ZeroDivisionError):
        decorator.translate_element("reciprocal", reciprocal, 0, None)

    assert sink.names == ["base.reciprocal.error"]

