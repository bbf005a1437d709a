"""Tests for condition evaluations and evaluation sets."""
import pytest

from models.conditions import AvailabilityCondition, StringCondition
from models.data import Availability, NumericData, StringData
from models.enums import AvailabilityOperator, AvailabilityType, Mode
from models.evals import (
    AvailabilityConditionEval, StringConditionEval, ThresholdConditionEval,
    build_eval, check_eval_sets, eval_set, eval_sets,
)
from models.exceptions import ValidationError


def _avail_condition():
    return AvailabilityCondition(trigger_id="av-trigger-jboss", data_id="av-jboss-data",
                                 operator=AvailabilityOperator.NOT_UP)


def test_threshold_eval(threshold_condition):
    ev = build_eval(threshold_condition, NumericData("rt-jboss-data", 100, 1001.0))
    assert isinstance(ev, ThresholdConditionEval)
    assert ev.match is True
    assert ev.value == 1001.0
    assert ev.data_timestamp == 100
    assert ev.condition_id == threshold_condition.condition_id


def test_availability_eval():
    ev = build_eval(_avail_condition(), Availability("av-jboss-data", 1, AvailabilityType.DOWN))
    assert isinstance(ev, AvailabilityConditionEval)
    assert ev.match is True
    assert ev.display_value() == "DOWN"


def test_string_eval(string_condition):
    ev = build_eval(string_condition, StringData("app-log", 1, "OK"))
    assert isinstance(ev, StringConditionEval)
    assert ev.match is False


def test_threshold_with_availability_data_is_rejected(threshold_condition):
    with pytest.raises(ValidationError):
        build_eval(threshold_condition, Availability("rt-jboss-data", 1, AvailabilityType.DOWN))


def test_availability_with_numeric_data_is_rejected():
    with pytest.raises(ValidationError):
        build_eval(_avail_condition(), NumericData("av-jboss-data", 1, 1.0))


def test_string_with_numeric_data_is_rejected(string_condition):
    with pytest.raises(ValidationError):
        build_eval(string_condition, NumericData("app-log", 1, 1.0))


def test_missing_pieces_are_rejected(threshold_condition):
    with pytest.raises(ValidationError):
        build_eval(threshold_condition, None)
    with pytest.raises(ValidationError):
        build_eval(None, NumericData("rt-jboss-data", 1, 1.0))


def test_data_for_another_stream_is_rejected(threshold_condition):
    with pytest.raises(ValidationError):
        build_eval(threshold_condition, NumericData("other-data", 1, 1001.0))


def test_eval_set_unique_by_condition_and_data(threshold_condition):
    data = NumericData("rt-jboss-data", 1, 1001.0)
    s = eval_set([(threshold_condition, data), (threshold_condition, data)])
    assert len(s) == 1


def test_eval_set_empty_is_rejected():
    with pytest.raises(ValidationError):
        eval_set([])


def test_mixed_eval_sets_hold_two_evaluations(threshold_condition):
    sets = eval_sets(
        [threshold_condition, _avail_condition()],
        [NumericData("rt-jboss-data", 1, 1003.0), Availability("av-jboss-data", 1, AvailabilityType.DOWN)],
    )
    assert len(sets) == 1
    assert len(sets[0]) == 2
    assert isinstance(sets[0], frozenset)


def test_mixed_pairing_mismatch_is_rejected(threshold_condition):
    with pytest.raises(ValidationError):
        eval_sets(
            [threshold_condition, _avail_condition()],
            [Availability("av-jboss-data", 1, AvailabilityType.DOWN), NumericData("rt-jboss-data", 1, 1003.0)],
        )


def test_eval_sets_length_mismatch(threshold_condition):
    with pytest.raises(ValidationError):
        eval_sets([threshold_condition, _avail_condition()], [NumericData("rt-jboss-data", 1, 1.0)])


def test_single_condition_shortcut(threshold_condition):
    sets = eval_sets(threshold_condition, NumericData("rt-jboss-data", 1, 1001.0))
    assert len(sets) == 1 and len(sets[0]) == 1


def test_check_eval_sets(threshold_condition):
    good = eval_sets(threshold_condition, NumericData("rt-jboss-data", 1, 1001.0))
    assert check_eval_sets(good) == good
    with pytest.raises(ValidationError):
        check_eval_sets([])
    with pytest.raises(ValidationError):
        check_eval_sets([set()])
    with pytest.raises(ValidationError):
        check_eval_sets(None)
    with pytest.raises(ValidationError):
        check_eval_sets([{"not-an-eval"}])


def test_eval_to_dict(threshold_condition):
    ev = build_eval(threshold_condition, NumericData("rt-jboss-data", 7, 1001.0), eval_timestamp=9)
    d = ev.to_dict()
    assert d["type"] == "THRESHOLD"
    assert d["data"]["value"] == 1001.0
    assert d["evalTimestamp"] == 9
    assert d["match"] is True


def test_string_condition_mode_is_kept():
    cond = StringCondition(trigger_id="t", trigger_mode=Mode.AUTORESOLVE, data_id="d")
    ev = build_eval(cond, StringData("d", 1, ""))
    assert ev.condition.trigger_mode == Mode.AUTORESOLVE
