import pytest

from table2json.allowed import (
    ConfigurationError,
    InvalidValueError,
    NoAllowedValuesError,
    accept_allowed_value,
    keep_allowed_values,
)


def test_keep_allowed_values_with_literals_keeps_order():
    assert keep_allowed_values([1, 2, 3], [1, 3]) == [1, 3]
    assert keep_allowed_values([3, 2, 1], [1, 3]) == [3, 1]


def test_keep_allowed_values_with_predicate():
    assert keep_allowed_values([1, 2, 3], lambda x: x % 2 == 0) == [2]


def test_keep_allowed_values_returns_empty_when_nothing_to_compare():
    assert keep_allowed_values([1, 2, 3], None) == []
    assert keep_allowed_values([1], []) == []
    assert keep_allowed_values([], []) == []
    assert keep_allowed_values([1, 2, 3], [0]) == []


def test_accept_allowed_value_single_values():
    assert accept_allowed_value(1, [1, 2, 3]) == 1
    assert accept_allowed_value("b", ["a", "b", "c"]) == "b"
    assert accept_allowed_value(None, [None, 1, 2]) is None
    assert accept_allowed_value(False, [True, False]) is False


def test_accept_allowed_value_keeps_booleans_apart_from_numbers():
    assert accept_allowed_value([None, False, 0], [0]) == [0]
    assert accept_allowed_value([None, False, 0], [True, False]) == [False]
    assert accept_allowed_value(0, [False]) is None
    with pytest.raises(InvalidValueError):
        accept_allowed_value(1, [True], True)


def test_accept_allowed_value_filters_lists():
    assert accept_allowed_value([1, 3], [1, 2, 3]) == [1, 3]
    assert accept_allowed_value(["b", "a"], ["a", "b", "c"]) == ["b", "a"]
    assert accept_allowed_value([4, 5], [1, 2, 3]) is None


def test_accept_allowed_value_with_predicate():
    assert accept_allowed_value(1, lambda x: x in (1, "b")) == 1
    assert accept_allowed_value(1, lambda x: False) is None


def test_accept_allowed_value_requires_allowed_values():
    with pytest.raises(NoAllowedValuesError, match="No allowed values specified"):
        accept_allowed_value(1, [], True)
    # fires even when rejection is silent
    with pytest.raises(NoAllowedValuesError):
        accept_allowed_value(1, None)
    with pytest.raises(NoAllowedValuesError):
        accept_allowed_value(1, "abc")


def test_accept_allowed_value_error_lists_allowed_values():
    with pytest.raises(InvalidValueError, match="Invalid value given, must be one of: 0") as excinfo:
        accept_allowed_value(1, [0], True)
    assert excinfo.value.allowed == [0]
    assert isinstance(excinfo.value, ConfigurationError)


def test_accept_allowed_value_error_with_predicate_has_no_list():
    with pytest.raises(InvalidValueError) as excinfo:
        accept_allowed_value(1, lambda x: False, True)
    assert str(excinfo.value) == "Invalid value given"
