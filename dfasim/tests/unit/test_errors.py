import pytest

from dfasim.core.errors import (
    AutomatonError,
    DeterminismViolationError,
    DuplicateSymbolError,
    InvalidLabelError,
    InvalidSymbolError,
    NoStartStateError,
    PayloadError,
    UnknownStateError,
    UnknownTransitionError,
    ValidationError,
)


@pytest.mark.parametrize(
    "error_type",
    [
        InvalidSymbolError,
        DeterminismViolationError,
        DuplicateSymbolError,
        UnknownStateError,
        UnknownTransitionError,
        InvalidLabelError,
        PayloadError,
    ],
)
def test_validation_errors_are_value_errors(error_type) -> None:
    assert issubclass(error_type, ValidationError)
    assert issubclass(error_type, ValueError)
    assert issubclass(error_type, AutomatonError)


def test_no_start_state_is_not_a_validation_error() -> None:
    assert issubclass(NoStartStateError, AutomatonError)
    assert not issubclass(NoStartStateError, ValueError)
    assert str(NoStartStateError()) == "No start state defined!"


def test_determinism_violation_carries_context() -> None:
    err = DeterminismViolationError("q0", "a", state_id=0)

    assert err.state_label == "q0"
    assert err.state_id == 0
    assert err.symbol == "a"
    assert str(err) == "DFA rule violation: State 'q0' already has a transition for symbol 'a'!"


def test_duplicate_symbol_message() -> None:
    err = DuplicateSymbolError(frozenset({"a"}))

    assert err.symbols == frozenset({"a"})
    assert "already exist" in str(err)


def test_unknown_state_carries_id() -> None:
    err = UnknownStateError(42)

    assert err.state_id == 42
    assert "42" in str(err)


def test_invalid_symbol_carries_symbol() -> None:
    err = InvalidSymbolError("bad", "ab")

    assert err.symbol == "ab"
