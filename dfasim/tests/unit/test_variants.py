from __future__ import annotations

from typing import override

import pytest

from dfasim.core.engine import accepts, trace
from dfasim.core.errors import DeterminismViolationError, DuplicateSymbolError, InvalidSymbolError
from dfasim.core.model import AutomatonModel
from dfasim.core.types import State, SymbolSet, Transition
from dfasim.core.variants import AutomatonVariant, DFAVariant


class TokenDFAVariant(DFAVariant):
    """DFA over multi-character tokens instead of single characters."""

    name = "token-dfa"

    @override
    def check_symbols(self, symbols: SymbolSet) -> None:
        for symbol in symbols:
            if not symbol:
                raise InvalidSymbolError("empty token", symbol)


def test_abstract_variant_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError):
        AutomatonVariant()


def test_model_defaults_to_dfa_variant() -> None:
    model = AutomatonModel()

    assert isinstance(model.variant, DFAVariant)
    assert model.variant.name == "dfa"


def test_validate_new_transition_returns_requested(model) -> None:
    q0 = model.add_state()
    variant = model.variant

    result = variant.validate_transition(model, q0, q0, frozenset({"a", "b"}), None)

    assert result == frozenset({"a", "b"})
    assert model.transitions == []


def test_validate_merge_returns_only_new_symbols(model) -> None:
    q0, q1 = model.add_state(), model.add_state()
    existing = model.add_or_merge_transition(q0, q1, ["a"])

    result = model.variant.validate_transition(model, q0, q1, frozenset({"a", "b"}), existing)

    assert result == frozenset({"b"})


def test_validate_merge_nothing_new(model) -> None:
    q0, q1 = model.add_state(), model.add_state()
    existing = model.add_or_merge_transition(q0, q1, ["a"])

    with pytest.raises(DuplicateSymbolError):
        model.variant.validate_transition(model, q0, q1, frozenset({"a"}), existing)


def test_validate_replace_ignores_own_symbols(model) -> None:
    q0, q1 = model.add_state(), model.add_state()
    existing = model.add_or_merge_transition(q0, q1, ["a"])

    result = model.variant.validate_transition(
        model, q0, q1, frozenset({"a"}), existing, replace=True
    )

    assert result == frozenset({"a"})


def test_validate_reports_conflicting_state(model) -> None:
    q0, q1 = model.add_state(), model.add_state()
    model.add_or_merge_transition(q0, q0, ["z"])

    with pytest.raises(DeterminismViolationError) as info:
        model.variant.validate_transition(model, q0, q1, frozenset({"z"}), None)

    assert info.value.state_id == q0.id


def test_relaxed_variant_plugs_into_model() -> None:
    model = AutomatonModel(variant=TokenDFAVariant())
    q0 = model.add_state()
    q1 = model.add_state()
    model.toggle_final(q1)

    model.add_or_merge_transition(q0, q1, ["if", "while"])

    assert accepts(model, ["while"])
    assert not accepts(model, ["while", "if"])


def test_relaxed_variant_still_deterministic() -> None:
    model = AutomatonModel(variant=TokenDFAVariant())
    q0, q1 = model.add_state(), model.add_state()
    model.add_or_merge_transition(q0, q0, ["if"])

    with pytest.raises(DeterminismViolationError):
        model.add_or_merge_transition(q0, q1, ["if"])


def test_dfa_variant_accepts_without_start_state() -> None:
    model = AutomatonModel()
    q0 = model.add_state()
    model.toggle_final(q0)
    model.delete_state(q0)

    assert DFAVariant().accepts(model, "") is False


class CaseFoldingDFAVariant(DFAVariant):
    """DFA that reads upper-case input as its lower-case symbol."""

    name = "casefold-dfa"

    @override
    def next_transition(
        self, model: AutomatonModel, state: State, symbol: str
    ) -> Transition | None:
        return model.lookup(state, symbol.lower())


@pytest.mark.parametrize("symbol", [",", " ", "\t", "\n"])
def test_dfa_variant_rejects_reserved_symbols(model, symbol) -> None:
    q0 = model.add_state()

    with pytest.raises(InvalidSymbolError, match="reserved"):
        model.add_or_merge_transition(q0, q0, [symbol, "a"])

    assert model.transitions == []


def test_reserved_symbol_rejected_on_replace(model) -> None:
    q0 = model.add_state()
    edge = model.add_or_merge_transition(q0, q0, ["a"])

    with pytest.raises(InvalidSymbolError):
        model.replace_transition_symbols(edge, ["a", ","])

    assert edge.symbols == frozenset({"a"})


def test_trace_follows_variant_transition_hook() -> None:
    model = AutomatonModel(variant=CaseFoldingDFAVariant())
    q0, q1 = model.add_state(), model.add_state()
    model.toggle_final(q1)
    model.add_or_merge_transition(q0, q1, ["a"])

    result = trace(model, "A")

    assert accepts(model, "A")
    assert result.accepted
    assert [s.label for s in result.states()] == ["q0", "q1"]
