"""
Automaton variants: the pluggable rules for what a transition may carry and
how an input word is decided.

The model owns states and transitions; a variant only validates and
evaluates. DFAVariant is the one concrete variant shipped.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING, override

from dfasim.core.errors import (
    DeterminismViolationError,
    DuplicateSymbolError,
    InvalidSymbolError,
)
from dfasim.core.types import SYMBOL_SEPARATOR, State, SymbolSet, Transition

if TYPE_CHECKING:
    from dfasim.core.model import AutomatonModel


class AutomatonVariant(ABC):
    name: str = "abstract"

    @abstractmethod
    def validate_transition(
        self,
        model: AutomatonModel,
        source: State,
        target: State,
        symbols: SymbolSet,
        existing: Transition | None,
        replace: bool = False,
    ) -> SymbolSet:
        """Check a requested transition change and return the symbols to apply.

        `existing` is the transition already joining source to target, if any.
        With replace=False the returned set is what gets merged into it (or
        the symbol set of a new transition); with replace=True it becomes the
        transition's whole symbol set. Must raise instead of returning when
        any part of the request is invalid.
        """
        raise NotImplementedError

    @abstractmethod
    def next_transition(
        self, model: AutomatonModel, state: State, symbol: str
    ) -> Transition | None:
        """The transition taken from `state` on `symbol`, or None to reject.

        Both `accepts` and the step trace walk through this, so they agree.
        """
        raise NotImplementedError

    @abstractmethod
    def accepts(self, model: AutomatonModel, word: Sequence[str]) -> bool:
        raise NotImplementedError


class DFAVariant(AutomatonVariant):
    """Deterministic automaton: single-character symbols, one edge per (state, symbol)."""

    name = "dfa"

    def check_symbols(self, symbols: SymbolSet) -> None:
        for symbol in sorted(symbols):
            if len(symbol) != 1:
                raise InvalidSymbolError(
                    f"Each symbol must be exactly one character! Got {symbol!r}", symbol
                )
            # The wire form is comma-joined and trimmed, so these cannot round-trip.
            if symbol == SYMBOL_SEPARATOR or symbol.isspace():
                raise InvalidSymbolError(
                    f"Symbol {symbol!r} is reserved and cannot be used on a transition!", symbol
                )

    @override
    def validate_transition(
        self,
        model: AutomatonModel,
        source: State,
        target: State,
        symbols: SymbolSet,
        existing: Transition | None,
        replace: bool = False,
    ) -> SymbolSet:
        self.check_symbols(symbols)

        if existing is None or replace:
            to_check = symbols
        else:
            to_check = symbols - existing.symbols
            if not to_check:
                raise DuplicateSymbolError(symbols)

        for symbol in sorted(to_check):
            clash = model.lookup(source, symbol)
            if clash is not None and clash is not existing:
                raise DeterminismViolationError(source.label, symbol, state_id=source.id)

        return frozenset(to_check)

    @override
    def next_transition(
        self, model: AutomatonModel, state: State, symbol: str
    ) -> Transition | None:
        return model.lookup(state, symbol)

    @override
    def accepts(self, model: AutomatonModel, word: Sequence[str]) -> bool:
        current = model.start_state
        if current is None:
            return False

        for symbol in word:
            transition = self.next_transition(model, current, symbol)
            if transition is None:
                return False
            current = transition.target

        return current.is_final
