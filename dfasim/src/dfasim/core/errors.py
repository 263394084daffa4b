"""
Error types raised by the automaton core.

Every validation failure is raised before any mutation happens, so a caller
catching one of these can rely on the model being unchanged.
"""

from __future__ import annotations

from typing import Any


class AutomatonError(Exception):
    """Base class for all dfasim errors."""


class ValidationError(AutomatonError, ValueError):
    """A mutation or payload was rejected by validation."""


class InvalidSymbolError(ValidationError):
    """A transition symbol is not a single character (or none was given)."""

    def __init__(self, message: str, symbol: Any = None):
        super().__init__(message)
        self.symbol = symbol


class DeterminismViolationError(ValidationError):
    """A state would get two outgoing transitions for the same symbol."""

    def __init__(self, state_label: str, symbol: str, state_id: int | None = None):
        super().__init__(
            f"DFA rule violation: State '{state_label}' already has a transition "
            f"for symbol '{symbol}'!"
        )
        self.state_label = state_label
        self.state_id = state_id
        self.symbol = symbol


class DuplicateSymbolError(ValidationError):
    """A merge into an existing transition would add no new symbol."""

    def __init__(self, symbols: frozenset[str]):
        super().__init__("All symbols already exist for this transition!")
        self.symbols = symbols


class UnknownStateError(ValidationError):
    """An operation referenced a state that is not part of the model."""

    def __init__(self, state_id: Any):
        super().__init__(f"unknown state: {state_id!r}")
        self.state_id = state_id


class UnknownTransitionError(ValidationError):
    """An edit referenced a transition that is not part of the model."""

    def __init__(self, transition_id: Any):
        super().__init__(f"unknown transition: {transition_id!r}")
        self.transition_id = transition_id


class InvalidLabelError(ValidationError):
    """A state label is empty after stripping whitespace."""


class PayloadError(ValidationError):
    """A serialized automaton has the wrong shape or is too large."""


class NoStartStateError(AutomatonError):
    """A trace or bulk test was requested on an automaton without a start state."""

    def __init__(self, message: str = "No start state defined!"):
        super().__init__(message)
