"""
Core types for dfasim: State, Transition, Step, and symbol-set helpers.

Plain data containers. States and transitions compare by identity; the
model keys them by id.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from dfasim.core.errors import InvalidSymbolError

SymbolSet = frozenset[str]

SYMBOL_SEPARATOR = ","


def parse_symbols(raw: str) -> SymbolSet:
    """Parse the comma-joined wire form ("a, b") into a symbol set.

    Items are whitespace-trimmed and empty items dropped.
    """
    if not isinstance(raw, str):
        raise InvalidSymbolError(f"symbol list must be a string, got {type(raw).__name__}", raw)
    parts = (part.strip() for part in raw.split(SYMBOL_SEPARATOR))
    return frozenset(part for part in parts if part)


def format_symbols(symbols: Iterable[str]) -> str:
    """Join a symbol set into its wire form, sorted for stable output."""
    return ", ".join(sorted(symbols))


def normalize_symbols(symbols: str | Iterable[str]) -> SymbolSet:
    """Coerce caller input into a non-empty symbol set.

    A plain string is treated as the comma-joined wire form; any other
    iterable is taken item by item. Symbol length is not checked here, that
    is the variant's job.
    """
    if isinstance(symbols, str):
        result = parse_symbols(symbols)
    else:
        items = list(symbols)
        for item in items:
            if not isinstance(item, str):
                raise InvalidSymbolError(
                    f"symbols must be strings, got {type(item).__name__}", item
                )
        result = frozenset(items)

    if not result:
        raise InvalidSymbolError("Please enter at least one transition symbol!")
    return result


@dataclass(eq=False)
class State:
    """A state of the automaton.

    x and y belong to the presentation layer; they are stored only so that
    they survive serialization.
    """

    id: int
    label: str
    is_final: bool = False
    x: float = 0.0
    y: float = 0.0

    def __repr__(self) -> str:
        marker = "*" if self.is_final else ""
        return f"State({self.id}, {self.label!r}{marker})"


@dataclass(eq=False)
class Transition:
    """A labeled edge between two states.

    `symbols` is a frozenset; merges replace it rather than mutate it.
    `presentation` holds opaque UI fields (offset, label position, loop angle).
    """

    id: str
    source: State
    target: State
    symbols: SymbolSet
    presentation: dict[str, Any] = field(default_factory=dict)

    @property
    def is_self_loop(self) -> bool:
        return self.source is self.target

    @property
    def symbol_text(self) -> str:
        return format_symbols(self.symbols)

    def __repr__(self) -> str:
        return (
            f"Transition({self.id!r}, {self.source.label} --{self.symbol_text}--> "
            f"{self.target.label})"
        )


@dataclass(frozen=True)
class Step:
    """One snapshot of a trace.

    Step 0 is the start state before any input is read. `rejected` marks a
    terminal step where no transition matched; `final` marks the step on
    which the whole input has been consumed and carries `accepted`.
    """

    index: int
    state: State
    symbol: str | None
    transition: Transition | None
    remaining: str
    message: str
    rejected: bool = False
    final: bool = False
    accepted: bool | None = None

    @property
    def terminal(self) -> bool:
        return self.rejected or self.final
