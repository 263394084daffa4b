"""
Acceptance and step-by-step traces over an AutomatonModel.

- accepts: Decide a word, rejecting when there is no start state
- iter_trace / trace: The same walk, materialized one Step at a time
- TraceCursor: Forward/backward navigation over a finished Trace
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from dfasim.core.errors import NoStartStateError
from dfasim.core.model import AutomatonModel
from dfasim.core.types import State, Step, Transition


@dataclass
class Trace:
    word: str
    steps: list[Step]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __getitem__(self, index: int) -> Step:
        return self.steps[index]

    @property
    def last(self) -> Step:
        return self.steps[-1]

    @property
    def accepted(self) -> bool:
        return bool(self.last.final and self.last.accepted)

    def states(self) -> list[State]:
        return [step.state for step in self.steps]

    def transitions(self) -> list[Transition]:
        return [step.transition for step in self.steps if step.transition is not None]


@dataclass
class TraceCursor:
    """Forward/backward navigation over a trace, one step at a time."""

    trace: Trace
    position: int = 0

    def __post_init__(self):
        if not self.trace.steps:
            raise ValueError("trace must contain at least one step")
        if not (0 <= self.position < len(self.trace.steps)):
            raise ValueError("position out of range")

    @property
    def current(self) -> Step:
        return self.trace.steps[self.position]

    @property
    def at_start(self) -> bool:
        return self.position == 0

    @property
    def at_end(self) -> bool:
        return self.position == len(self.trace.steps) - 1

    def forward(self) -> Step:
        if not self.at_end:
            self.position += 1
        return self.current

    def back(self) -> Step:
        if not self.at_start:
            self.position -= 1
        return self.current

    def reset(self) -> Step:
        self.position = 0
        return self.current


def accepts(model: AutomatonModel, word: Sequence[str]) -> bool:
    """Decide `word` with the model's variant. No start state means reject."""
    return model.variant.accepts(model, word)


def _verdict(state: State) -> str:
    if state.is_final:
        return f"String consumed. {state.label} is a final state. ACCEPTED."
    return f"String consumed. {state.label} is not a final state. REJECTED."


def _walk(model: AutomatonModel, start: State, symbols: tuple[str, ...]) -> Iterator[Step]:
    current = start
    n = len(symbols)

    if n == 0:
        yield Step(
            index=0,
            state=current,
            symbol=None,
            transition=None,
            remaining="",
            message=f"Starting at state {current.label}. {_verdict(current)}",
            final=True,
            accepted=current.is_final,
        )
        return

    yield Step(
        index=0,
        state=current,
        symbol=None,
        transition=None,
        remaining="".join(symbols),
        message=f"Starting at state {current.label}",
    )

    for i, symbol in enumerate(symbols):
        transition = model.variant.next_transition(model, current, symbol)

        if transition is None:
            yield Step(
                index=i + 1,
                state=current,
                symbol=symbol,
                transition=None,
                remaining="".join(symbols[i:]),
                message=f"No transition for '{symbol}' from {current.label}. REJECTED.",
                rejected=True,
                accepted=False,
            )
            return

        message = f"Read '{symbol}', transition from {current.label} to {transition.target.label}"
        current = transition.target
        is_last = i == n - 1

        yield Step(
            index=i + 1,
            state=current,
            symbol=symbol,
            transition=transition,
            remaining="".join(symbols[i + 1 :]),
            message=f"{message}. {_verdict(current)}" if is_last else message,
            final=is_last,
            accepted=current.is_final if is_last else None,
        )


def iter_trace(model: AutomatonModel, word: Sequence[str]) -> Iterator[Step]:
    """Lazily yield the steps of deciding `word`.

    The start-state check happens on the call itself, not on first iteration.
    The returned iterator is single-use; call again for a fresh trace.
    """
    start = model.start_state
    if start is None:
        raise NoStartStateError()
    return _walk(model, start, tuple(word))


def trace(model: AutomatonModel, word: Sequence[str]) -> Trace:
    steps = list(iter_trace(model, word))
    return Trace(word="".join(word), steps=steps)
