"""
AutomatonModel: the mutable owner of states, transitions and the start state.

Validation is delegated to the model's AutomatonVariant; mutations apply only
after it passes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

import numpy as np

from dfasim.core.errors import InvalidLabelError, UnknownStateError, UnknownTransitionError
from dfasim.core.rng import generate_token, make_rng
from dfasim.core.types import State, SymbolSet, Transition, normalize_symbols
from dfasim.core.variants import AutomatonVariant, DFAVariant

logger = logging.getLogger(__name__)

StateRef = State | int
TransitionRef = Transition | str


class AutomatonModel:
    """States, transitions and the start state of one automaton.

    All mutations validate first and apply second: a raised error leaves the
    model exactly as it was. State and transition arguments may be given as
    objects or as ids.
    """

    def __init__(
        self,
        variant: AutomatonVariant | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.variant: AutomatonVariant = variant if variant is not None else DFAVariant()
        self.rng = rng if rng is not None else make_rng()

        self.states_by_id: dict[int, State] = {}
        self.transitions_by_id: dict[str, Transition] = {}
        self.start_state: State | None = None
        self.state_counter = 0

    def __len__(self) -> int:
        return len(self.states_by_id)

    def __repr__(self) -> str:
        start = self.start_state.label if self.start_state is not None else None
        return (
            f"AutomatonModel(variant={self.variant.name!r}, states={len(self.states_by_id)}, "
            f"transitions={len(self.transitions_by_id)}, start={start!r})"
        )

    @property
    def states(self) -> list[State]:
        return list(self.states_by_id.values())

    @property
    def transitions(self) -> list[Transition]:
        return list(self.transitions_by_id.values())

    @property
    def final_states(self) -> list[State]:
        return [state for state in self.states_by_id.values() if state.is_final]

    @property
    def alphabet(self) -> SymbolSet:
        symbols: set[str] = set()
        for transition in self.transitions_by_id.values():
            symbols |= transition.symbols
        return frozenset(symbols)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get_state(self, ref: StateRef) -> State:
        state_id = ref.id if isinstance(ref, State) else ref
        state = self.states_by_id.get(state_id)
        if state is None or (isinstance(ref, State) and state is not ref):
            raise UnknownStateError(state_id)
        return state

    def has_state(self, ref: StateRef) -> bool:
        try:
            self.get_state(ref)
        except UnknownStateError:
            return False
        return True

    def get_transition(self, ref: TransitionRef) -> Transition | None:
        transition_id = ref.id if isinstance(ref, Transition) else ref
        transition = self.transitions_by_id.get(transition_id)
        if transition is None or (isinstance(ref, Transition) and transition is not ref):
            return None
        return transition

    def outgoing(self, ref: StateRef) -> Iterator[Transition]:
        state = self.get_state(ref)
        return (t for t in self.transitions_by_id.values() if t.source is state)

    def incident(self, ref: StateRef) -> list[Transition]:
        state = self.get_state(ref)
        return [
            t
            for t in self.transitions_by_id.values()
            if t.source is state or t.target is state
        ]

    def find_transition(self, source: StateRef, target: StateRef) -> Transition | None:
        target_state = self.get_state(target)
        for transition in self.outgoing(source):
            if transition.target is target_state:
                return transition
        return None

    def lookup(self, ref: StateRef, symbol: str) -> Transition | None:
        """Return the transition leaving `ref` on `symbol`, or None."""
        for transition in self.outgoing(ref):
            if symbol in transition.symbols:
                return transition
        return None

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------

    def add_state(self, x: float = 0.0, y: float = 0.0) -> State:
        state_id = self.state_counter
        self.state_counter += 1

        state = State(id=state_id, label=f"q{state_id}", x=x, y=y)
        self.states_by_id[state_id] = state

        if len(self.states_by_id) == 1:
            self.start_state = state

        logger.debug("added state %s", state.label)
        return state

    def delete_state(self, ref: StateRef) -> None:
        if not self.has_state(ref):
            return
        state = self.get_state(ref)

        doomed = [t.id for t in self.incident(state)]
        for transition_id in doomed:
            del self.transitions_by_id[transition_id]
        del self.states_by_id[state.id]

        if self.start_state is state:
            self.start_state = None

        logger.debug("deleted state %s and %d incident transitions", state.label, len(doomed))

    def rename_state(self, ref: StateRef, label: str) -> State:
        state = self.get_state(ref)
        new_label = label.strip() if isinstance(label, str) else ""
        if not new_label:
            raise InvalidLabelError("state label must not be empty")
        state.label = new_label
        return state

    def set_start_state(self, ref: StateRef) -> State:
        state = self.get_state(ref)
        self.start_state = state
        logger.debug("start state is now %s", state.label)
        return state

    def toggle_final(self, ref: StateRef) -> bool:
        state = self.get_state(ref)
        state.is_final = not state.is_final
        return state.is_final

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def add_or_merge_transition(
        self,
        source: StateRef,
        target: StateRef,
        symbols: str | Iterable[str],
    ) -> Transition:
        """Create source -> target on `symbols`, or merge them into the existing edge.

        Raises InvalidSymbolError, DuplicateSymbolError or
        DeterminismViolationError without touching the model.
        """
        return self._add_or_merge(source, target, symbols)

    def _add_or_merge(
        self,
        source: StateRef,
        target: StateRef,
        symbols: str | Iterable[str],
        transition_id: str | None = None,
        presentation: dict | None = None,
    ) -> Transition:
        source_state = self.get_state(source)
        target_state = self.get_state(target)
        requested = normalize_symbols(symbols)

        existing = self.find_transition(source_state, target_state)
        accepted = self.variant.validate_transition(
            self, source_state, target_state, requested, existing
        )

        if existing is not None:
            existing.symbols = existing.symbols | accepted
            logger.debug("merged %s into %r", sorted(accepted), existing)
            return existing

        if not transition_id or transition_id in self.transitions_by_id:
            transition_id = self._fresh_transition_id()
        transition = Transition(
            id=transition_id,
            source=source_state,
            target=target_state,
            symbols=accepted,
            presentation=dict(presentation or {}),
        )
        self.transitions_by_id[transition.id] = transition
        logger.debug("created %r", transition)
        return transition

    def replace_transition_symbols(
        self,
        ref: TransitionRef,
        symbols: str | Iterable[str],
    ) -> Transition:
        transition = self.get_transition(ref)
        if transition is None:
            raise UnknownTransitionError(ref.id if isinstance(ref, Transition) else ref)
        requested = normalize_symbols(symbols)

        accepted = self.variant.validate_transition(
            self, transition.source, transition.target, requested, transition, replace=True
        )
        transition.symbols = accepted
        return transition

    def delete_transition(self, ref: TransitionRef) -> None:
        transition = self.get_transition(ref)
        if transition is None:
            return
        del self.transitions_by_id[transition.id]
        logger.debug("deleted %r", transition)

    def clear(self) -> None:
        self.states_by_id.clear()
        self.transitions_by_id.clear()
        self.start_state = None
        self.state_counter = 0

    def _fresh_transition_id(self) -> str:
        while True:
            token = generate_token(self.rng)
            if token not in self.transitions_by_id:
                return token

    # ------------------------------------------------------------------
    # Restoring from a payload
    # ------------------------------------------------------------------

    def restore_state(
        self,
        state_id: int,
        label: str,
        is_final: bool = False,
        x: float = 0.0,
        y: float = 0.0,
    ) -> State:
        """Re-create a state with a known id (used when loading a saved automaton)."""
        if state_id in self.states_by_id:
            raise ValueError(f"duplicate state id: {state_id}")
        state = State(id=state_id, label=label, is_final=is_final, x=x, y=y)
        self.states_by_id[state_id] = state
        self.state_counter = max(self.state_counter, state_id + 1)
        return state

    def restore_transition(
        self,
        transition_id: str,
        source: StateRef,
        target: StateRef,
        symbols: str | Iterable[str],
        presentation: dict | None = None,
    ) -> Transition:
        """Re-create a transition with a known id, validated like any other add.

        A second payload transition for the same ordered pair merges into the
        first one. A missing or already-taken id is replaced by a fresh one.
        """
        return self._add_or_merge(
            source, target, symbols, transition_id=transition_id, presentation=presentation
        )
