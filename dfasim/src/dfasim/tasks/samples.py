"""Reference automata for tests and sweeps."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from dfasim.core.model import AutomatonModel
from dfasim.core.rng import spawn_rngs


def make_div3_dfa(rng: np.random.Generator | None = None) -> AutomatonModel:
    """Binary numbers whose value is divisible by three (q0 = remainder 0)."""
    model = AutomatonModel(rng=rng)
    q0, q1, q2 = (model.add_state(x=100.0 + 150.0 * i, y=200.0) for i in range(3))

    model.toggle_final(q0)
    model.add_or_merge_transition(q0, q0, ["0"])
    model.add_or_merge_transition(q0, q1, ["1"])
    model.add_or_merge_transition(q1, q2, ["0"])
    model.add_or_merge_transition(q1, q0, ["1"])
    model.add_or_merge_transition(q2, q1, ["0"])
    model.add_or_merge_transition(q2, q2, ["1"])
    return model


def random_dfa(
    rng: np.random.Generator,
    n_states: int,
    alphabet: Sequence[str],
    p_final: float = 0.3,
    p_edge: float = 0.8,
) -> AutomatonModel:
    """Build a random, possibly partial DFA through the public model API.

    Each (state, symbol) pair gets an edge with probability p_edge, to a
    uniformly chosen target. Several symbols that land on the same target
    merge into one transition.
    """
    if n_states <= 0:
        raise ValueError("n_states must be > 0")
    if not alphabet:
        raise ValueError("alphabet must not be empty")
    if len(set(alphabet)) != len(alphabet):
        raise ValueError("alphabet symbols must be unique")
    for name, value in (("p_final", p_final), ("p_edge", p_edge)):
        if not (0.0 <= value <= 1.0):
            raise ValueError(f"{name} must be in [0, 1]")

    model_rng, shape_rng = spawn_rngs(rng, 2)
    model = AutomatonModel(rng=model_rng)
    states = [
        model.add_state(x=float(shape_rng.uniform(0, 2000)), y=float(shape_rng.uniform(0, 1000)))
        for _ in range(n_states)
    ]

    for state in states:
        if shape_rng.random() < p_final:
            model.toggle_final(state)

    for state in states:
        for symbol in alphabet:
            if shape_rng.random() >= p_edge:
                continue
            target = states[int(shape_rng.integers(n_states))]
            model.add_or_merge_transition(state, target, [symbol])

    return model
