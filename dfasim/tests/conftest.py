"""
Pytest configuration and fixtures for dfasim tests.

Provides a deterministic RNG and the small reference automata used across
unit and integration tests.
"""

import pytest


@pytest.fixture
def deterministic_rng():
    """
    Create a deterministic RNG seeded with 12345.

    Makes transition ids reproducible across runs.
    """
    from dfasim.core.rng import make_rng
    return make_rng(12345)


@pytest.fixture
def model(deterministic_rng):
    """Empty DFA model with a seeded RNG."""
    from dfasim.core.model import AutomatonModel
    return AutomatonModel(rng=deterministic_rng)


@pytest.fixture
def single_a_model(model):
    """
    q0 (start) --a--> q1 (final).

    Accepts exactly the word "a".
    """
    q0 = model.add_state(100, 100)
    q1 = model.add_state(300, 100)
    model.toggle_final(q1)
    model.add_or_merge_transition(q0, q1, ["a"])
    return model


@pytest.fixture
def ab_loop_model(model):
    """
    q0 (start, final) with a self-loop on a and b.

    Accepts every word over {a, b}, including the empty word.
    """
    q0 = model.add_state(100, 100)
    model.toggle_final(q0)
    model.add_or_merge_transition(q0, q0, ["a", "b"])
    return model


@pytest.fixture
def ab_path_model(model):
    """q0 (start) --a--> q1 --b--> q2 (final)."""
    q0 = model.add_state()
    q1 = model.add_state()
    q2 = model.add_state()
    model.toggle_final(q2)
    model.add_or_merge_transition(q0, q1, ["a"])
    model.add_or_merge_transition(q1, q2, ["b"])
    return model
