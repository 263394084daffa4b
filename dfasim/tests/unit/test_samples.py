from __future__ import annotations

import pytest

from dfasim.core.engine import accepts
from dfasim.core.rng import make_rng
from dfasim.core.serialization import to_dict
from dfasim.tasks.samples import make_div3_dfa, random_dfa


def test_div3_dfa_structure() -> None:
    dfa = make_div3_dfa()

    assert [s.label for s in dfa.states] == ["q0", "q1", "q2"]
    assert dfa.start_state.label == "q0"
    assert [s.label for s in dfa.final_states] == ["q0"]
    assert len(dfa.transitions) == 6
    assert dfa.alphabet == frozenset({"0", "1"})
    for state in dfa.states:
        for symbol in ("0", "1"):
            assert dfa.lookup(state, symbol) is not None


@pytest.mark.parametrize("value", range(0, 40))
def test_div3_dfa_language(value) -> None:
    dfa = make_div3_dfa()

    assert accepts(dfa, format(value, "b")) == (value % 3 == 0)


def test_random_dfa_reproducible() -> None:
    a = random_dfa(make_rng(11), n_states=5, alphabet="abc")
    b = random_dfa(make_rng(11), n_states=5, alphabet="abc")

    assert to_dict(a) == to_dict(b)


def test_random_dfa_complete_when_p_edge_one() -> None:
    dfa = random_dfa(make_rng(3), n_states=4, alphabet="ab", p_edge=1.0)

    for state in dfa.states:
        for symbol in "ab":
            assert dfa.lookup(state, symbol) is not None


def test_random_dfa_final_probability_extremes() -> None:
    none_final = random_dfa(make_rng(4), n_states=6, alphabet="a", p_final=0.0)
    all_final = random_dfa(make_rng(4), n_states=6, alphabet="a", p_final=1.0)

    assert none_final.final_states == []
    assert len(all_final.final_states) == 6


def test_random_dfa_has_start_state() -> None:
    dfa = random_dfa(make_rng(8), n_states=3, alphabet="01")

    assert dfa.start_state is dfa.states[0]


@pytest.mark.parametrize(
    "kwargs, match",
    [
        ({"n_states": 0, "alphabet": "a"}, "n_states"),
        ({"n_states": 2, "alphabet": ""}, "alphabet"),
        ({"n_states": 2, "alphabet": "aa"}, "unique"),
        ({"n_states": 2, "alphabet": "a", "p_final": 1.5}, "p_final"),
        ({"n_states": 2, "alphabet": "a", "p_edge": -0.1}, "p_edge"),
    ],
)
def test_random_dfa_validation(kwargs, match) -> None:
    with pytest.raises(ValueError, match=match):
        random_dfa(make_rng(0), **kwargs)
