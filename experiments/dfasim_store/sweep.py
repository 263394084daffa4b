"""
Consistency sweep over random automata.

Each run builds a seeded random DFA and checks that accepts and trace agree,
that it stays deterministic and that it survives a JSON round trip.
"""

import itertools
import logging
from datetime import datetime
from typing import Any, Callable

from dfasim import __version__
from dfasim.core.engine import accepts, trace
from dfasim.core.rng import get_entropy, make_rng, random_word, spawn_rngs
from dfasim.core.serialization import from_json, to_json
from dfasim.tasks.samples import random_dfa

from .artifacts import Artifact

logger = logging.getLogger(__name__)

DEFAULT_ALPHABET = "ab"


def is_deterministic(model) -> bool:
    """True if no state has two outgoing transitions sharing a symbol."""
    seen: set[tuple[int, str]] = set()
    for transition in model.transitions:
        for symbol in transition.symbols:
            key = (transition.source.id, symbol)
            if key in seen:
                return False
            seen.add(key)
    return True


def run_consistency(params: dict[str, Any], seed: int) -> dict[str, Any]:
    """Check one random automaton: accepts vs trace, determinism, JSON round-trip.

    params: n_states, alphabet (str), n_words, max_length, p_final, p_edge.
    """
    alphabet = list(params.get("alphabet", DEFAULT_ALPHABET))
    n_words = int(params.get("n_words", 50))
    max_length = int(params.get("max_length", 8))

    dfa_rng, word_rng = spawn_rngs(make_rng(seed), 2)
    model = random_dfa(
        dfa_rng,
        n_states=int(params.get("n_states", 4)),
        alphabet=alphabet,
        p_final=float(params.get("p_final", 0.3)),
        p_edge=float(params.get("p_edge", 0.8)),
    )
    restored = from_json(to_json(model))

    agreements = 0
    round_trips = 0
    accepted = 0
    for _ in range(n_words):
        word = random_word(word_rng, alphabet, max_length)
        verdict = accepts(model, word)
        agreements += verdict == trace(model, word).accepted
        round_trips += verdict == accepts(restored, word)
        accepted += verdict

    deterministic = is_deterministic(model)
    return {
        "n_words": n_words,
        "agreements": agreements,
        "round_trips": round_trips,
        "accept_rate": accepted / n_words if n_words else 0.0,
        "deterministic": deterministic,
        "consistent": deterministic and agreements == n_words and round_trips == n_words,
    }


def sweep(
    param_grid: dict[str, list[Any]],
    run_fn: Callable[[dict[str, Any], int], dict[str, Any]] = run_consistency,
    n_seeds: int = 5,
    base_seed: int = 42,
) -> list[Artifact]:
    if n_seeds <= 0:
        raise ValueError("n_seeds must be > 0")

    artifacts = []
    param_names = list(param_grid.keys())
    seeds = make_rng(base_seed).integers(0, 2**31, size=n_seeds)

    for combo in itertools.product(*param_grid.values()):
        params = dict(zip(param_names, combo))
        logger.info("sweeping %s over %d seeds", params, n_seeds)

        for seed in seeds:
            seed_int = int(seed)
            artifacts.append(
                Artifact(
                    params=params,
                    seed=seed_int,
                    entropy=get_entropy(make_rng(seed_int)),
                    metrics=run_fn(params, seed_int),
                    dfasim_version=__version__,
                    timestamp=datetime.now().isoformat(),
                )
            )

    return artifacts
