"""Bulk accept/reject testing of an automaton against two word lists."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
import pandas as pd

from dfasim.core.engine import accepts
from dfasim.core.errors import NoStartStateError
from dfasim.core.model import AutomatonModel

ACCEPT = "ACCEPT"
REJECT = "REJECT"
OUTCOMES = (ACCEPT, REJECT)
EMPTY_WORD_DISPLAY = "(empty string)"


def _outcome(accepted: bool) -> str:
    return ACCEPT if accepted else REJECT


@dataclass(frozen=True)
class BulkCase:
    word: str
    expected: bool
    actual: bool

    @property
    def passed(self) -> bool:
        return self.expected == self.actual

    @property
    def display(self) -> str:
        return self.word if self.word else EMPTY_WORD_DISPLAY

    def describe(self) -> str:
        return (
            f'"{self.display}" -> Expected: {_outcome(self.expected)}, '
            f"Got: {_outcome(self.actual)}"
        )


@dataclass
class BulkReport:
    cases: list[BulkCase]

    @property
    def total(self) -> int:
        return len(self.cases)

    @property
    def passed(self) -> int:
        return sum(1 for case in self.cases if case.passed)

    @property
    def failed(self) -> list[BulkCase]:
        return [case for case in self.cases if not case.passed]

    @property
    def all_passed(self) -> bool:
        return self.passed == self.total

    def summary(self) -> str:
        return f"{self.passed}/{self.total} tests passed"

    def confusion_matrix(self) -> np.ndarray:
        """Rows are expected ACCEPT/REJECT, columns the actual outcome."""
        return outcome_confusion_matrix(
            [_outcome(case.actual) for case in self.cases],
            [_outcome(case.expected) for case in self.cases],
        )

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "string": [case.display for case in self.cases],
                "expected": [_outcome(case.expected) for case in self.cases],
                "actual": [_outcome(case.actual) for case in self.cases],
                "passed": [case.passed for case in self.cases],
            },
            columns=["string", "expected", "actual", "passed"],
        )


def outcome_confusion_matrix(
    predicted: list[str],
    true: list[str],
) -> np.ndarray:
    if len(predicted) != len(true):
        raise ValueError("predicted and true must have same length")

    index = {outcome: i for i, outcome in enumerate(OUTCOMES)}
    matrix = np.zeros((len(OUTCOMES), len(OUTCOMES)), dtype=np.int64)

    for pred, expected in zip(predicted, true):
        if pred not in index or expected not in index:
            raise ValueError(f"outcomes must be one of {OUTCOMES}")
        matrix[index[expected], index[pred]] += 1

    return matrix


def parse_word_list(text: str) -> list[str]:
    """Split a newline-separated block into stripped words.

    Blank lines count as the empty word; repeats are dropped.
    """
    return _unique(line.strip() for line in text.splitlines())


def _unique(words: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result = []
    for word in words:
        if word in seen:
            continue
        seen.add(word)
        result.append(word)
    return result


def bulk_test(
    model: AutomatonModel,
    accept_words: Iterable[str],
    reject_words: Iterable[str],
) -> BulkReport:
    if model.start_state is None:
        raise NoStartStateError()

    cases = []
    for expected, words in ((True, accept_words), (False, reject_words)):
        for word in _unique(words):
            cases.append(BulkCase(word=word, expected=expected, actual=accepts(model, word)))

    return BulkReport(cases=cases)
