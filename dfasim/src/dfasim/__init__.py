"""
dfasim: deterministic finite automaton model, validation and simulation.
"""

import logging

from dfasim.core.engine import Trace, TraceCursor, accepts, iter_trace, trace
from dfasim.core.errors import (
    AutomatonError,
    DeterminismViolationError,
    DuplicateSymbolError,
    InvalidLabelError,
    InvalidSymbolError,
    NoStartStateError,
    PayloadError,
    UnknownStateError,
    UnknownTransitionError,
    ValidationError,
)
from dfasim.core.model import AutomatonModel
from dfasim.core.types import State, Step, Transition, format_symbols, parse_symbols
from dfasim.core.variants import AutomatonVariant, DFAVariant

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AutomatonError",
    "AutomatonModel",
    "AutomatonVariant",
    "DFAVariant",
    "DeterminismViolationError",
    "DuplicateSymbolError",
    "InvalidLabelError",
    "InvalidSymbolError",
    "NoStartStateError",
    "PayloadError",
    "State",
    "Step",
    "Trace",
    "TraceCursor",
    "Transition",
    "UnknownStateError",
    "UnknownTransitionError",
    "ValidationError",
    "accepts",
    "format_symbols",
    "iter_trace",
    "parse_symbols",
    "trace",
]
