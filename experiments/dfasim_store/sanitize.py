"""Payload validation and sanitizing at the persistence edge.

The core codec only checks shape; this module adds the size cap and clamps
every field to the ranges in PayloadLimits before a payload reaches it.
"""

import json
import math
import re
from typing import Any

from dfasim.core.errors import PayloadError
from dfasim.core.serialization import check_shape
from dfasim.core.types import format_symbols, parse_symbols

from .limits import DEFAULT_LIMITS, PayloadLimits

_UNSAFE_CHARS = re.compile(r"[<>'\"&]")


def _clamp(value: float, bounds: tuple) -> float:
    low, high = bounds
    return max(low, min(high, value))


def _to_float(value: Any, default: float) -> float:
    if isinstance(value, bool):
        return default
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(result) or math.isinf(result):
        return default
    return result


def _to_int(value: Any, default: int) -> int:
    return int(_to_float(value, default))


def _to_optional_int(value: Any) -> int | None:
    if value is None:
        return None
    parsed = _to_float(value, math.nan)
    return None if math.isnan(parsed) else int(parsed)


def sanitize_string(value: Any, max_length: int = 50) -> str:
    if not isinstance(value, str):
        return ""
    return _UNSAFE_CHARS.sub("", value[:max_length]).strip()


def sanitize_symbols(value: Any, max_length: int = 10) -> str:
    """Sanitize a comma-joined symbol list one symbol at a time.

    The length cap applies to each symbol, never to the joined text, so a
    transition with many symbols keeps all of them.
    """
    if not isinstance(value, str):
        return ""
    cleaned = (sanitize_string(symbol, max_length) for symbol in parse_symbols(value))
    return format_symbols(symbol for symbol in cleaned if symbol)


def payload_size(data: dict) -> int:
    return len(json.dumps(data, separators=(",", ":")).encode("utf-8"))


def validate_payload(data: Any, limits: PayloadLimits = DEFAULT_LIMITS) -> None:
    check_shape(data)

    size = payload_size(data)
    if size > limits.max_bytes:
        raise PayloadError(f"Automaton too large ({size} bytes, max {limits.max_bytes})")

    for index, state in enumerate(data["states"]):
        for axis in ("x", "y"):
            coord = state.get(axis)
            if isinstance(coord, bool) or not isinstance(coord, (int, float)):
                raise PayloadError(f"State {index} has invalid coordinates")

    # Anything sanitizing would alter on load is refused here instead.
    for index, transition in enumerate(data["transitions"]):
        for symbol in parse_symbols(transition["symbol"]):
            if sanitize_string(symbol, limits.max_symbol_length) != symbol:
                raise PayloadError(f"Transition {index} has invalid symbol {symbol!r}")


def sanitize_payload(data: Any, limits: PayloadLimits = DEFAULT_LIMITS) -> dict:
    """Return a clamped copy of `data`; the input is not modified."""
    if not isinstance(data, dict):
        raise PayloadError("Invalid automaton data structure")
    states = data.get("states")
    transitions = data.get("transitions")
    if not isinstance(states, list) or not isinstance(transitions, list):
        raise PayloadError("States and transitions must be arrays")

    clean_states = []
    for state in states:
        if not isinstance(state, dict):
            raise PayloadError("State entries must be objects")
        state_id = _to_int(state.get("id"), 0)
        clean_states.append(
            {
                "id": state_id,
                "x": _clamp(_to_float(state.get("x"), 100), limits.x_range),
                "y": _clamp(_to_float(state.get("y"), 100), limits.y_range),
                "isFinal": bool(state.get("isFinal")),
                "label": sanitize_string(state.get("label") or f"q{state_id}", limits.max_label_length)
                or f"q{state_id}",
            }
        )

    clean_transitions = []
    for transition in transitions:
        if not isinstance(transition, dict):
            raise PayloadError("Transition entries must be objects")
        raw_id = transition.get("id")
        clean_transitions.append(
            {
                "id": str(raw_id) if raw_id not in (None, "") else "",
                "fromId": _to_int(transition.get("fromId"), 0),
                "toId": _to_int(transition.get("toId"), 0),
                "symbol": sanitize_symbols(transition.get("symbol"), limits.max_symbol_length),
                "offset": _clamp(_to_float(transition.get("offset"), 0), limits.offset_range),
                "offsetDirection": int(
                    _clamp(_to_int(transition.get("offsetDirection"), 0), limits.offset_direction_range)
                ),
                "labelOffset": _clamp(
                    _to_float(transition.get("labelOffset"), 0.5), limits.label_offset_range
                ),
                "selfLoopAngle": _to_float(transition.get("selfLoopAngle"), -math.pi / 2),
            }
        )

    return {
        "type": data.get("type") or "dfa",
        "states": clean_states,
        "transitions": clean_transitions,
        "startStateId": _to_optional_int(data.get("startStateId")),
        "stateCounter": max(0, _to_int(data.get("stateCounter"), 0)),
    }
