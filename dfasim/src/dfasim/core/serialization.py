"""Wire codec: AutomatonModel <-> plain dict / JSON.

Symbols travel as a comma-joined string ("a, b") and are parsed back into a
set on load. Presentation fields on transitions are carried through
untouched, with defaults filled in for missing keys.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any

import numpy as np

from dfasim.core.errors import PayloadError
from dfasim.core.model import AutomatonModel
from dfasim.core.types import format_symbols
from dfasim.core.variants import AutomatonVariant

logger = logging.getLogger(__name__)

PRESENTATION_DEFAULTS: dict[str, float] = {
    "offset": 0,
    "offsetDirection": 0,
    "labelOffset": 0.5,
    "selfLoopAngle": -math.pi / 2,
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def to_dict(model: AutomatonModel) -> dict[str, Any]:
    transitions = []
    for transition in model.transitions:
        entry: dict[str, Any] = {
            "id": transition.id,
            "fromId": transition.source.id,
            "toId": transition.target.id,
            "symbol": format_symbols(transition.symbols),
        }
        for key, default in PRESENTATION_DEFAULTS.items():
            entry[key] = transition.presentation.get(key, default)
        for key, value in transition.presentation.items():
            entry.setdefault(key, value)
        transitions.append(entry)

    return {
        "type": model.variant.name,
        "states": [
            {
                "id": state.id,
                "x": state.x,
                "y": state.y,
                "isFinal": state.is_final,
                "label": state.label,
            }
            for state in model.states
        ],
        "transitions": transitions,
        "startStateId": model.start_state.id if model.start_state is not None else None,
        "stateCounter": model.state_counter,
    }


def check_shape(data: Any) -> None:
    """Raise PayloadError unless `data` has the structure to_dict produces."""
    if not isinstance(data, dict):
        raise PayloadError("Invalid automaton data structure")
    if not isinstance(data.get("states"), list):
        raise PayloadError("States must be an array")
    if not isinstance(data.get("transitions"), list):
        raise PayloadError("Transitions must be an array")

    for index, state in enumerate(data["states"]):
        if not isinstance(state, dict) or not _is_int(state.get("id")):
            raise PayloadError(f"State {index} has invalid ID")

    for index, transition in enumerate(data["transitions"]):
        if not isinstance(transition, dict):
            raise PayloadError(f"Transition {index} is not an object")
        if not _is_int(transition.get("fromId")) or not _is_int(transition.get("toId")):
            raise PayloadError(f"Transition {index} has invalid state references")
        symbol = transition.get("symbol")
        if not isinstance(symbol, str) or not symbol:
            raise PayloadError(f"Transition {index} has invalid symbol")


def from_dict(
    data: dict[str, Any],
    variant: AutomatonVariant | None = None,
    rng: np.random.Generator | None = None,
) -> AutomatonModel:
    """Rebuild a model from a payload.

    Transitions are validated through the variant exactly as interactive
    edits are, so a payload that breaks determinism raises instead of
    loading.
    """
    check_shape(data)
    model = AutomatonModel(variant=variant, rng=rng)

    payload_type = data.get("type")
    if payload_type is not None and payload_type != model.variant.name:
        raise PayloadError(
            f"payload type {payload_type!r} does not match variant {model.variant.name!r}"
        )

    for entry in data["states"]:
        state_id = entry["id"]
        if model.has_state(state_id):
            raise PayloadError(f"duplicate state id: {state_id}")
        model.restore_state(
            state_id,
            label=str(entry.get("label") or f"q{state_id}"),
            is_final=bool(entry.get("isFinal", False)),
            x=entry.get("x", 0.0),
            y=entry.get("y", 0.0),
        )

    for entry in data["transitions"]:
        source_id, target_id = entry["fromId"], entry["toId"]
        if not model.has_state(source_id) or not model.has_state(target_id):
            logger.warning(
                "skipping transition %r with invalid state references %s -> %s",
                entry.get("id"),
                source_id,
                target_id,
            )
            continue

        presentation = {
            key: value
            for key, value in entry.items()
            if key not in ("id", "fromId", "toId", "symbol")
        }
        raw_id = entry.get("id")
        model.restore_transition(
            str(raw_id) if raw_id is not None else "",
            source_id,
            target_id,
            entry["symbol"],
            presentation=presentation,
        )

    start_id = data.get("startStateId")
    if start_id is not None:
        if model.has_state(start_id):
            model.set_start_state(start_id)
        else:
            logger.warning("start state %r not found, clearing start state reference", start_id)

    counter = data.get("stateCounter")
    if _is_int(counter) and counter > model.state_counter:
        model.state_counter = counter

    return model


def to_json(model: AutomatonModel, indent: int | None = None) -> str:
    return json.dumps(to_dict(model), indent=indent)


def from_json(
    text: str,
    variant: AutomatonVariant | None = None,
    rng: np.random.Generator | None = None,
) -> AutomatonModel:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PayloadError(f"Invalid automaton JSON: {exc}") from exc
    return from_dict(data, variant=variant, rng=rng)
