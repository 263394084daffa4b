"""Automaton storage (save/load as JSON files)."""

import json
import logging
from pathlib import Path
from typing import Union

import numpy as np

from dfasim.core.errors import PayloadError
from dfasim.core.model import AutomatonModel
from dfasim.core.serialization import from_dict, to_dict
from dfasim.core.variants import AutomatonVariant

from .limits import DEFAULT_LIMITS, PayloadLimits
from .sanitize import sanitize_payload, validate_payload

logger = logging.getLogger(__name__)


def save_automaton(
    model: AutomatonModel,
    path: Union[str, Path],
    limits: PayloadLimits = DEFAULT_LIMITS,
) -> None:
    """Save a model to a JSON file.

    Args:
        model: AutomatonModel to save
        path: File path where the JSON will be written
        limits: Size cap and field bounds to enforce

    Raises:
        PayloadError: If the serialized model exceeds limits.max_bytes
    """
    data = to_dict(model)
    validate_payload(data, limits)

    with open(path, "w") as f:
        json.dump(data, f, indent=2)
    logger.info("saved automaton with %d states to %s", len(model), path)


def load_automaton(
    path: Union[str, Path],
    limits: PayloadLimits = DEFAULT_LIMITS,
    variant: AutomatonVariant | None = None,
    rng: np.random.Generator | None = None,
) -> AutomatonModel:
    """Load a model from a JSON file, sanitizing it on the way in.

    Raises:
        FileNotFoundError: If path does not exist
        PayloadError: If the file is not valid JSON or fails validation
    """
    if not Path(path).exists():
        raise FileNotFoundError(f"Automaton file not found: {path}")

    with open(path, "r") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise PayloadError(f"Invalid automaton JSON in {path}: {exc}") from exc

    data = sanitize_payload(raw, limits)
    validate_payload(data, limits)
    model = from_dict(data, variant=variant, rng=rng)
    logger.info("loaded automaton with %d states from %s", len(model), path)
    return model
