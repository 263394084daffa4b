import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Union


@dataclass
class Artifact:
    """One sweep run: the parameters, the seed that drove it and what it measured."""

    params: dict
    seed: int
    entropy: Union[int, tuple]
    metrics: dict
    dfasim_version: str
    timestamp: str

    @classmethod
    def from_dict(cls, item: dict[str, Any]) -> "Artifact":
        item = dict(item)
        # JSON has no tuples
        if isinstance(item.get("entropy"), list):
            item["entropy"] = tuple(item["entropy"])
        return cls(**item)


def save_artifacts(artifacts: list[Artifact], path: Union[str, Path]) -> None:
    Path(path).write_text(json.dumps([asdict(a) for a in artifacts], indent=2))


def load_artifacts(path: Union[str, Path]) -> list[Artifact]:
    return [Artifact.from_dict(item) for item in json.loads(Path(path).read_text())]


def failing_artifacts(artifacts: list[Artifact]) -> list[Artifact]:
    """Runs where evaluation, determinism or round-trip disagreed."""
    return [a for a in artifacts if not a.metrics.get("consistent", False)]
