from dataclasses import dataclass


def _check_range(name: str, bounds: tuple) -> None:
    if len(bounds) != 2:
        raise ValueError(f"{name} must be a (low, high) pair")
    low, high = bounds
    if low > high:
        raise ValueError(f"{name} low must be <= high")


@dataclass(frozen=True)
class PayloadLimits:
    """Bounds the persistence layer enforces on a serialized automaton."""

    max_bytes: int = 25000
    x_range: tuple[float, float] = (0, 2000)
    y_range: tuple[float, float] = (0, 1000)
    max_label_length: int = 20
    max_symbol_length: int = 10
    offset_range: tuple[float, float] = (-50, 50)
    offset_direction_range: tuple[int, int] = (-1, 1)
    label_offset_range: tuple[float, float] = (0, 1)

    def __post_init__(self):
        if self.max_bytes <= 0:
            raise ValueError("max_bytes must be > 0")
        if self.max_label_length <= 0:
            raise ValueError("max_label_length must be > 0")
        if self.max_symbol_length <= 0:
            raise ValueError("max_symbol_length must be > 0")
        for name in ("x_range", "y_range", "offset_range", "offset_direction_range", "label_offset_range"):
            _check_range(name, getattr(self, name))


DEFAULT_LIMITS = PayloadLimits()
