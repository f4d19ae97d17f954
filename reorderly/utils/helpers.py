import math
from typing import Optional


def round_half_up(x: float) -> int:
    """Round halves towards +inf (2.5 -> 3), unlike the built-in round()."""
    return int(math.floor(x + 0.5))


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    if denominator == 0:
        return default
    return numerator / denominator


def format_accuracy(value: Optional[float]) -> str:
    if value is None or math.isnan(value):
        return 'N/A'
    return f'{value * 100:.1f}%'
