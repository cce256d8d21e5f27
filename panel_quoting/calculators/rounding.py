import math


def round_half_up(value: float) -> int:
    """Round to the nearest whole number, halves up (matches the builders)."""
    return int(math.floor(value + 0.5))


def round_money(value: float) -> float:
    return round(value, 2)
