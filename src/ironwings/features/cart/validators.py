# Input coercion shared by line items and the item factory

import math
from typing import Any


def coerce_quantity(value: Any, minimum: int = 1) -> int:
    # max(minimum, floor(value)); non-numeric input (None, "", "abc", nan, inf) becomes minimum
    try:
        number = float(value)
    except (TypeError, ValueError):
        return minimum
    if not math.isfinite(number):
        return minimum
    return max(minimum, math.floor(number))


def coerce_price(value: Any) -> float:
    # Prices are trusted input; unparsable values fall back to 0.0 rather than failing a reload
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number
