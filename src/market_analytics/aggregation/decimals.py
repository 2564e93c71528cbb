"""Fixed-point helpers — pure integer arithmetic, no floats anywhere."""

from __future__ import annotations


def normalize(value: int, from_decimals: int, to_decimals: int) -> int:
    """Rescale *value* from one decimal precision to another.

    Scaling down truncates toward zero, so sub-unit precision is lost:
    ``normalize(normalize(x, 18, 6), 6, 18) == x`` only when ``x`` is a
    multiple of ``10**12``. Scaling up is exact, so
    ``normalize(normalize(x, 6, 18), 18, 6) == x`` for every ``x >= 0``.
    """
    if from_decimals == to_decimals:
        return value
    if from_decimals > to_decimals:
        return value // 10 ** (from_decimals - to_decimals)
    return value * 10 ** (to_decimals - from_decimals)


def format_amount(raw: int, decimals: int) -> str:
    """Render a raw amount as a decimal string with trailing zeros trimmed.

    >>> format_amount(9_900_000, 6)
    '9.9'
    >>> format_amount(5 * 10**18, 18)
    '5'
    """
    if decimals == 0:
        return str(raw)
    whole, fractional = divmod(raw, 10**decimals)
    frac = str(fractional).rjust(decimals, "0").rstrip("0")
    return f"{whole}.{frac}" if frac else str(whole)
