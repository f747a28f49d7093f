"""Half-up rounding shared by the prediction and statistics routines.

Day counts, severities and percentages all round halves upward
(27.5 days -> 28, 28.5 days -> 29), unlike the built-in ``round``.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float, places: int = 0) -> int | float:
    """Round ``value`` to ``places`` decimals, halves away from zero.

    The value goes through ``str`` first so that e.g. ``1.45`` rounds to
    ``1.5`` rather than being treated as ``1.4499999999999999556``.

    Args:
        value:  Number to round.
        places: Decimal places to keep (0 for whole numbers).

    Returns:
        An ``int`` when ``places == 0``, otherwise a ``float``.

    Raises:
        ValueError: If ``places`` is negative.
    """
    if places < 0:
        raise ValueError(f"places must be >= 0, got {places}")
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return int(rounded) if places == 0 else float(rounded)
