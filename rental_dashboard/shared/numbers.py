from __future__ import annotations

import math
from typing import Any, Optional


def to_finite_number(value: Any) -> Optional[float]:
    """Return ``value`` as a finite float, or ``None`` when it is not one.

    Booleans are rejected even though they are ints. Numeric strings such as
    ``"12.5"`` are accepted since exported rows sometimes carry them.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, (int, float)):
            number = float(value)
        elif isinstance(value, str):
            number = float(value.strip())
        else:
            return None
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def to_label(value: Any) -> Optional[str]:
    """Return a scalar field as text, or ``None`` when it carries no label.

    Exported rows sometimes hold numeric codes where names are expected
    (agent codes, car ids), so numbers are rendered the way they print:
    ``42`` and ``42.0`` both become ``"42"``.
    """
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        try:
            return str(value)
        except ValueError:
            return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return str(int(value)) if value.is_integer() else repr(value)
    return None
