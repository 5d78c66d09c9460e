from __future__ import annotations

from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Sequence, TypeVar

from rental_dashboard.shared.numbers import to_finite_number

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def numeric_or_zero(value: Any) -> float:
    """Zero-substitution rule applied at every aggregation boundary."""
    number = to_finite_number(value)
    return number if number is not None else 0.0


def count_by(items: Iterable[T], key_fn: Callable[[T], K]) -> Dict[K, int]:
    counts: Dict[K, int] = {}
    for item in items:
        key = key_fn(item)
        counts[key] = counts.get(key, 0) + 1
    return counts


def sum_by(
    items: Iterable[T], key_fn: Callable[[T], K], value_fn: Callable[[T], Any]
) -> Dict[K, float]:
    sums: Dict[K, float] = {}
    for item in items:
        key = key_fn(item)
        sums[key] = sums.get(key, 0.0) + numeric_or_zero(value_fn(item))
    return sums


def total(items: Iterable[T], value_fn: Callable[[T], Any]) -> float:
    return sum((numeric_or_zero(value_fn(item)) for item in items), 0.0)


def distinct_non_empty(values: Iterable[Optional[K]]) -> List[K]:
    seen: Dict[K, None] = {}
    for value in values:
        if value is None or value == "":
            continue
        seen.setdefault(value, None)
    return list(seen)


def highlight_index(labels: Sequence[Any], needle: str) -> Optional[int]:
    # First match by label position; later matches are not highlighted.
    lowered = needle.lower()
    for index, label in enumerate(labels):
        if lowered in str(label).lower():
            return index
    return None
