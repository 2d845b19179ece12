"""Number frequency ranking, mirroring the chart in the generated app."""

from collections import Counter
from typing import Iterable, List, Tuple

from fourd.scraper.models import DrawRecord


def number_frequencies(records: Iterable[DrawRecord]) -> Counter:
    """Count each number across first/second/third/special/consolation."""
    counts: Counter = Counter()
    for record in records:
        counts.update(record.numbers)
    return counts


def top_numbers(records: Iterable[DrawRecord], limit: int = 10) -> List[Tuple[str, int]]:
    """Most frequent numbers; equal counts keep the order numbers were first seen."""
    # most_common sorts stably over insertion order
    return number_frequencies(records).most_common(limit)
