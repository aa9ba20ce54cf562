from __future__ import annotations

from typing import Iterable

from app.domain.entities.appointment import Interval


def intervals_overlap(first: Interval, second: Interval) -> bool:
    """Half-open overlap test: touching intervals do not overlap."""
    return first.start < second.end and second.start < first.end


def find_conflict(proposed: Interval, existing: Iterable[Interval]) -> Interval | None:
    """Return the first existing interval that overlaps `proposed`, in input order.

    Status filtering (cancelled/expired) is the caller's job.
    """
    if proposed.is_empty:
        return None
    for interval in existing:
        if intervals_overlap(proposed, interval):
            return interval
    return None
