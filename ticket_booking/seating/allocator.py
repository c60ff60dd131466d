"""
Seat allocation for a booking request of N seats.

Two greedy passes over the rows, lowest row first:

1. Single-row fit: the first row with at least N available seats supplies
   its N lowest available seats.
2. Cross-row fill: when no row can hold the whole party, available seats are
   collected row by row, column by column, until N are found.

The store passed in is never modified; callers commit the result with
``SeatStore.with_booked`` once the booking has been persisted.
"""

import logging
from typing import Any, List, Optional

from .store import SeatStore
from ..utils.exceptions import (
    InsufficientSeatsError, InvalidRequestCountError, TooManyRequestedError
)

logger = logging.getLogger(__name__)


def validate_request_count(count: Any, limit: int) -> int:
    """
    Check a requested seat count.

    Raises:
        InvalidRequestCountError: If count is not a positive integer
        TooManyRequestedError: If count exceeds ``limit``
    """
    # bool is an int subclass but never a seat count
    if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
        raise InvalidRequestCountError(count)
    if count > limit:
        raise TooManyRequestedError(count, limit)
    return count


def parse_request_count(raw: Any, limit: int) -> int:
    """Parse user input such as ``" 3 "`` into a validated seat count."""
    if isinstance(raw, str):
        try:
            raw = int(raw.strip())
        except ValueError:
            raise InvalidRequestCountError(raw)
    return validate_request_count(raw, limit)


def _single_row_fit(store: SeatStore, count: int) -> Optional[List[int]]:
    for row in range(store.layout.rows):
        available = store.available_in_row(row)
        if len(available) >= count:
            return available[:count]
    return None


def _cross_row_fill(store: SeatStore, count: int) -> List[int]:
    selected: List[int] = []
    for row in range(store.layout.rows):
        for index in store.available_in_row(row):
            selected.append(index)
            if len(selected) == count:
                return selected
    return selected


def allocate(store: SeatStore, count: int) -> List[int]:
    """
    Choose seats for a booking of ``count`` seats.

    Args:
        store: Current seat statuses
        count: Number of seats requested

    Returns:
        0-based seat indices, row-ascending then column-ascending

    Raises:
        InvalidRequestCountError: If count is not a positive integer
        TooManyRequestedError: If count is larger than one row
        InsufficientSeatsError: If fewer than count seats are available
    """
    validate_request_count(count, store.layout.max_per_request)

    selected = _single_row_fit(store, count)
    if selected is not None:
        logger.debug(f"Allocated {count} seat(s) in row {store.layout.row_of(selected[0])}")
        return selected

    selected = _cross_row_fill(store, count)
    if len(selected) < count:
        raise InsufficientSeatsError(requested=count, available=len(selected))

    logger.debug(
        f"Allocated {count} seat(s) across rows "
        f"{store.layout.row_of(selected[0])}-{store.layout.row_of(selected[-1])}"
    )
    return selected
