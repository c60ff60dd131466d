"""
Seat grid geometry: rows, seats per row and row-major seat indexing.
"""

from dataclasses import dataclass
from typing import Optional

from ..config import Settings, get_settings

ROWS = 11
SEATS_PER_ROW = 7


@dataclass(frozen=True)
class SeatLayout:
    """A fixed grid of seats numbered row by row.

    Seat indices are 0-based and row-major: index ``i`` sits in row
    ``i // seats_per_row`` at column ``i % seats_per_row``. Seat numbers shown
    to users and sent over the wire are ``index + 1``.
    """

    rows: int = ROWS
    seats_per_row: int = SEATS_PER_ROW

    def __post_init__(self):
        if self.rows < 1 or self.seats_per_row < 1:
            raise ValueError(
                f"Seat layout needs at least one row and one seat per row, "
                f"got {self.rows}x{self.seats_per_row}"
            )

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "SeatLayout":
        """Build the layout configured for this deployment."""
        settings = settings or get_settings()
        return cls(rows=settings.seat_rows, seats_per_row=settings.seats_per_row)

    @property
    def total_seats(self) -> int:
        return self.rows * self.seats_per_row

    @property
    def max_per_request(self) -> int:
        """Largest count one booking request may ask for: a full row."""
        return self.seats_per_row

    def row_of(self, index: int) -> int:
        return index // self.seats_per_row

    def row_range(self, row: int) -> range:
        """Seat indices belonging to ``row``, in column order."""
        start = row * self.seats_per_row
        return range(start, start + self.seats_per_row)

    def contains(self, index: int) -> bool:
        return 0 <= index < self.total_seats


DEFAULT_LAYOUT = SeatLayout()


def to_seat_number(index: int) -> int:
    """Convert a 0-based seat index to the 1-based number used externally."""
    return index + 1
