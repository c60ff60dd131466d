"""
Seat store: the ordered, fixed-length sequence of seat statuses.
"""

import enum
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Sequence, Tuple

from .layout import DEFAULT_LAYOUT, SeatLayout
from ..utils.exceptions import InvalidSeatStoreError


class SeatStatus(enum.Enum):
    """Enumeration for seat status."""
    AVAILABLE = "available"
    BOOKED = "booked"


@dataclass(frozen=True)
class SeatStore:
    """Immutable snapshot of every seat's status, indexed by 0-based seat index.

    The length always equals ``layout.total_seats``. Operations that change
    statuses return a new store; committing it is up to the caller.
    """

    statuses: Tuple[SeatStatus, ...]
    layout: SeatLayout = DEFAULT_LAYOUT

    def __post_init__(self):
        if len(self.statuses) != self.layout.total_seats:
            raise InvalidSeatStoreError(
                f"Expected {self.layout.total_seats} seats, got {len(self.statuses)}",
                details={"expected": self.layout.total_seats, "actual": len(self.statuses)},
            )
        for index, status in enumerate(self.statuses):
            if not isinstance(status, SeatStatus):
                raise InvalidSeatStoreError(
                    f"Seat {index + 1} has invalid status {status!r}",
                    details={"seat_number": index + 1, "status": repr(status)},
                )

    @classmethod
    def all_available(cls, layout: SeatLayout = DEFAULT_LAYOUT) -> "SeatStore":
        return cls((SeatStatus.AVAILABLE,) * layout.total_seats, layout)

    @classmethod
    def from_statuses(
        cls,
        statuses: Iterable,
        layout: SeatLayout = DEFAULT_LAYOUT,
    ) -> "SeatStore":
        """
        Build a store from raw status values such as ``"available"``.

        Args:
            statuses: Seat statuses in seat order, as enum members or their values
            layout: Grid the statuses belong to

        Raises:
            InvalidSeatStoreError: If the count or any status value is wrong
        """
        converted = []
        for index, raw in enumerate(statuses):
            try:
                converted.append(raw if isinstance(raw, SeatStatus) else SeatStatus(raw))
            except ValueError:
                raise InvalidSeatStoreError(
                    f"Seat {index + 1} has invalid status {raw!r}",
                    details={"seat_number": index + 1, "status": repr(raw)},
                )
        return cls(tuple(converted), layout)

    def __len__(self) -> int:
        return len(self.statuses)

    def __iter__(self) -> Iterator[SeatStatus]:
        return iter(self.statuses)

    def __getitem__(self, index: int) -> SeatStatus:
        return self.statuses[index]

    def is_available(self, index: int) -> bool:
        return self.statuses[index] is SeatStatus.AVAILABLE

    def available_in_row(self, row: int) -> List[int]:
        """Indices of the available seats in ``row``, lowest column first."""
        return [index for index in self.layout.row_range(row) if self.is_available(index)]

    @property
    def available_count(self) -> int:
        return sum(1 for status in self.statuses if status is SeatStatus.AVAILABLE)

    @property
    def booked_count(self) -> int:
        return len(self.statuses) - self.available_count

    def with_booked(self, indices: Sequence[int]) -> "SeatStore":
        """Return a copy with ``indices`` marked booked."""
        statuses = list(self.statuses)
        for index in indices:
            if not self.layout.contains(index):
                raise InvalidSeatStoreError(
                    f"Seat index {index} is outside the {self.layout.total_seats}-seat grid",
                    details={"index": index},
                )
            statuses[index] = SeatStatus.BOOKED
        return SeatStore(tuple(statuses), self.layout)

    def reset(self) -> "SeatStore":
        """Return a store of the same layout with every seat available."""
        return SeatStore.all_available(self.layout)


def reset(store: SeatStore) -> SeatStore:
    """Mark every seat in ``store`` available."""
    return store.reset()
