from typing import Dict, Iterator, List, Optional

import attrs

from src.service.shared_kernel.domain.value_object import SeatLabel, ShowingKey


@attrs.define
class Seat:
    label: str
    row: str
    available: bool = True


@attrs.define
class SeatGrid:
    """
    Seat Grid - all seats of one showing

    Seats are created once at construction in row-major order (A1..A8, B1..B8, ...)
    and are never added or removed afterwards. Only SeatAllocator flips availability.
    """

    key: ShowingKey
    rows: int
    cols: int
    _seats: Dict[str, Seat] = attrs.field(init=False, factory=dict)

    def __attrs_post_init__(self) -> None:
        for row_index in range(self.rows):
            for column in range(1, self.cols + 1):
                position = SeatLabel.build(row_index=row_index, column=column)
                self._seats[position.label] = Seat(label=position.label, row=position.row)

    def __iter__(self) -> Iterator[Seat]:
        return iter(self._seats.values())

    def __len__(self) -> int:
        return len(self._seats)

    def __contains__(self, label: object) -> bool:
        return label in self._seats

    def get(self, label: str) -> Optional[Seat]:
        return self._seats.get(label)

    def is_available(self, label: str) -> bool:
        seat = self._seats.get(label)
        return seat is not None and seat.available

    def available_labels(self) -> List[str]:
        return [seat.label for seat in self if seat.available]

    def held_labels(self) -> List[str]:
        return [seat.label for seat in self if not seat.available]

    def seat_rows(self) -> List[List[Seat]]:
        """Seats grouped by row, for seat map rendering"""
        grouped: Dict[str, List[Seat]] = {}
        for seat in self:
            grouped.setdefault(seat.row, []).append(seat)
        return list(grouped.values())
