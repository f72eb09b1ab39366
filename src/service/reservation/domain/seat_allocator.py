"""
Seat Allocator
Every seat mutation - new reservation, edits, expiry, cancellation, admin override,
startup rehydration - goes through hold/release here, so the no-double-booking rule
has a single owner.
"""

from typing import TYPE_CHECKING, Iterable, List

import attrs

from src.platform.exception.exceptions import SeatNotFoundError, SeatUnavailableError
from src.platform.logging.loguru_io import Logger
from src.service.reservation.domain.entity.seat_grid import SeatGrid
from src.service.shared_kernel.domain.value_object.seat_label import normalize_seat_label


if TYPE_CHECKING:
    from src.service.reservation.app.interface.i_seat_picker import ISeatPicker


@attrs.define
class SeatReselection:
    """Result of a reselect loop"""

    selected: List[str]
    # Previously held labels that were not picked again; caller releases them
    leftover: List[str]


class SeatAllocator:
    def hold_seats(self, *, grid: SeatGrid, seat_labels: Iterable[str]) -> List[str]:
        """
        Hold every seat or none.

        Raises:
            SeatNotFoundError: A label is not part of the grid
            SeatUnavailableError: A seat is already held, or requested twice
        """
        labels = [normalize_seat_label(label) for label in seat_labels]

        seen: set[str] = set()
        for label in labels:
            if label not in grid:
                raise SeatNotFoundError(label)
            if label in seen or not grid.is_available(label):
                raise SeatUnavailableError(label)
            seen.add(label)

        for label in labels:
            grid.get(label).available = False  # type: ignore[union-attr]

        Logger.base.debug(f'💺 [SEAT] Held {labels} in {grid.key}')
        return labels

    def release_seats(self, *, grid: SeatGrid, seat_labels: Iterable[str]) -> None:
        """Idempotent - unknown or already-available labels are ignored"""
        released = []
        for label in seat_labels:
            seat = grid.get(normalize_seat_label(label))
            if seat is not None and not seat.available:
                seat.available = True
                released.append(seat.label)

        if released:
            Logger.base.debug(f'🔓 [SEAT] Released {released} in {grid.key}')

    def mark_unavailable(self, *, grid: SeatGrid, seat_labels: Iterable[str]) -> None:
        """Rehydrate holds from persisted reservations; unknown labels are skipped"""
        for label in seat_labels:
            seat = grid.get(normalize_seat_label(label))
            if seat is not None:
                seat.available = False

    @Logger.io
    def select_seats(self, *, grid: SeatGrid, quantity: int, picker: 'ISeatPicker') -> List[str]:
        """Collect `quantity` seats one label at a time; rejected labels do not use up a slot"""
        selected: List[str] = []
        try:
            while len(selected) < quantity:
                raw = picker.next_label(
                    grid=grid, selected=list(selected), own_seats=[], quantity=quantity
                )
                label = normalize_seat_label(raw)
                try:
                    self.hold_seats(grid=grid, seat_labels=[label])
                except (SeatNotFoundError, SeatUnavailableError) as e:
                    picker.on_rejected(label=label, error=e)
                    continue
                selected.append(label)
        except Exception:
            # Picker aborted mid-loop
            self.release_seats(grid=grid, seat_labels=selected)
            raise

        return selected

    @Logger.io
    def select_additional_seats(
        self, *, grid: SeatGrid, count: int, picker: 'ISeatPicker'
    ) -> List[str]:
        """Ticket quantity increase - same rules as select_seats"""
        return self.select_seats(grid=grid, quantity=count, picker=picker)

    @Logger.io
    def reselect_seats(
        self,
        *,
        grid: SeatGrid,
        current_seats: List[str],
        quantity: int,
        picker: 'ISeatPicker',
    ) -> SeatReselection:
        """
        Pick `quantity` seats where the caller's current seats count as available.

        A current seat picked again is kept as-is (still held, not re-flipped).
        Current seats not picked again are returned in `leftover` and stay held
        until the caller releases them.
        """
        remaining = [normalize_seat_label(label) for label in current_seats]
        selected: List[str] = []
        newly_held: List[str] = []

        try:
            while len(selected) < quantity:
                raw = picker.next_label(
                    grid=grid, selected=list(selected), own_seats=list(remaining), quantity=quantity
                )
                label = normalize_seat_label(raw)

                if label in remaining:
                    remaining.remove(label)
                    selected.append(label)
                    continue

                try:
                    self.hold_seats(grid=grid, seat_labels=[label])
                except (SeatNotFoundError, SeatUnavailableError) as e:
                    picker.on_rejected(label=label, error=e)
                    continue
                selected.append(label)
                newly_held.append(label)
        except Exception:
            # Picker aborted mid-loop: current seats stay held, new picks are given back
            self.release_seats(grid=grid, seat_labels=newly_held)
            raise

        return SeatReselection(selected=selected, leftover=remaining)
