"""
Seat Picker Interface

Source of seat labels for the interactive seat selection loops. A console front-end
prompts the customer; tests feed a scripted list.
"""

from abc import ABC, abstractmethod
from typing import List

from src.platform.exception.exceptions import CustomBaseError
from src.service.reservation.domain.entity.seat_grid import SeatGrid


class ISeatPicker(ABC):
    @abstractmethod
    def next_label(
        self,
        *,
        grid: SeatGrid,
        selected: List[str],
        own_seats: List[str],
        quantity: int,
    ) -> str:
        """
        Ask for the next seat label.

        Args:
            grid: Grid being picked from (for rendering the seat map)
            selected: Labels already accepted in this loop
            own_seats: Labels the caller already holds and may keep (shown distinctly)
            quantity: Total number of seats the loop must collect

        Returns:
            Raw label as entered; the allocator normalizes case and whitespace
        """
        pass

    @abstractmethod
    def on_rejected(self, *, label: str, error: CustomBaseError) -> None:
        """Report a rejected label (unknown or taken); the loop asks again for the same slot"""
        pass
