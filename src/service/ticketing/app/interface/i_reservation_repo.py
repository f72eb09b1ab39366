from abc import ABC, abstractmethod
from typing import List

from src.service.ticketing.domain.entity.reservation_entity import Reservation


class IReservationRepo(ABC):
    """Whole-collection reservation storage - every save is a full snapshot"""

    @abstractmethod
    def load_reservations(self) -> List[Reservation]:
        """Missing or unreadable storage loads as an empty list"""
        pass

    @abstractmethod
    def save_reservations(self, reservations: List[Reservation]) -> None:
        """
        Raises:
            PersistenceUnavailableError: Storage cannot be written
        """
        pass
