from abc import ABC, abstractmethod

from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.value_object import PaymentOutcome


class IPaymentGateway(ABC):
    @abstractmethod
    def charge(self, *, reservation: Reservation, amount: float) -> PaymentOutcome:
        """
        Attempt to collect `amount` for a reservation.

        A declined charge returns PaymentOutcome(success=False); it never raises.
        """
        pass
