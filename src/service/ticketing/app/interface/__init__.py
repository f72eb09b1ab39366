"""Application layer interfaces (Ports)"""

from src.service.ticketing.app.interface.i_payment_gateway import IPaymentGateway
from src.service.ticketing.app.interface.i_reservation_repo import IReservationRepo

__all__ = ['IPaymentGateway', 'IReservationRepo']
