"""Persisted record models"""

from src.service.ticketing.driven_adapter.model.reservation_record import ReservationRecord

__all__ = ['ReservationRecord']
