"""Reservation Service Interfaces"""

from src.service.reservation.app.interface.i_seat_picker import ISeatPicker

__all__ = ['ISeatPicker']
