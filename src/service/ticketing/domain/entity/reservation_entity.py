from datetime import datetime, timedelta
from typing import Dict, List, Optional

import attrs

from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.domain.enum import PaymentStatus
from src.service.shared_kernel.domain.value_object import ShowingKey
from src.service.shared_kernel.domain.value_object.seat_label import normalize_seat_label


@attrs.define
class Reservation:
    code: str
    movie_title: str
    showtime_label: str
    price: int
    quantity: int
    seats: List[str]
    passkey: str
    concession_items: Dict[str, int] = attrs.field(factory=dict)
    concession_subtotal: float = 0.0
    discount: float = 0.0
    admin_note: str = ''
    status: PaymentStatus = PaymentStatus.PENDING
    payment_method: str = ''
    payment_reference: str = ''
    amount_paid: float = 0.0
    payment_deadline: Optional[datetime] = None
    created_at: Optional[datetime] = None
    last_modified: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        code: str,
        showing: ShowingKey,
        price: int,
        seats: List[str],
        passkey: str,
        max_quantity: int,
        now: datetime,
        payment_window: timedelta,
        concession_items: Optional[Dict[str, int]] = None,
        concession_subtotal: float = 0.0,
    ) -> 'Reservation':
        seats = [normalize_seat_label(seat) for seat in seats]
        quantity = len(seats)
        if not 1 <= quantity <= max_quantity:
            raise DomainError(f'Quantity must be between 1 and {max_quantity}')
        if len(set(seats)) != quantity:
            raise DomainError('Seat labels must be unique')
        if not passkey:
            raise DomainError('Passkey cannot be empty')

        return cls(
            code=code,
            movie_title=showing.movie_title,
            showtime_label=showing.showtime_label,
            price=price,
            quantity=quantity,
            seats=seats,
            passkey=passkey,
            concession_items=dict(concession_items or {}),
            concession_subtotal=concession_subtotal,
            status=PaymentStatus.PENDING,
            payment_deadline=now + payment_window,
            created_at=now,
            last_modified=now,
        )

    @property
    def showing_key(self) -> ShowingKey:
        return ShowingKey(movie_title=self.movie_title, showtime_label=self.showtime_label)

    @property
    def ticket_total(self) -> int:
        return self.price * self.quantity

    @property
    def base_total(self) -> float:
        """Ticket total plus concessions, before discount"""
        return self.ticket_total + self.concession_subtotal

    @property
    def grand_total(self) -> float:
        return max(0.0, round(self.base_total - self.discount, 2))

    @property
    def has_concessions(self) -> bool:
        return any(quantity > 0 for quantity in self.concession_items.values())

    @property
    def holds_seats(self) -> bool:
        return self.status in (PaymentStatus.PENDING, PaymentStatus.PAID)

    def is_past_deadline(self, now: datetime) -> bool:
        return (
            self.status == PaymentStatus.PENDING
            and self.payment_deadline is not None
            and now >= self.payment_deadline
        )

    def matches_code(self, code: str) -> bool:
        return self.code.casefold() == code.strip().casefold()

    def check_passkey(self, passkey: str) -> bool:
        # Plaintext, exact match
        return self.passkey == passkey
