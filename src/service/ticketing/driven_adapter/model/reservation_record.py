from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.service.shared_kernel.domain.enum import PaymentStatus
from src.service.ticketing.domain.entity.reservation_entity import Reservation


class ReservationRecord(BaseModel):
    """Stored shape of one reservation in the bookings snapshot"""

    model_config = ConfigDict(extra='ignore')

    code: str = Field(min_length=1)
    movie_title: str
    showtime_label: str
    price: int = Field(ge=0)
    quantity: int = Field(ge=1)
    seats: List[str]
    passkey: str = Field(min_length=1)
    concession_items: Dict[str, int] = Field(default_factory=dict)
    concession_subtotal: float = 0.0
    discount: float = Field(default=0.0, ge=0)
    admin_note: str = ''
    status: PaymentStatus = PaymentStatus.PENDING
    payment_method: str = ''
    payment_reference: str = ''
    amount_paid: float = 0.0
    payment_deadline: Optional[datetime] = None
    created_at: Optional[datetime] = None
    last_modified: Optional[datetime] = None

    @model_validator(mode='after')
    def seats_match_quantity(self) -> 'ReservationRecord':
        if len(self.seats) != self.quantity:
            raise ValueError(f'{len(self.seats)} seats stored for quantity {self.quantity}')
        if len(set(self.seats)) != len(self.seats):
            raise ValueError('duplicate seat labels')
        return self

    @classmethod
    def from_entity(cls, reservation: Reservation) -> 'ReservationRecord':
        return cls(
            code=reservation.code,
            movie_title=reservation.movie_title,
            showtime_label=reservation.showtime_label,
            price=reservation.price,
            quantity=reservation.quantity,
            seats=list(reservation.seats),
            passkey=reservation.passkey,
            concession_items=dict(reservation.concession_items),
            concession_subtotal=reservation.concession_subtotal,
            discount=reservation.discount,
            admin_note=reservation.admin_note,
            status=reservation.status,
            payment_method=reservation.payment_method,
            payment_reference=reservation.payment_reference,
            amount_paid=reservation.amount_paid,
            payment_deadline=reservation.payment_deadline,
            created_at=reservation.created_at,
            last_modified=reservation.last_modified,
        )

    def to_entity(self) -> Reservation:
        return Reservation(
            code=self.code,
            movie_title=self.movie_title,
            showtime_label=self.showtime_label,
            price=self.price,
            quantity=self.quantity,
            seats=list(self.seats),
            passkey=self.passkey,
            concession_items=dict(self.concession_items),
            concession_subtotal=self.concession_subtotal,
            discount=self.discount,
            admin_note=self.admin_note,
            status=self.status,
            payment_method=self.payment_method,
            payment_reference=self.payment_reference,
            amount_paid=self.amount_paid,
            payment_deadline=self.payment_deadline,
            created_at=self.created_at,
            last_modified=self.last_modified,
        )
