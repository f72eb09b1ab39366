from typing import List

import attrs

from src.service.inventory.domain.inventory_ledger import ConcessionQuote
from src.service.shared_kernel.domain.value_object import ShowingKey


@attrs.define
class ReservationDraft:
    """Seats held and concessions priced, waiting for the customer's passkey and confirmation"""

    showing: ShowingKey
    price: int
    seats: List[str]
    quote: ConcessionQuote

    @property
    def quantity(self) -> int:
        return len(self.seats)

    @property
    def total(self) -> float:
        return round(self.price * self.quantity + self.quote.subtotal, 2)
