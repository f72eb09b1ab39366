"""
Reservation Lifecycle

State machine for reservations: pending -> paid / expired / cancelled, plus the edits
and admin overrides allowed along the way. _TRANSITIONS is the only place that decides
whether an action is legal for a status. Every operation checks it before touching
seats, stock or the reservation, so a rejected action never leaves a partial effect.

Seat holds go through SeatAllocator and stock movements through InventoryLedger.
Stock is debited when a reservation becomes paid and credited back when a paid
reservation is cancelled, expired by an admin, or moved back to pending.
"""

from datetime import timedelta
from typing import (
    TYPE_CHECKING,
    Callable,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
)

from src.platform.exception.exceptions import (
    DomainError,
    InvalidTransitionError,
    SeatNotFoundError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import Clock, utc_now
from src.service.inventory.domain.inventory_ledger import ConcessionQuote, InventoryLedger
from src.service.reservation.domain.seat_allocator import SeatAllocator
from src.service.reservation.driven_adapter.state.seat_grid_registry import SeatGridRegistry
from src.service.shared_kernel.domain.enum import PaymentStatus
from src.service.shared_kernel.domain.value_object import ShowingKey
from src.service.shared_kernel.domain.value_object.seat_label import normalize_seat_label
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.enum import LifecycleAction
from src.service.ticketing.domain.value_object import PaymentOutcome, RefundNotice


if TYPE_CHECKING:
    from src.service.reservation.app.interface.i_seat_picker import ISeatPicker


ADMIN_OVERRIDE_METHOD = 'Admin Override'
ADMIN_REFERENCE_PREFIX = 'ADMIN'

_TRANSITIONS: Dict[PaymentStatus, FrozenSet[LifecycleAction]] = {
    PaymentStatus.PENDING: frozenset(LifecycleAction),
    PaymentStatus.PAID: frozenset(
        {
            LifecycleAction.CANCEL,
            LifecycleAction.EDIT_CONCESSIONS,
            LifecycleAction.ADMIN_SET_PENDING,
            LifecycleAction.ADMIN_SET_EXPIRED,
            LifecycleAction.ADMIN_ADJUST,
        }
    ),
    PaymentStatus.EXPIRED: frozenset(
        {
            LifecycleAction.ADMIN_SET_PAID,
            LifecycleAction.ADMIN_SET_PENDING,
            LifecycleAction.ADMIN_ADJUST,
        }
    ),
    PaymentStatus.CANCELLED: frozenset(),
}

_ACTION_REJECTIONS: Dict[Tuple[PaymentStatus, LifecycleAction], str] = {
    (PaymentStatus.PAID, LifecycleAction.PAY): 'Reservation already paid',
    (PaymentStatus.PAID, LifecycleAction.ADMIN_SET_PAID): 'Reservation is already paid',
    (PaymentStatus.PAID, LifecycleAction.EXPIRE): 'Only pending reservations can expire',
    (PaymentStatus.EXPIRED, LifecycleAction.EXPIRE): 'Reservation has already expired',
    (PaymentStatus.EXPIRED, LifecycleAction.ADMIN_SET_EXPIRED): 'Reservation has already expired',
    (PaymentStatus.EXPIRED, LifecycleAction.PAY): (
        'Reservation has expired and its seats have been released'
    ),
}

_STATUS_REJECTIONS: Dict[PaymentStatus, str] = {
    PaymentStatus.PAID: (
        'Reservation has been paid; it can only be cancelled or have its concessions changed'
    ),
    PaymentStatus.EXPIRED: 'Reservation has expired and can no longer be changed',
    PaymentStatus.CANCELLED: 'Reservation has been cancelled',
}


class ReservationLifecycle:
    def __init__(
        self,
        *,
        allocator: SeatAllocator,
        grids: SeatGridRegistry,
        ledger: InventoryLedger,
        payment_window_minutes: int,
        max_quantity: int,
        clock: Clock = utc_now,
    ) -> None:
        self.allocator = allocator
        self.grids = grids
        self.ledger = ledger
        self.payment_window = timedelta(minutes=payment_window_minutes)
        self.max_quantity = max_quantity
        self.clock = clock

    @staticmethod
    def is_allowed(status: PaymentStatus, action: LifecycleAction) -> bool:
        return action in _TRANSITIONS[status]

    def ensure_allowed(self, reservation: Reservation, action: LifecycleAction) -> None:
        """
        Raises:
            InvalidTransitionError: `action` is not legal for the reservation's status
        """
        if self.is_allowed(reservation.status, action):
            return
        message = _ACTION_REJECTIONS.get(
            (reservation.status, action), _STATUS_REJECTIONS[reservation.status]
        )
        raise InvalidTransitionError(f'{message} ({reservation.code})')

    def rehydrate(self, reservations: Iterable[Reservation]) -> int:
        """Re-mark seats of loaded pending/paid reservations; returns how many were applied"""
        applied = 0
        for reservation in reservations:
            if not reservation.holds_seats:
                continue
            grid = self.grids.get_or_create(reservation.showing_key)
            self.allocator.mark_unavailable(grid=grid, seat_labels=reservation.seats)
            applied += 1
        return applied

    # ============ Customer transitions ============

    @Logger.io
    def create(
        self,
        *,
        code: str,
        showing: ShowingKey,
        price: int,
        seats: List[str],
        passkey: str,
        quote: Optional[ConcessionQuote] = None,
    ) -> Reservation:
        """New pending reservation over seats the caller already holds"""
        reservation = Reservation.create(
            code=code,
            showing=showing,
            price=price,
            seats=seats,
            passkey=passkey,
            max_quantity=self.max_quantity,
            now=self.clock(),
            payment_window=self.payment_window,
            concession_items=quote.items if quote else None,
            concession_subtotal=quote.subtotal if quote else 0.0,
        )
        Logger.base.info(
            f'🆕 [LIFECYCLE] {code} pending for {showing} seats={reservation.seats} '
            f'due={reservation.payment_deadline}'
        )
        return reservation

    @Logger.io
    def pay(self, reservation: Reservation, outcome: PaymentOutcome) -> bool:
        """
        Apply a charge attempt. A declined outcome leaves the reservation pending.

        Returns:
            True when the reservation became paid
        """
        self.ensure_allowed(reservation, LifecycleAction.PAY)
        if not outcome.success:
            Logger.base.info(f'💳 [LIFECYCLE] {reservation.code} payment declined ({outcome.method})')
            return False
        if not outcome.reference:
            raise DomainError('A successful payment must carry a reference')

        was_pending = reservation.status == PaymentStatus.PENDING
        reservation.status = PaymentStatus.PAID
        reservation.payment_method = outcome.method
        reservation.payment_reference = outcome.reference
        reservation.amount_paid = outcome.amount_paid
        reservation.payment_deadline = None
        reservation.last_modified = outcome.timestamp or self.clock()

        if was_pending and reservation.has_concessions:
            self.ledger.record_sale(reservation.concession_items)

        Logger.base.info(
            f'✅ [LIFECYCLE] {reservation.code} paid {reservation.amount_paid:.2f} '
            f'via {outcome.method} ({outcome.reference})'
        )
        return True

    def expire_if_due(self, reservation: Reservation) -> bool:
        """Expire a pending reservation whose deadline has passed; anything else is left alone"""
        if not reservation.is_past_deadline(self.clock()):
            return False

        self.ensure_allowed(reservation, LifecycleAction.EXPIRE)
        self._release_seats(reservation)
        reservation.status = PaymentStatus.EXPIRED
        reservation.payment_deadline = None
        reservation.last_modified = self.clock()
        Logger.base.info(f'⌛ [LIFECYCLE] {reservation.code} expired, seats {reservation.seats} released')
        return True

    @Logger.io
    def cancel(self, reservation: Reservation) -> Optional[RefundNotice]:
        """
        Release seats and mark cancelled; the caller drops the record afterwards.

        Returns:
            RefundNotice when the reservation had been paid, else None
        """
        self.ensure_allowed(reservation, LifecycleAction.CANCEL)

        refund: Optional[RefundNotice] = None
        if reservation.status == PaymentStatus.PAID:
            refund = self._refund_paid(reservation)

        self._release_seats(reservation)
        reservation.status = PaymentStatus.CANCELLED
        reservation.payment_deadline = None
        reservation.last_modified = self.clock()
        Logger.base.info(f'🗑️ [LIFECYCLE] {reservation.code} cancelled')
        return refund

    # ============ Edits ============

    @Logger.io
    def change_showing(
        self, reservation: Reservation, *, target: ShowingKey, price: int, picker: 'ISeatPicker'
    ) -> bool:
        """
        Move the reservation to another showing, picking the same number of seats there.

        Returns:
            False when `target` is the current showing
        """
        self.ensure_allowed(reservation, LifecycleAction.EDIT_SHOWING)
        if target == reservation.showing_key:
            return False

        current_grid = self.grids.get_or_create(reservation.showing_key)
        self.allocator.release_seats(grid=current_grid, seat_labels=reservation.seats)
        try:
            target_grid = self.grids.get_or_create(target)
            seats = self.allocator.select_seats(
                grid=target_grid, quantity=reservation.quantity, picker=picker
            )
        except Exception:
            # Selection abandoned: the old seats go back to this reservation
            self.allocator.mark_unavailable(grid=current_grid, seat_labels=reservation.seats)
            raise

        previous = reservation.showing_key
        reservation.movie_title = target.movie_title
        reservation.showtime_label = target.showtime_label
        reservation.price = price
        reservation.seats = seats
        reservation.last_modified = self.clock()
        Logger.base.info(f'🔁 [LIFECYCLE] {reservation.code} moved {previous} -> {target} {seats}')
        return True

    @Logger.io
    def change_seats(self, reservation: Reservation, *, picker: 'ISeatPicker') -> bool:
        """
        Re-pick seats in the current showing; current seats may be kept.

        Returns:
            True when the seat set changed
        """
        self.ensure_allowed(reservation, LifecycleAction.EDIT_SEATS)
        grid = self.grids.get_or_create(reservation.showing_key)
        result = self.allocator.reselect_seats(
            grid=grid,
            current_seats=reservation.seats,
            quantity=reservation.quantity,
            picker=picker,
        )
        self.allocator.release_seats(grid=grid, seat_labels=result.leftover)

        changed = sorted(result.selected) != sorted(reservation.seats)
        reservation.seats = result.selected
        if changed:
            reservation.last_modified = self.clock()
            Logger.base.info(f'💺 [LIFECYCLE] {reservation.code} seats now {result.selected}')
        return changed

    @Logger.io
    def change_quantity(
        self,
        reservation: Reservation,
        *,
        new_quantity: int,
        picker: Optional['ISeatPicker'] = None,
        seats_to_release: Sequence[str] = (),
    ) -> bool:
        """
        Grow or shrink the ticket count.

        Growing picks the extra seats through `picker`. Shrinking drops exactly the
        seats named in `seats_to_release`.

        Raises:
            DomainError: Quantity out of range, or wrong number of seats to release
            SeatNotFoundError: A seat to release is not held by this reservation
        """
        self.ensure_allowed(reservation, LifecycleAction.EDIT_QUANTITY)
        if not 1 <= new_quantity <= self.max_quantity:
            raise DomainError(f'Quantity must be between 1 and {self.max_quantity}')
        if new_quantity == reservation.quantity:
            return False

        grid = self.grids.get_or_create(reservation.showing_key)
        if new_quantity > reservation.quantity:
            if picker is None:
                raise DomainError('A seat picker is required to add seats')
            added = self.allocator.select_additional_seats(
                grid=grid, count=new_quantity - reservation.quantity, picker=picker
            )
            reservation.seats = reservation.seats + added
        else:
            dropped = self._validate_seats_to_release(
                reservation, seats_to_release, count=reservation.quantity - new_quantity
            )
            self.allocator.release_seats(grid=grid, seat_labels=dropped)
            reservation.seats = [seat for seat in reservation.seats if seat not in dropped]

        reservation.quantity = new_quantity
        reservation.last_modified = self.clock()
        Logger.base.info(
            f'🔢 [LIFECYCLE] {reservation.code} quantity {new_quantity} seats {reservation.seats}'
        )
        return True

    @Logger.io
    def change_concessions(
        self, reservation: Reservation, *, items: Mapping[str, int]
    ) -> ConcessionQuote:
        """
        Replace the concession order. On a paid reservation the old order is credited
        back and the new one debited.

        Raises:
            NotFoundError / DomainError: From quoting the new order; nothing is changed
        """
        self.ensure_allowed(reservation, LifecycleAction.EDIT_CONCESSIONS)
        paid = reservation.status == PaymentStatus.PAID
        quote = self.ledger.quote(
            items, replacing=reservation.concession_items if paid else None
        )

        if paid:
            self.ledger.restore_sale(reservation.concession_items)
            self.ledger.record_sale(quote.items)

        reservation.concession_items = dict(quote.items)
        reservation.concession_subtotal = quote.subtotal
        reservation.last_modified = self.clock()
        Logger.base.info(
            f'🍿 [LIFECYCLE] {reservation.code} concessions {quote.items} subtotal {quote.subtotal:.2f}'
        )
        return quote

    # ============ Admin overrides ============

    @Logger.io
    def admin_set_paid(
        self,
        reservation: Reservation,
        *,
        reference_factory: Callable[[str], str],
        method: str = '',
    ) -> None:
        """
        Force a reservation to paid. An expired reservation gets its seats back first.

        Raises:
            SeatUnavailableError: Expired reservation whose seat was taken meanwhile
        """
        self.ensure_allowed(reservation, LifecycleAction.ADMIN_SET_PAID)
        if reservation.status == PaymentStatus.EXPIRED:
            self._reclaim_seats(reservation)

        reservation.status = PaymentStatus.PAID
        reservation.payment_method = method.strip() or reservation.payment_method or ADMIN_OVERRIDE_METHOD
        reservation.payment_reference = reservation.payment_reference or reference_factory(
            ADMIN_REFERENCE_PREFIX
        )
        reservation.amount_paid = reservation.grand_total
        reservation.payment_deadline = None
        reservation.last_modified = self.clock()

        if reservation.has_concessions:
            self.ledger.record_sale(reservation.concession_items)

    @Logger.io
    def admin_set_pending(self, reservation: Reservation) -> None:
        """
        Reopen payment with a fresh deadline. A paid reservation gives its stock back; an
        expired one gets its seats back.

        Raises:
            SeatUnavailableError: Expired reservation whose seat was taken meanwhile
        """
        self.ensure_allowed(reservation, LifecycleAction.ADMIN_SET_PENDING)
        if reservation.status == PaymentStatus.EXPIRED:
            self._reclaim_seats(reservation)
        elif reservation.status == PaymentStatus.PAID and reservation.has_concessions:
            self.ledger.restore_sale(reservation.concession_items)

        now = self.clock()
        reservation.status = PaymentStatus.PENDING
        reservation.payment_method = ''
        reservation.payment_reference = ''
        reservation.amount_paid = 0.0
        reservation.payment_deadline = now + self.payment_window
        reservation.last_modified = now

    @Logger.io
    def admin_set_expired(self, reservation: Reservation) -> Optional[RefundNotice]:
        """
        Returns:
            RefundNotice when the reservation had been paid, else None
        """
        self.ensure_allowed(reservation, LifecycleAction.ADMIN_SET_EXPIRED)

        refund: Optional[RefundNotice] = None
        if reservation.status == PaymentStatus.PAID:
            refund = self._refund_paid(reservation)

        self._release_seats(reservation)
        reservation.status = PaymentStatus.EXPIRED
        reservation.payment_deadline = None
        reservation.last_modified = self.clock()
        return refund

    @Logger.io
    def apply_discount(self, reservation: Reservation, *, amount: float) -> float:
        """
        Returns:
            The discount actually applied, clamped to the undiscounted total
        """
        self.ensure_allowed(reservation, LifecycleAction.ADMIN_ADJUST)
        if amount < 0:
            raise DomainError('Discount cannot be negative')

        reservation.discount = round(min(amount, reservation.base_total), 2)
        reservation.last_modified = self.clock()
        return reservation.discount

    @Logger.io
    def update_note(self, reservation: Reservation, *, note: str) -> None:
        """Blank text clears the note"""
        self.ensure_allowed(reservation, LifecycleAction.ADMIN_ADJUST)
        reservation.admin_note = note.strip()
        reservation.last_modified = self.clock()

    # ============ Helpers ============

    def _release_seats(self, reservation: Reservation) -> None:
        grid = self.grids.get_or_create(reservation.showing_key)
        self.allocator.release_seats(grid=grid, seat_labels=reservation.seats)

    def _reclaim_seats(self, reservation: Reservation) -> None:
        grid = self.grids.get_or_create(reservation.showing_key)
        self.allocator.hold_seats(grid=grid, seat_labels=reservation.seats)

    def _refund_paid(self, reservation: Reservation) -> RefundNotice:
        if reservation.has_concessions:
            self.ledger.restore_sale(reservation.concession_items)
        return RefundNotice(
            reservation_code=reservation.code,
            amount=reservation.amount_paid or reservation.grand_total,
            method=reservation.payment_method,
            reference=reservation.payment_reference,
        )

    @staticmethod
    def _validate_seats_to_release(
        reservation: Reservation, seats_to_release: Sequence[str], *, count: int
    ) -> List[str]:
        labels = [normalize_seat_label(label) for label in seats_to_release]
        for label in labels:
            if label not in reservation.seats:
                raise SeatNotFoundError(label)
        if len(set(labels)) != len(labels):
            raise DomainError('Each seat can only be released once')
        if len(labels) != count:
            raise DomainError(f'Select exactly {count} seat(s) to release')
        return labels
