"""
Unit tests for RestoreStateUseCase (startup)
"""

import pytest

from src.service.shared_kernel.domain.enum import PaymentStatus
from src.service.shared_kernel.domain.value_object import ShowingKey
from src.service.ticketing.app.command.restore_state_use_case import RestoreStateUseCase


ENCANTO_1300 = ShowingKey(movie_title='Encanto', showtime_label='1:00 PM')


@pytest.fixture
def use_case(directory, lifecycle, reference_generator, uow) -> RestoreStateUseCase:
    return RestoreStateUseCase(
        directory=directory,
        lifecycle=lifecycle,
        reference_generator=reference_generator,
        uow=uow,
    )


@pytest.fixture
def saved_reservation(lifecycle):
    """Reservation as it would come back from the bookings file: no seats held yet"""

    def _make(code: str, seats):
        return lifecycle.create(
            code=code, showing=ENCANTO_1300, price=200, seats=list(seats), passkey='pw'
        )

    return _make


@pytest.mark.unit
class TestRestoreState:
    def test_startup_rehydrates_seats_and_expires_overdue(
        self,
        use_case,
        saved_reservation,
        reservation_repo,
        lifecycle,
        card_outcome,
        clock,
        grids,
        reference_generator,
    ) -> None:
        """
        Given: A saved pending (overdue), pending (fresh), paid and expired reservation
        When: The process starts
        Then: Pending and paid seats are re-marked, the overdue one expires and is saved,
            the expired one holds nothing
        """
        # Arrange
        overdue = saved_reservation('R-AAAAA1', ['A1'])
        paid = saved_reservation('R-AAAAA2', ['A2'])
        lifecycle.pay(paid, card_outcome(200.0, reference='CARD-424242'))
        expired = saved_reservation('R-AAAAA3', ['A3'])
        expired.status = PaymentStatus.EXPIRED
        expired.payment_deadline = None
        clock.advance(minutes=20)
        fresh = saved_reservation('R-AAAAA4', ['A4'])
        reservation_repo.reservations = [overdue, paid, expired, fresh]

        # Act
        result = use_case.execute()

        # Assert
        assert result.loaded == 4
        assert result.rehydrated == 3
        assert result.swept is True
        assert result.persisted is True
        assert overdue.status == PaymentStatus.EXPIRED
        assert grids.get_or_create(ENCANTO_1300).held_labels() == ['A2', 'A4']
        assert len(reservation_repo.saved) == 1
        assert reference_generator.ensure_unique('CARD-424242') == 'CARD-424242-1'

    def test_clean_startup_does_not_write(
        self, use_case, saved_reservation, reservation_repo
    ) -> None:
        reservation_repo.reservations = [saved_reservation('R-BBBBB1', ['E5'])]

        result = use_case.execute()

        assert result.swept is False
        assert result.persisted is True
        assert reservation_repo.saved == []

    def test_empty_bookings_file(self, use_case) -> None:
        result = use_case.execute()

        assert (result.loaded, result.rehydrated, result.swept) == (0, 0, False)
