"""
Unit tests for CreateReservationUseCase

Test Focus:
1. prepare() holds seats and prices concessions without touching stock
2. confirm() validates the passkey, stores a pending reservation and saves it
3. Backing out (discard, or a failed execute) gives every seat back
"""

import pytest

from src.platform.exception.exceptions import DomainError, NotFoundError
from src.service.shared_kernel.domain.enum import PaymentStatus
from src.service.ticketing.app.command.create_reservation_use_case import (
    CreateReservationUseCase,
)


@pytest.fixture
def use_case(showing_catalog, ledger, allocator, lifecycle, directory, uow):
    return CreateReservationUseCase(
        catalog=showing_catalog,
        ledger=ledger,
        allocator=allocator,
        lifecycle=lifecycle,
        directory=directory,
        uow=uow,
    )


@pytest.mark.unit
class TestPrepare:
    def test_prepare_holds_seats_and_prices_the_draft(
        self, use_case: CreateReservationUseCase, make_picker, grids, ledger
    ) -> None:
        # Act
        draft = use_case.prepare(
            movie_title='conjuring v',
            showtime_label='3:00 pm',
            quantity=2,
            picker=make_picker('b4', 'B5'),
            concession_items={'Large Soda': 2},
        )

        # Assert
        assert draft.showing.movie_title == 'Conjuring V'
        assert draft.showing.showtime_label == '3:00 PM'
        assert draft.seats == ['B4', 'B5']
        assert draft.total == 860.0
        assert grids.get_or_create(draft.showing).held_labels() == ['B4', 'B5']
        assert ledger.lookup('Large Soda').stock == 100

    def test_unknown_showtime(self, use_case, make_picker) -> None:
        with pytest.raises(NotFoundError, match='Showtime 9:00 PM not found for Encanto'):
            use_case.prepare(
                movie_title='Encanto', showtime_label='9:00 PM', quantity=1, picker=make_picker()
            )

    @pytest.mark.parametrize('quantity', [0, 6])
    def test_quantity_out_of_range_holds_nothing(
        self, use_case, make_picker, grids, showing_catalog, quantity: int
    ) -> None:
        with pytest.raises(DomainError, match='between 1 and 5'):
            use_case.prepare(
                movie_title='Encanto',
                showtime_label='1:00 PM',
                quantity=quantity,
                picker=make_picker('A1'),
            )

        key, _ = showing_catalog.resolve(movie_title='Encanto', showtime_label='1:00 PM')
        assert grids.get_or_create(key).held_labels() == []

    def test_taken_seat_is_rejected_and_prompted_again(
        self, use_case, make_picker, make_reservation
    ) -> None:
        make_reservation(seats=['C1'])
        picker = make_picker('C1', 'C2')

        draft = use_case.prepare(
            movie_title='Heneral Luna', showtime_label='12:30 PM', quantity=1, picker=picker
        )

        assert draft.seats == ['C2']
        assert [label for label, _ in picker.rejected] == ['C1']


@pytest.mark.unit
class TestConfirm:
    def test_confirm_creates_pending_reservation_and_saves(
        self, use_case, make_picker, directory, reservation_repo, clock
    ) -> None:
        draft = use_case.prepare(
            movie_title='Encanto', showtime_label='4:00 PM', quantity=1, picker=make_picker('E8')
        )

        result = use_case.confirm(draft, passkey='pass', passkey_confirmation='pass')

        reservation = result.reservation
        assert result.persisted is True
        assert reservation.status == PaymentStatus.PENDING
        assert reservation.price == 210
        assert reservation.seats == ['E8']
        assert reservation.code.startswith('R-')
        assert directory.find_by_id(reservation.code) is reservation
        assert reservation_repo.saved == [[reservation]]

    def test_mismatched_passkey_keeps_draft_seats(
        self, use_case, make_picker, grids, directory
    ) -> None:
        draft = use_case.prepare(
            movie_title='Encanto', showtime_label='4:00 PM', quantity=1, picker=make_picker('E8')
        )

        with pytest.raises(DomainError, match='Passkeys do not match'):
            use_case.confirm(draft, passkey='pass', passkey_confirmation='Pass')

        assert len(directory) == 0
        assert grids.get_or_create(draft.showing).held_labels() == ['E8']

    def test_save_failure_keeps_reservation_in_memory(
        self, use_case, make_picker, directory, reservation_repo
    ) -> None:
        reservation_repo.fail_on_save = True
        draft = use_case.prepare(
            movie_title='Encanto', showtime_label='4:00 PM', quantity=1, picker=make_picker('A3')
        )

        result = use_case.confirm(draft, passkey='pass', passkey_confirmation='pass')

        assert result.persisted is False
        assert directory.find_by_id(result.reservation.code) is result.reservation

    def test_discard_releases_seats(self, use_case, make_picker, grids) -> None:
        draft = use_case.prepare(
            movie_title='Encanto',
            showtime_label='4:00 PM',
            quantity=2,
            picker=make_picker('D1', 'D2'),
        )

        use_case.discard(draft)

        assert grids.get_or_create(draft.showing).held_labels() == []


@pytest.mark.unit
class TestExecute:
    def test_execute_end_to_end(self, use_case, make_picker, ledger) -> None:
        result = use_case.execute(
            movie_title='Heneral Luna',
            showtime_label='7:30 PM',
            quantity=3,
            picker=make_picker('A1', 'A2', 'A3'),
            passkey='k',
            passkey_confirmation='k',
            concession_items={'Cheese Fries': 1},
        )

        assert result.reservation.grand_total == 885.0
        assert ledger.lookup('Cheese Fries').stock == 100

    def test_empty_passkey_is_rejected_before_any_seat_is_picked(
        self, use_case, make_picker
    ) -> None:
        picker = make_picker('A1')

        with pytest.raises(DomainError, match='Passkey cannot be empty'):
            use_case.execute(
                movie_title='Encanto',
                showtime_label='1:00 PM',
                quantity=1,
                picker=picker,
                passkey='',
                passkey_confirmation='',
            )

        assert picker.prompts == []

    def test_abandoned_seat_selection_releases_partial_holds(
        self, use_case, make_picker, grids, showing_catalog, directory
    ) -> None:
        with pytest.raises(RuntimeError):
            use_case.execute(
                movie_title='Encanto',
                showtime_label='1:00 PM',
                quantity=3,
                picker=make_picker('A1', 'A2'),
                passkey='k',
                passkey_confirmation='k',
            )

        key, _ = showing_catalog.resolve(movie_title='Encanto', showtime_label='1:00 PM')
        assert grids.get_or_create(key).held_labels() == []
        assert len(directory) == 0
