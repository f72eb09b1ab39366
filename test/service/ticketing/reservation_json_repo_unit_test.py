"""
Unit tests for ReservationJsonRepoImpl (tmp_path-backed)
"""

from datetime import timedelta
from pathlib import Path

import orjson
import pytest

from src.platform.exception.exceptions import PersistenceUnavailableError
from src.service.shared_kernel.domain.enum import PaymentStatus
from src.service.ticketing.driven_adapter.repo.reservation_json_repo_impl import (
    ReservationJsonRepoImpl,
)


@pytest.mark.unit
class TestReservationJsonRepo:
    def test_missing_file_loads_empty(self, tmp_path: Path) -> None:
        repo = ReservationJsonRepoImpl(path=tmp_path / 'bookings.json')

        assert repo.load_reservations() == []

    def test_corrupt_file_loads_empty(self, tmp_path: Path) -> None:
        path = tmp_path / 'bookings.json'
        path.write_text('[{"code": "R-1",')

        assert ReservationJsonRepoImpl(path=path).load_reservations() == []

    def test_non_list_document_loads_empty(self, tmp_path: Path) -> None:
        path = tmp_path / 'bookings.json'
        path.write_bytes(orjson.dumps({'code': 'R-1'}))

        assert ReservationJsonRepoImpl(path=path).load_reservations() == []

    def test_saved_reservation_loads_back_with_all_fields(
        self, tmp_path: Path, make_reservation, lifecycle, card_outcome
    ) -> None:
        """
        Given: A paid reservation with concessions, discount and note
        When: Saved and loaded through a fresh repo
        Then: Every field round-trips, including timezone-aware timestamps
        """
        # Arrange
        reservation = make_reservation(seats=['C3', 'C4'], concessions={'Iced Tea': 2})
        lifecycle.apply_discount(reservation, amount=50)
        lifecycle.update_note(reservation, note='birthday')
        lifecycle.pay(reservation, card_outcome(reservation.grand_total))
        path = tmp_path / 'bookings.json'

        # Act
        ReservationJsonRepoImpl(path=path).save_reservations([reservation])
        [loaded] = ReservationJsonRepoImpl(path=path).load_reservations()

        # Assert
        assert loaded == reservation
        assert loaded.status == PaymentStatus.PAID
        assert loaded.created_at is not None
        assert loaded.created_at.utcoffset() == timedelta(0)

    def test_invalid_entry_is_skipped(self, tmp_path: Path, make_reservation) -> None:
        path = tmp_path / 'bookings.json'
        repo = ReservationJsonRepoImpl(path=path)
        repo.save_reservations([make_reservation()])
        document = orjson.loads(path.read_bytes())
        document.append({'code': 'R-BROKEN', 'quantity': 'many'})
        path.write_bytes(orjson.dumps(document))

        loaded = repo.load_reservations()

        assert len(loaded) == 1

    def test_rows_with_inconsistent_seats_or_blank_passkey_are_skipped(
        self, tmp_path: Path, make_reservation
    ) -> None:
        """
        Given: A saved file where one row lists 1 seat for quantity 2 and another has no passkey
        When: Loaded
        Then: Only the intact row comes back
        """
        # Arrange
        path = tmp_path / 'bookings.json'
        repo = ReservationJsonRepoImpl(path=path)
        intact = make_reservation(seats=('A1', 'A2'))
        short = make_reservation(seats=('B1', 'B2'))
        unlocked = make_reservation(seats=('C1', 'C2'))
        repo.save_reservations([intact, short, unlocked])
        document = orjson.loads(path.read_bytes())
        document[1]['seats'] = ['B1']
        document[2]['passkey'] = ''
        path.write_bytes(orjson.dumps(document))

        # Act
        loaded = repo.load_reservations()

        # Assert
        assert [r.code for r in loaded] == [intact.code]

    def test_duplicate_seat_labels_are_skipped(self, tmp_path: Path, make_reservation) -> None:
        path = tmp_path / 'bookings.json'
        repo = ReservationJsonRepoImpl(path=path)
        repo.save_reservations([make_reservation()])
        document = orjson.loads(path.read_bytes())
        document[0]['seats'] = ['A1', 'A1']
        path.write_bytes(orjson.dumps(document))

        assert repo.load_reservations() == []

    def test_stored_status_uses_lowercase_names(self, tmp_path: Path, make_reservation) -> None:
        path = tmp_path / 'bookings.json'

        ReservationJsonRepoImpl(path=path).save_reservations([make_reservation()])

        assert orjson.loads(path.read_bytes())[0]['status'] == 'pending'

    def test_write_failure_raises(self, tmp_path: Path, make_reservation) -> None:
        blocker = tmp_path / 'blocker'
        blocker.write_text('')
        repo = ReservationJsonRepoImpl(path=blocker / 'bookings.json')

        with pytest.raises(PersistenceUnavailableError):
            repo.save_reservations([make_reservation()])
