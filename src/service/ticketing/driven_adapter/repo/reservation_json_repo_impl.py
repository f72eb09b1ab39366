from pathlib import Path
from typing import List

from pydantic import ValidationError

from src.platform.logging.loguru_io import Logger
from src.platform.storage.json_snapshot import CorruptSnapshotError, JsonSnapshotFile
from src.service.ticketing.app.interface.i_reservation_repo import IReservationRepo
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.driven_adapter.model.reservation_record import ReservationRecord


class ReservationJsonRepoImpl(IReservationRepo):
    def __init__(self, *, path: Path) -> None:
        self._file = JsonSnapshotFile(path)

    @Logger.io
    def load_reservations(self) -> List[Reservation]:
        try:
            document = self._file.read()
        except CorruptSnapshotError as e:
            Logger.base.warning(f'⚠️ [PERSIST] Bookings file unreadable, starting empty: {e}')
            return []

        if document is None:
            return []
        if not isinstance(document, list):
            Logger.base.warning('⚠️ [PERSIST] Bookings file is not a list, starting empty')
            return []

        reservations: List[Reservation] = []
        for index, raw in enumerate(document):
            try:
                reservations.append(ReservationRecord.model_validate(raw).to_entity())
            except ValidationError as e:
                Logger.base.warning(
                    f'⚠️ [PERSIST] Skipping invalid booking #{index}: {e.error_count()} error(s)'
                )
        return reservations

    def save_reservations(self, reservations: List[Reservation]) -> None:
        self._file.write(
            [ReservationRecord.from_entity(r).model_dump(mode='json') for r in reservations]
        )
