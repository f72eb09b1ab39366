"""
Reservation Directory

The in-memory collection of reservations for this process. Loaded once at startup and
saved back as a full snapshot after every change. Expired reservations stay in the
collection; cancelled ones are removed.
"""

import random
import string
from typing import List, Optional

from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.shared_kernel.domain.enum import PaymentStatus
from src.service.ticketing.app.interface.i_reservation_repo import IReservationRepo
from src.service.ticketing.domain.entity.reservation_entity import Reservation
from src.service.ticketing.domain.reservation_lifecycle import ReservationLifecycle


_CODE_ALPHABET = string.ascii_uppercase + string.digits
_MAX_CODE_ATTEMPTS = 1000


class ReservationDirectory:
    def __init__(
        self,
        *,
        repo: IReservationRepo,
        lifecycle: ReservationLifecycle,
        code_prefix: str = 'R-',
        code_length: int = 6,
    ) -> None:
        self.repo = repo
        self.lifecycle = lifecycle
        self.code_prefix = code_prefix
        self.code_length = code_length
        self._reservations: List[Reservation] = []

    def __len__(self) -> int:
        return len(self._reservations)

    @Logger.io
    def load_all(self) -> List[Reservation]:
        self._reservations = list(self.repo.load_reservations())
        Logger.base.info(f'📂 [PERSIST] Loaded {len(self._reservations)} reservation(s)')
        return self.all()

    def save_all(self) -> None:
        """
        Raises:
            PersistenceUnavailableError: Snapshot could not be written
        """
        self.repo.save_reservations(self.all())

    def all(self) -> List[Reservation]:
        return list(self._reservations)

    def pending(self) -> List[Reservation]:
        return [r for r in self._reservations if r.status == PaymentStatus.PENDING]

    def add(self, reservation: Reservation) -> None:
        if self.find_by_id(reservation.code) is not None:
            raise ConflictError(f'Reservation code already exists: {reservation.code}')
        self._reservations.append(reservation)

    def remove(self, reservation: Reservation) -> None:
        self._reservations = [r for r in self._reservations if r is not reservation]

    def find_by_id(self, code: str) -> Optional[Reservation]:
        return next((r for r in self._reservations if r.matches_code(code)), None)

    def find_by_id_and_passkey(self, code: str, passkey: str) -> Optional[Reservation]:
        reservation = self.find_by_id(code)
        if reservation is None or not reservation.check_passkey(passkey):
            return None
        return reservation

    def generate_code(self) -> str:
        for _ in range(_MAX_CODE_ATTEMPTS):
            code = self.code_prefix + ''.join(random.choices(_CODE_ALPHABET, k=self.code_length))
            if self.find_by_id(code) is None:
                return code
        raise ConflictError('Could not generate a unique reservation code')

    def sweep_expired(self) -> bool:
        """
        Expire every pending reservation past its deadline.

        Returns:
            True when at least one reservation changed
        """
        expired = [r.code for r in self.pending() if self.lifecycle.expire_if_due(r)]
        if expired:
            Logger.base.info(f'🧹 [SWEEP] Expired {len(expired)} reservation(s): {expired}')
        return bool(expired)
