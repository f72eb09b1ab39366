"""
Unit of Work - saves the in-memory state back to the snapshot files

Architecture:
- Use cases mutate entities in memory first, then call commit()
- commit() writes full snapshots, so a failed save can simply be retried by the next one
- A failed save never rolls the in-memory state back; commit() reports False instead
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING

from src.platform.exception.exceptions import PersistenceUnavailableError
from src.platform.logging.loguru_io import Logger


if TYPE_CHECKING:
    from src.service.inventory.app.interface.i_catalog_repo import ICatalogRepo
    from src.service.inventory.domain.inventory_ledger import InventoryLedger
    from src.service.ticketing.app.reservation_directory import ReservationDirectory


class AbstractUnitOfWork(abc.ABC):
    """
    Abstract Unit of Work

    Usage:
        reservation.do_something()
        persisted = uow.commit(catalog=True)
    """

    def commit(self, *, reservations: bool = True, catalog: bool = False) -> bool:
        """
        Returns:
            True when every requested snapshot was written
        """
        try:
            self._commit(reservations=reservations, catalog=catalog)
        except PersistenceUnavailableError as e:
            Logger.base.warning(f'⚠️ [PERSIST] Changes kept in memory only: {e.message}')
            return False
        return True

    @abc.abstractmethod
    def _commit(self, *, reservations: bool, catalog: bool) -> None:
        raise NotImplementedError


class SnapshotUnitOfWork(AbstractUnitOfWork):
    def __init__(
        self,
        *,
        directory: ReservationDirectory,
        ledger: InventoryLedger,
        catalog_repo: ICatalogRepo,
    ) -> None:
        self.directory = directory
        self.ledger = ledger
        self.catalog_repo = catalog_repo

    def _commit(self, *, reservations: bool, catalog: bool) -> None:
        # Each snapshot is attempted even if the other one failed
        failures: list[PersistenceUnavailableError] = []
        if reservations:
            try:
                self.directory.save_all()
            except PersistenceUnavailableError as e:
                failures.append(e)
        if catalog:
            try:
                self.catalog_repo.save_catalog(self.ledger.items())
            except PersistenceUnavailableError as e:
                failures.append(e)
        if failures:
            raise failures[0]
