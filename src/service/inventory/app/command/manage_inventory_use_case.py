from typing import List, Self

import attrs
from dependency_injector.wiring import Provide, inject

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.service.inventory.domain.entity.concession_item import ConcessionItem
from src.service.inventory.domain.inventory_ledger import InventoryLedger


@attrs.define(frozen=True)
class StockChangeResult:
    item: ConcessionItem
    persisted: bool


class ManageInventoryUseCase:
    def __init__(self, *, ledger: InventoryLedger, uow: AbstractUnitOfWork) -> None:
        self.ledger = ledger
        self.uow = uow

    @classmethod
    @inject
    def depends(
        cls,
        ledger: InventoryLedger = Provide[Container.inventory_ledger],
        uow: AbstractUnitOfWork = Provide[Container.unit_of_work],
    ) -> Self:
        return cls(ledger=ledger, uow=uow)

    def list_items(self) -> List[ConcessionItem]:
        return self.ledger.items()

    def low_stock(self) -> List[ConcessionItem]:
        return self.ledger.low_stock_items()

    @Logger.io
    def add_stock(self, *, name: str, quantity: int) -> StockChangeResult:
        item = self.ledger.add_stock(name, quantity)
        persisted = self.uow.commit(reservations=False, catalog=True)
        Logger.base.info(f'📦 [INVENTORY] +{quantity} {item.name}, stock now {item.stock}')
        return StockChangeResult(item=item, persisted=persisted)

    @Logger.io
    def remove_stock(self, *, name: str, quantity: int, reason: str) -> StockChangeResult:
        """
        Raises:
            DomainError: Missing reason, non-positive quantity, or more than current stock
        """
        if not reason.strip():
            raise DomainError('A reason is required to remove stock')

        item = self.ledger.remove_stock(name, quantity)
        persisted = self.uow.commit(reservations=False, catalog=True)
        Logger.base.info(
            f'📦 [INVENTORY] -{quantity} {item.name} ({reason.strip()}), stock now {item.stock}'
        )
        return StockChangeResult(item=item, persisted=persisted)
