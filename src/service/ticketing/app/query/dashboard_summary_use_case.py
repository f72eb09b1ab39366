from typing import Self

from dependency_injector.wiring import Provide, inject

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import Clock
from src.service.inventory.domain.inventory_ledger import InventoryLedger
from src.service.shared_kernel.domain.enum import PaymentStatus
from src.service.ticketing.app.dto.dashboard_summary import DashboardSummary
from src.service.ticketing.app.reservation_directory import ReservationDirectory


class DashboardSummaryUseCase:
    def __init__(
        self, *, directory: ReservationDirectory, ledger: InventoryLedger, clock: Clock
    ) -> None:
        self.directory = directory
        self.ledger = ledger
        self.clock = clock

    @classmethod
    @inject
    def depends(
        cls,
        directory: ReservationDirectory = Provide[Container.reservation_directory],
        ledger: InventoryLedger = Provide[Container.inventory_ledger],
        clock: Clock = Provide[Container.clock],
    ) -> Self:
        return cls(directory=directory, ledger=ledger, clock=clock)

    @Logger.io
    def execute(self) -> DashboardSummary:
        """Today = the local calendar day the reservation was created on"""
        today = self.clock().astimezone().date()
        reservations = self.directory.all()

        paid_today = [
            r
            for r in reservations
            if r.status == PaymentStatus.PAID
            and r.created_at is not None
            and r.created_at.astimezone().date() == today
        ]
        return DashboardSummary(
            todays_sales=round(sum(r.grand_total for r in paid_today), 2),
            todays_transactions=len(paid_today),
            pending_payments=sum(1 for r in reservations if r.status == PaymentStatus.PENDING),
            low_stock_items=len(self.ledger.low_stock_items()),
            total_reservations=len(reservations),
        )
