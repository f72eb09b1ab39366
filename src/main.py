"""
Cinema Booking System - process entry point

bootstrap() wires dependency injection and restores the saved state: concession
catalog, reservations, seat holds, overdue expiry. Front-ends call it once before
driving the use cases.
"""

from src.platform.config.di import Container, container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.service.ticketing.app.command.restore_state_use_case import RestoreStateUseCase
from src.service.ticketing.app.dto.restore_state_result import RestoreStateResult
from src.service.ticketing.app.query.dashboard_summary_use_case import DashboardSummaryUseCase


def bootstrap(di_container: Container = container) -> RestoreStateResult:
    Logger.base.info('🚀 [Cinema Booking] Starting up...')

    di_container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Cinema Booking] Dependency injection wired')

    ledger = di_container.inventory_ledger()
    Logger.base.info(f'🍿 [Cinema Booking] {len(ledger.items())} concession item(s) loaded')

    return RestoreStateUseCase.depends().execute()


def main() -> None:
    result = bootstrap()
    summary = DashboardSummaryUseCase.depends().execute()
    Logger.base.info(
        f'📊 [Cinema Booking] reservations={summary.total_reservations} '
        f'pending={summary.pending_payments} today_sales={summary.todays_sales:.2f} '
        f'({summary.todays_transactions} paid) low_stock={summary.low_stock_items} '
        f'persisted={result.persisted}'
    )


if __name__ == '__main__':
    main()
