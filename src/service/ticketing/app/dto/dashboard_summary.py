import attrs


@attrs.define(frozen=True)
class DashboardSummary:
    todays_sales: float
    todays_transactions: int
    pending_payments: int
    low_stock_items: int
    total_reservations: int
