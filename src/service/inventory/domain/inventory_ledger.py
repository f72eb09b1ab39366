"""
Inventory Ledger

Stock and cumulative sold counts for concession items. Item names match
case-insensitively. debit/credit never raise: oversell is prevented when an order is
quoted (stock-aware cap), not when the sale is booked.
"""

from typing import Dict, Iterable, List, Mapping, Optional

import attrs

from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.inventory.domain.entity.concession_item import ConcessionItem


def _key(name: str) -> str:
    return name.strip().casefold()


@attrs.define
class ConcessionQuote:
    """A priced concession order - item names use the catalog spelling"""

    items: Dict[str, int]
    subtotal: float


class InventoryLedger:
    def __init__(self, items: Iterable[ConcessionItem]) -> None:
        self._items: Dict[str, ConcessionItem] = {}
        for item in items:
            if _key(item.name) in self._items:
                Logger.base.warning(f'⚠️ [INVENTORY] Duplicate catalog item ignored: {item.name}')
                continue
            self._items[_key(item.name)] = item

    def items(self) -> List[ConcessionItem]:
        return list(self._items.values())

    def lookup(self, name: str) -> Optional[ConcessionItem]:
        return self._items.get(_key(name))

    def debit(self, name: str, quantity: int) -> None:
        item = self.lookup(name)
        if item is None:
            return
        quantity = max(0, quantity)
        item.stock = max(0, item.stock - quantity)
        item.total_sold += quantity

    def credit(self, name: str, quantity: int) -> None:
        item = self.lookup(name)
        if item is None:
            return
        quantity = max(0, quantity)
        item.stock += quantity
        item.total_sold = max(0, item.total_sold - quantity)

    def record_sale(self, items: Mapping[str, int]) -> None:
        for name, quantity in items.items():
            self.debit(name, quantity)
        if items:
            Logger.base.info(f'📦 [INVENTORY] Sale recorded: {dict(items)}')

    def restore_sale(self, items: Mapping[str, int]) -> None:
        for name, quantity in items.items():
            self.credit(name, quantity)
        if items:
            Logger.base.info(f'↩️ [INVENTORY] Sale restored: {dict(items)}')

    def low_stock_items(self) -> List[ConcessionItem]:
        return [item for item in self._items.values() if item.is_low_stock]

    @Logger.io
    def quote(
        self, items: Mapping[str, int], *, replacing: Optional[Mapping[str, int]] = None
    ) -> ConcessionQuote:
        """
        Price a concession order.

        Each item may take at most `stock - 1` units so one always stays on the shelf.
        `replacing` is an already-debited order this one will replace; its units count
        as back in stock for the cap.

        Raises:
            NotFoundError: Unknown item
            DomainError: Negative count, or count above the stock cap
        """
        returned: Dict[str, int] = {}
        for name, qty in (replacing or {}).items():
            returned[_key(name)] = returned.get(_key(name), 0) + max(0, qty)
        priced: Dict[str, int] = {}
        subtotal = 0.0

        for name, quantity in items.items():
            item = self.lookup(name)
            if item is None:
                raise NotFoundError(f'Concession item not found: {name}')
            if quantity < 0:
                raise DomainError(f'Quantity for {item.name} cannot be negative')
            if quantity == 0:
                continue

            # Same item under differently cased names counts as one line
            ordered = priced.get(item.name, 0) + quantity
            available = item.stock + returned.get(_key(name), 0)
            max_order = max(0, available - 1)
            if ordered > max_order:
                raise DomainError(
                    f'Maximum order for {item.name}: {max_order} (must keep at least 1 in stock)'
                )

            priced[item.name] = ordered
            subtotal += item.price * quantity

        return ConcessionQuote(items=priced, subtotal=round(subtotal, 2))

    @Logger.io
    def add_stock(self, name: str, quantity: int) -> ConcessionItem:
        item = self._require(name)
        if quantity <= 0:
            raise DomainError('Quantity must be a positive number')
        item.stock += quantity
        return item

    @Logger.io
    def remove_stock(self, name: str, quantity: int) -> ConcessionItem:
        item = self._require(name)
        if quantity <= 0:
            raise DomainError('Quantity must be a positive number')
        if quantity > item.stock:
            raise DomainError('Cannot remove more than current stock')
        item.stock -= quantity
        return item

    def _require(self, name: str) -> ConcessionItem:
        item = self.lookup(name)
        if item is None:
            raise NotFoundError(f'Concession item not found: {name}')
        return item
