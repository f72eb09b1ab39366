from enum import StrEnum

import attrs


class ConcessionCategory(StrEnum):
    FOOD = 'Food'
    BEVERAGE = 'Beverage'


@attrs.define
class ConcessionItem:
    name: str
    category: ConcessionCategory
    price: float
    stock: int
    reorder_level: int
    total_sold: int = 0

    @property
    def is_low_stock(self) -> bool:
        return self.stock < self.reorder_level
