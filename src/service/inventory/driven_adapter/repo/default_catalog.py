from typing import List, Tuple

from src.service.inventory.domain.entity.concession_item import ConcessionCategory, ConcessionItem


_DEFAULT_MENU: Tuple[Tuple[str, ConcessionCategory, float], ...] = (
    ('Popcorn Regular', ConcessionCategory.FOOD, 85.00),
    ('Popcorn Large', ConcessionCategory.FOOD, 120.00),
    ('Popcorn Paper Bucket', ConcessionCategory.FOOD, 140.00),
    ('Classic Hotdog', ConcessionCategory.FOOD, 95.00),
    ('Chicken Nuggets', ConcessionCategory.FOOD, 140.00),
    ('Classic Fries', ConcessionCategory.FOOD, 60.00),
    ('Cheese Fries', ConcessionCategory.FOOD, 75.00),
    ('BBQ Fries', ConcessionCategory.FOOD, 75.00),
    ('Sour Cream Fries', ConcessionCategory.FOOD, 75.00),
    ('Regular Soda', ConcessionCategory.BEVERAGE, 45.00),
    ('Large Soda', ConcessionCategory.BEVERAGE, 80.00),
    ('Bottled Water', ConcessionCategory.BEVERAGE, 35.00),
    ('Iced Tea', ConcessionCategory.BEVERAGE, 45.00),
    ('Iced Coffee', ConcessionCategory.BEVERAGE, 50.00),
)


def build_default_catalog(*, stock: int, reorder_level: int) -> List[ConcessionItem]:
    return [
        ConcessionItem(
            name=name,
            category=category,
            price=price,
            stock=stock,
            reorder_level=reorder_level,
            total_sold=0,
        )
        for name, category, price in _DEFAULT_MENU
    ]
