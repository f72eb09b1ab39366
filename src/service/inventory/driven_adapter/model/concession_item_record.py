from pydantic import BaseModel, ConfigDict, Field

from src.service.inventory.domain.entity.concession_item import ConcessionCategory, ConcessionItem


class ConcessionItemRecord(BaseModel):
    """Stored shape of one concession catalog entry"""

    model_config = ConfigDict(extra='ignore')

    name: str = Field(min_length=1)
    category: ConcessionCategory = ConcessionCategory.FOOD
    price: float = Field(ge=0)
    stock: int = Field(ge=0)
    reorder_level: int = Field(ge=0)
    total_sold: int = Field(default=0, ge=0)

    @classmethod
    def from_entity(cls, item: ConcessionItem) -> 'ConcessionItemRecord':
        return cls(
            name=item.name,
            category=item.category,
            price=item.price,
            stock=item.stock,
            reorder_level=item.reorder_level,
            total_sold=item.total_sold,
        )

    def to_entity(self) -> ConcessionItem:
        return ConcessionItem(
            name=self.name,
            category=self.category,
            price=self.price,
            stock=self.stock,
            reorder_level=self.reorder_level,
            total_sold=self.total_sold,
        )
