from pathlib import Path
from typing import List

from pydantic import TypeAdapter, ValidationError

from src.platform.exception.exceptions import PersistenceUnavailableError
from src.platform.logging.loguru_io import Logger
from src.platform.storage.json_snapshot import CorruptSnapshotError, JsonSnapshotFile
from src.service.inventory.app.interface.i_catalog_repo import ICatalogRepo
from src.service.inventory.domain.entity.concession_item import ConcessionItem
from src.service.inventory.driven_adapter.model.concession_item_record import (
    ConcessionItemRecord,
)
from src.service.inventory.driven_adapter.repo.default_catalog import build_default_catalog


_RECORDS = TypeAdapter(List[ConcessionItemRecord])


class CatalogJsonRepoImpl(ICatalogRepo):
    def __init__(self, *, path: Path, default_stock: int, default_reorder_level: int) -> None:
        self._file = JsonSnapshotFile(path)
        self.default_stock = default_stock
        self.default_reorder_level = default_reorder_level

    @Logger.io
    def load_catalog(self) -> List[ConcessionItem]:
        try:
            document = self._file.read()
            if document is not None:
                return [record.to_entity() for record in _RECORDS.validate_python(document)]
        except (CorruptSnapshotError, ValidationError) as e:
            Logger.base.warning(f'⚠️ [PERSIST] Inventory file unreadable, rebuilding default: {e}')

        items = build_default_catalog(
            stock=self.default_stock, reorder_level=self.default_reorder_level
        )
        try:
            self.save_catalog(items)
        except PersistenceUnavailableError as e:
            Logger.base.warning(f'⚠️ [PERSIST] Default inventory kept in memory only: {e.message}')
        return items

    def save_catalog(self, items: List[ConcessionItem]) -> None:
        self._file.write(
            [ConcessionItemRecord.from_entity(item).model_dump(mode='json') for item in items]
        )
