"""
Seat Grid Registry

In-process store of seat grids, one per showing. Grids are created on first
reference and live for the rest of the process.
"""

from typing import Dict, List, Optional

from src.platform.logging.loguru_io import Logger
from src.service.reservation.domain.entity.seat_grid import SeatGrid
from src.service.shared_kernel.domain.value_object import ShowingKey


class SeatGridRegistry:
    def __init__(self, *, rows: int, cols: int) -> None:
        self.rows = rows
        self.cols = cols
        self._grids: Dict[ShowingKey, SeatGrid] = {}

    def get_or_create(self, key: ShowingKey) -> SeatGrid:
        grid = self._grids.get(key)
        if grid is None:
            grid = SeatGrid(key=key, rows=self.rows, cols=self.cols)
            self._grids[key] = grid
            Logger.base.debug(f'🆕 [SEAT] Created {self.rows}x{self.cols} grid for {key}')
        return grid

    def get(self, key: ShowingKey) -> Optional[SeatGrid]:
        return self._grids.get(key)

    def keys(self) -> List[ShowingKey]:
        return list(self._grids)

    def __contains__(self, key: object) -> bool:
        return key in self._grids

    def __len__(self) -> int:
        return len(self._grids)
