from abc import ABC, abstractmethod
from typing import List

from src.service.inventory.domain.entity.concession_item import ConcessionItem


class ICatalogRepo(ABC):
    @abstractmethod
    def load_catalog(self) -> List[ConcessionItem]:
        """Load the full catalog; creates the default catalog when none exists"""
        pass

    @abstractmethod
    def save_catalog(self, items: List[ConcessionItem]) -> None:
        """
        Overwrite the stored catalog with a full snapshot

        Raises:
            PersistenceUnavailableError: Storage cannot be written
        """
        pass
