"""
Payment Reference Generator

References look like `CASH-483920`. Every reference handed out is remembered for the
life of the process, so a reference is never issued twice.
"""

import random
from typing import Iterable, Optional, Set


class PaymentReferenceGenerator:
    def __init__(self, *, issued: Optional[Iterable[str]] = None) -> None:
        self._issued: Set[str] = {ref.casefold() for ref in issued or () if ref}

    def remember(self, reference: str) -> None:
        if reference:
            self._issued.add(reference.casefold())

    def generate(self, prefix: str) -> str:
        while True:
            reference = f'{prefix.upper()}-{random.randint(100000, 999999)}'
            if reference.casefold() not in self._issued:
                self.remember(reference)
                return reference

    def ensure_unique(self, base: str) -> str:
        """Return `base`, or `base-1`, `base-2`, ... if it was already issued"""
        reference = base
        suffix = 1
        while reference.casefold() in self._issued:
            reference = f'{base}-{suffix}'
            suffix += 1
        self.remember(reference)
        return reference
