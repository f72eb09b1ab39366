"""
Seat Label Value Object

Seat labels are a row letter followed by a 1-based column number, e.g. "A1", "E8".
Reservations keep seats as plain label strings; this object builds them.
"""

import string

import attrs


@attrs.define(frozen=True)
class SeatLabel:
    """Seat Label (Value Object)"""

    row: str
    column: int

    @property
    def label(self) -> str:
        return f'{self.row}{self.column}'

    @classmethod
    def build(cls, *, row_index: int, column: int) -> 'SeatLabel':
        """Create from a 0-based row index and 1-based column"""
        return cls(row=string.ascii_uppercase[row_index], column=column)


def normalize_seat_label(label: str) -> str:
    """User input such as " a1 " -> "A1" """
    return label.strip().upper()
