"""
Showing Key Value Object

Identifies one screening - a movie at a showtime. Seat grids, price lookups and
reservation-to-grid binding all resolve through this key.
"""

import attrs


def _strip(value: str) -> str:
    return value.strip()


@attrs.define(frozen=True)
class ShowingKey:
    """Showing Key (Value Object)"""

    movie_title: str = attrs.field(converter=_strip)
    showtime_label: str = attrs.field(converter=_strip)

    def __str__(self) -> str:
        return f'{self.movie_title} @ {self.showtime_label}'
