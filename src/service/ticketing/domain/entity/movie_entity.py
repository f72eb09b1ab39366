from typing import List, Optional

import attrs


def _strip(value: str) -> str:
    return value.strip()


@attrs.define(frozen=True)
class Showtime:
    label: str = attrs.field(converter=_strip)
    price: int = attrs.field()

    @price.validator
    def _check_price(self, attribute: attrs.Attribute, value: int) -> None:
        if value < 0:
            raise ValueError('Showtime price cannot be negative')


@attrs.define
class Movie:
    title: str = attrs.field(converter=_strip)
    showtimes: List[Showtime] = attrs.field(factory=list)

    def find_showtime(self, label: str) -> Optional[Showtime]:
        wanted = label.strip().casefold()
        for showtime in self.showtimes:
            if showtime.label.casefold() == wanted:
                return showtime
        return None
