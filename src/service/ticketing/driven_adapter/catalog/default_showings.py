from src.service.ticketing.domain.entity.movie_entity import Movie, Showtime
from src.service.ticketing.domain.showing_catalog import ShowingCatalog


def build_default_showing_catalog() -> ShowingCatalog:
    return ShowingCatalog(
        [
            Movie(
                title='Heneral Luna',
                showtimes=[
                    Showtime(label='12:30 PM', price=250),
                    Showtime(label='4:00 PM', price=260),
                    Showtime(label='7:30 PM', price=270),
                ],
            ),
            Movie(
                title='Conjuring V',
                showtimes=[
                    Showtime(label='3:00 AM', price=300),
                    Showtime(label='3:00 PM', price=350),
                ],
            ),
            Movie(
                title='Encanto',
                showtimes=[
                    Showtime(label='1:00 PM', price=200),
                    Showtime(label='4:00 PM', price=210),
                ],
            ),
        ]
    )
