"""
Showing Catalog

Movies and their priced showtimes. Titles and showtime labels match
case-insensitively; the returned ShowingKey always uses the catalog spelling.
"""

from typing import Iterable, List, Optional, Tuple

from src.platform.exception.exceptions import NotFoundError
from src.service.shared_kernel.domain.value_object import ShowingKey
from src.service.ticketing.domain.entity.movie_entity import Movie, Showtime


class ShowingCatalog:
    def __init__(self, movies: Iterable[Movie]) -> None:
        self._movies: List[Movie] = list(movies)

    def movies(self) -> List[Movie]:
        return list(self._movies)

    def find_movie(self, title: str) -> Optional[Movie]:
        wanted = title.strip().casefold()
        return next((movie for movie in self._movies if movie.title.casefold() == wanted), None)

    def resolve(self, *, movie_title: str, showtime_label: str) -> Tuple[ShowingKey, Showtime]:
        """
        Raises:
            NotFoundError: Unknown movie, or the movie has no such showtime
        """
        movie = self.find_movie(movie_title)
        if movie is None:
            raise NotFoundError(f'Movie not found: {movie_title}')

        showtime = movie.find_showtime(showtime_label)
        if showtime is None:
            raise NotFoundError(f'Showtime {showtime_label} not found for {movie.title}')

        return ShowingKey(movie_title=movie.title, showtime_label=showtime.label), showtime
