"""Catalog service - read-only movie, showtime and seat queries."""

from datetime import date

from theater.domain import (
    Movie,
    MovieCast,
    MovieId,
    MovieShowtimes,
    Seat,
    Showtime,
    ShowtimeId,
    TheaterId,
)
from theater.domain.errors import (
    MovieNotFoundError,
    SeatNotFoundError,
    ShowtimeNotFoundError,
    TheaterNotFoundError,
)
from theater.stores.interfaces import CatalogStore


class CatalogService:
    """Service for catalog operations."""

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def list_movies(self) -> list[Movie]:
        """Return all movies."""
        return self._store.list_movies()

    def get_movie(self, movie_id: str) -> Movie:
        """Return a movie by ID.

        Raises:
            InvalidRecordIdError: If the movie_id is malformed.
            MovieNotFoundError: If the movie does not exist.
        """
        movie = self._store.get_movie(MovieId.from_string(movie_id))
        if movie is None:
            raise MovieNotFoundError(movie_id)
        return movie

    def get_movie_cast(self, movie: Movie) -> MovieCast:
        """Return the stars, writers, director and actors of a movie."""
        return self._store.get_movie_cast(movie.id)

    def get_showtime(self, showtime_id: str) -> Showtime:
        """Return a showtime by its ``showtime:<uuid>`` record id.

        Raises:
            InvalidRecordIdError: If the showtime_id is malformed.
            ShowtimeNotFoundError: If the showtime does not exist.
        """
        showtime = self._store.get_showtime(ShowtimeId.from_string(showtime_id))
        if showtime is None:
            raise ShowtimeNotFoundError(showtime_id)
        return showtime

    def get_seat(self, showtime_id: str, seat_number: int) -> Seat:
        """Return one seat of a showtime.

        Raises:
            InvalidRecordIdError: If the showtime_id is malformed.
            ShowtimeNotFoundError: If the showtime does not exist.
            SeatNotFoundError: If the showtime has no seat with that number.
        """
        showtime = self.get_showtime(showtime_id)
        seat = self._store.get_seat(showtime.id, seat_number)
        if seat is None:
            raise SeatNotFoundError(showtime_id, seat_number)
        return seat

    def list_seats(self, showtime_id: str) -> list[Seat]:
        """Return the seat map of a showtime, ordered by seat number.

        Raises:
            InvalidRecordIdError: If the showtime_id is malformed.
            ShowtimeNotFoundError: If the showtime does not exist.
        """
        showtime = self.get_showtime(showtime_id)
        return self._store.list_seats(showtime.id)

    def list_showtimes_for_theater_and_day(
        self, theater_id: str, day: date
    ) -> list[Showtime]:
        """Return a theater's showtimes on a day, earliest first.

        Raises:
            InvalidRecordIdError: If the theater_id is malformed.
            TheaterNotFoundError: If the theater does not exist.
        """
        parsed = TheaterId.from_string(theater_id)
        if self._store.get_theater(parsed) is None:
            raise TheaterNotFoundError(theater_id)
        return self._store.list_showtimes_for_theater_and_day(parsed, day)

    def list_movie_showtimes(self) -> list[MovieShowtimes]:
        return self._store.list_movie_showtimes()
