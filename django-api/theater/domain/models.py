"""Domain models representing persisted state.

These are pure domain objects with no API input rules.
Django ORM models are in theater/models.py (persistence layer).
"""

from dataclasses import dataclass
from datetime import datetime

from theater.domain.value_objects import (
    AccountId,
    MovieId,
    PurchaseId,
    SeatId,
    SeatNumber,
    SessionToken,
    ShowtimeId,
    TheaterId,
)


@dataclass(frozen=True)
class Account:
    """Domain representation of an Account."""

    id: AccountId
    email: str
    created_at: datetime


@dataclass(frozen=True)
class SessionLink:
    """A session token and the account it is bound to."""

    token: SessionToken
    account_id: AccountId
    created_at: datetime


@dataclass(frozen=True)
class Movie:
    """Domain representation of a Movie."""

    id: MovieId
    name: str
    genres: tuple[str, ...]
    runtime: int
    tagline: str
    stars: float
    description: str
    image_url: str


@dataclass(frozen=True)
class CastMember:
    """A performer credited on a movie and the character they play."""

    name: str
    role: str


@dataclass(frozen=True)
class MovieCast:
    """The people credited on a movie, each list in billing order."""

    stars: tuple[CastMember, ...] = ()
    writers: tuple[str, ...] = ()
    director: str | None = None
    actors: tuple[CastMember, ...] = ()


@dataclass(frozen=True)
class Theater:
    """Domain representation of a Theater."""

    id: TheaterId
    name: str


@dataclass(frozen=True)
class Showtime:
    """Domain representation of a Showtime."""

    id: ShowtimeId
    movie_id: MovieId
    movie_name: str
    theater_id: TheaterId
    starts_at: datetime


@dataclass(frozen=True)
class MovieShowtimes:
    """A movie together with its showtimes, ordered by start time."""

    movie: Movie
    showtimes: tuple[Showtime, ...] = ()


@dataclass(frozen=True)
class Seat:
    """Domain representation of a Seat."""

    id: SeatId
    showtime_id: ShowtimeId
    number: SeatNumber
    available: bool


@dataclass(frozen=True)
class TicketRecord:
    """A purchase joined with the showtime details shown on a ticket."""

    purchase_id: PurchaseId
    movie_name: str
    starts_at: datetime
    seat_number: int
