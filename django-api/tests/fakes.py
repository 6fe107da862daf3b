"""In-memory store doubles for service tests.

They implement the store interfaces with plain dicts so services can be
exercised without a database.
"""

import threading
import uuid
from datetime import UTC, date, datetime

from theater.domain import (
    Account,
    AccountId,
    Buyer,
    Movie,
    MovieCast,
    MovieId,
    MovieShowtimes,
    PaymentDetails,
    PurchaseId,
    Seat,
    SeatId,
    SeatNumber,
    SessionLink,
    SessionToken,
    Showtime,
    ShowtimeId,
    Theater,
    TheaterId,
    TicketRecord,
)
from theater.domain.errors import (
    AccountExistsError,
    AccountNotFoundError,
    SeatNotFoundError,
    SeatUnavailableError,
    ShowtimeNotFoundError,
)
from theater.stores.interfaces import (
    AccountStore,
    CatalogStore,
    ReservationStore,
    SessionStore,
    TicketStore,
)

NOW = datetime(2026, 3, 14, 12, 0, tzinfo=UTC)


def make_movie(name: str = "Dune") -> Movie:
    return Movie(
        id=MovieId(uuid.uuid4()),
        name=name,
        genres=("Sci-Fi",),
        runtime=155,
        tagline="Fear is the mind-killer",
        stars=4.5,
        description="A desert planet.",
        image_url="/img/dune.jpg",
    )


def make_showtime(movie: Movie, theater: Theater, starts_at: datetime) -> Showtime:
    return Showtime(
        id=ShowtimeId(uuid.uuid4()),
        movie_id=movie.id,
        movie_name=movie.name,
        theater_id=theater.id,
        starts_at=starts_at,
    )


class InMemoryCatalogStore(CatalogStore):
    def __init__(self) -> None:
        self.movies: dict[MovieId, Movie] = {}
        self.theaters: dict[TheaterId, Theater] = {}
        self.showtimes: dict[ShowtimeId, Showtime] = {}
        self.seats: dict[ShowtimeId, list[Seat]] = {}
        self.casts: dict[MovieId, MovieCast] = {}

    def add_showtime(self, showtime: Showtime, seat_count: int = 50) -> None:
        self.showtimes[showtime.id] = showtime
        self.seats[showtime.id] = [
            Seat(
                id=SeatId(uuid.uuid4()),
                showtime_id=showtime.id,
                number=SeatNumber(n),
                available=True,
            )
            for n in range(seat_count, 0, -1)
        ]

    def list_movies(self) -> list[Movie]:
        return sorted(self.movies.values(), key=lambda m: m.name)

    def get_movie(self, movie_id: MovieId) -> Movie | None:
        return self.movies.get(movie_id)

    def get_movie_cast(self, movie_id: MovieId) -> MovieCast:
        return self.casts.get(movie_id, MovieCast())

    def get_theater(self, theater_id: TheaterId) -> Theater | None:
        return self.theaters.get(theater_id)

    def get_showtime(self, showtime_id: ShowtimeId) -> Showtime | None:
        return self.showtimes.get(showtime_id)

    def get_seat(self, showtime_id: ShowtimeId, number: int) -> Seat | None:
        return next(
            (s for s in self.seats.get(showtime_id, []) if s.number.value == number), None
        )

    def list_seats(self, showtime_id: ShowtimeId) -> list[Seat]:
        return sorted(self.seats.get(showtime_id, []), key=lambda s: s.number.value)

    def list_showtimes_for_theater_and_day(
        self, theater_id: TheaterId, day: date
    ) -> list[Showtime]:
        return sorted(
            (
                s
                for s in self.showtimes.values()
                if s.theater_id == theater_id and s.starts_at.date() == day
            ),
            key=lambda s: s.starts_at,
        )

    def list_movie_showtimes(self) -> list[MovieShowtimes]:
        return [
            MovieShowtimes(
                movie=movie,
                showtimes=tuple(
                    sorted(
                        (s for s in self.showtimes.values() if s.movie_id == movie.id),
                        key=lambda s: s.starts_at,
                    )
                ),
            )
            for movie in self.list_movies()
        ]


class InMemorySessionStore(SessionStore):
    def __init__(self, clock=lambda: NOW) -> None:
        self.links: dict[str, SessionLink] = {}
        self._clock = clock

    def get_session(self, token: SessionToken) -> SessionLink | None:
        return self.links.get(token.value)

    def create_session(self, token: SessionToken, account_id: AccountId) -> SessionLink:
        link = SessionLink(token=token, account_id=account_id, created_at=self._clock())
        self.links[token.value] = link
        return link

    def delete_session(self, token: SessionToken) -> None:
        self.links.pop(token.value, None)


class InMemoryAccountStore(AccountStore):
    """Accounts keyed by email; a None password marks a checkout-created account."""

    def __init__(self, sessions: InMemorySessionStore) -> None:
        self.accounts: dict[str, tuple[Account, str | None]] = {}
        self._sessions = sessions

    def add(self, email: str, password: str | None) -> Account:
        account = Account(id=AccountId(uuid.uuid4()), email=email, created_at=NOW)
        self.accounts[email] = (account, password)
        return account

    def check_password(self, email: str, password: str) -> Account | None:
        entry = self.accounts.get(email)
        if entry is None or entry[1] is None or entry[1] != password:
            return None
        return entry[0]

    def create_with_session(
        self, email: str, password: str, token: SessionToken
    ) -> Account:
        entry = self.accounts.get(email)
        if entry is None:
            account = self.add(email, password)
        elif entry[1] is not None:
            raise AccountExistsError()
        else:
            account = entry[0]
            self.accounts[email] = (account, password)
        self._sessions.create_session(token, account.id)
        return account


class InMemoryReservationStore(ReservationStore):
    """Seat flags guarded by a lock, so concurrent attempts serialize."""

    def __init__(self, catalog: InMemoryCatalogStore, account_ids=()) -> None:
        self._catalog = catalog
        self._lock = threading.Lock()
        self.available: dict[tuple[ShowtimeId, int], bool] = {
            (showtime_id, seat.number.value): seat.available
            for showtime_id, seats in catalog.seats.items()
            for seat in seats
        }
        self.account_ids: set[AccountId] = set(account_ids)
        self.accounts_by_email: dict[str, AccountId] = {}
        self.purchases: list[tuple[PurchaseId, AccountId, ShowtimeId, int, PaymentDetails]] = []

    def reserve_seat(
        self,
        showtime_id: ShowtimeId,
        seat_number: int,
        buyer: Buyer,
        payment: PaymentDetails,
    ) -> PurchaseId:
        with self._lock:
            if showtime_id not in self._catalog.showtimes:
                raise ShowtimeNotFoundError(str(showtime_id))
            key = (showtime_id, seat_number)
            if key not in self.available:
                raise SeatNotFoundError(str(showtime_id), seat_number)
            if buyer.account_id is not None and buyer.account_id not in self.account_ids:
                raise AccountNotFoundError()
            if not self.available[key]:
                raise SeatUnavailableError(str(showtime_id), seat_number)

            if buyer.account_id is not None:
                account_id = buyer.account_id
            else:
                account_id = self.accounts_by_email.setdefault(
                    buyer.email, AccountId(uuid.uuid4())
                )
            self.available[key] = False
            purchase_id = PurchaseId(uuid.uuid4())
            self.purchases.append((purchase_id, account_id, showtime_id, seat_number, payment))
            return purchase_id


class InMemoryTicketStore(TicketStore):
    def __init__(self) -> None:
        self.records: dict[AccountId, list[TicketRecord]] = {}

    def add(self, account_id: AccountId, record: TicketRecord) -> None:
        self.records.setdefault(account_id, []).append(record)

    def list_tickets(self, account_id: AccountId) -> list[TicketRecord]:
        return sorted(
            self.records.get(account_id, []),
            key=lambda r: (r.starts_at, r.seat_number),
        )
