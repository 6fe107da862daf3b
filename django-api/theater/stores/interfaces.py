"""Store interfaces (repository pattern).

Stores must be swappable and return domain models.
"""

from abc import ABC, abstractmethod
from datetime import date

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
    SessionLink,
    SessionToken,
    Showtime,
    ShowtimeId,
    Theater,
    TheaterId,
    TicketRecord,
)


class CatalogStore(ABC):
    """Interface for read-only catalog queries."""

    @abstractmethod
    def list_movies(self) -> list[Movie]:
        """Return all movies ordered by name."""
        ...

    @abstractmethod
    def get_movie(self, movie_id: MovieId) -> Movie | None:
        """Return a movie by ID, or None if not found."""
        ...

    @abstractmethod
    def get_movie_cast(self, movie_id: MovieId) -> MovieCast:
        """Return the people credited on a movie; empty lists when none are."""
        ...

    @abstractmethod
    def get_theater(self, theater_id: TheaterId) -> Theater | None:
        """Return a theater by ID, or None if not found."""
        ...

    @abstractmethod
    def get_showtime(self, showtime_id: ShowtimeId) -> Showtime | None:
        """Return a showtime by ID, or None if not found."""
        ...

    @abstractmethod
    def get_seat(self, showtime_id: ShowtimeId, number: int) -> Seat | None:
        """Return a seat of a showtime by its number, or None if not found."""
        ...

    @abstractmethod
    def list_seats(self, showtime_id: ShowtimeId) -> list[Seat]:
        """Return the seats of a showtime, ordered by seat number ascending."""
        ...

    @abstractmethod
    def list_showtimes_for_theater_and_day(
        self, theater_id: TheaterId, day: date
    ) -> list[Showtime]:
        """Return the showtimes of a theater on a day, ordered by time ascending."""
        ...

    @abstractmethod
    def list_movie_showtimes(self) -> list[MovieShowtimes]:
        """Return every movie with its showtimes ordered by time ascending."""
        ...


class AccountStore(ABC):
    """Interface for account persistence operations."""

    @abstractmethod
    def check_password(self, email: str, password: str) -> Account | None:
        """Return the account if the password matches its stored hash."""
        ...

    @abstractmethod
    def create_with_session(
        self, email: str, password: str, token: SessionToken
    ) -> Account:
        """Create an account and a session bound to it in one transaction.

        An account created at checkout has no usable password; signing up
        with its email sets the password instead of creating a new account.

        Raises:
            AccountExistsError: If the email is registered with a password.
        """
        ...


class SessionStore(ABC):
    """Interface for session persistence operations."""

    @abstractmethod
    def get_session(self, token: SessionToken) -> SessionLink | None:
        """Return the account link of a session, or None if the session is unknown."""
        ...

    @abstractmethod
    def create_session(self, token: SessionToken, account_id: AccountId) -> SessionLink:
        """Create a session and link it to an account."""
        ...

    @abstractmethod
    def delete_session(self, token: SessionToken) -> None:
        """Delete a session; unknown tokens are ignored."""
        ...


class ReservationStore(ABC):
    """Interface for the seat reservation transaction."""

    @abstractmethod
    def reserve_seat(
        self,
        showtime_id: ShowtimeId,
        seat_number: int,
        buyer: Buyer,
        payment: PaymentDetails,
    ) -> PurchaseId:
        """Atomically flip a seat to unavailable and record the purchase.

        All effects commit together or not at all. A buyer given by email is
        reused or created inside the same transaction.

        Raises:
            ShowtimeNotFoundError: If the showtime does not exist.
            SeatNotFoundError: If the showtime has no seat with that number.
            AccountNotFoundError: If the buyer account does not exist.
            SeatUnavailableError: If the seat was already taken.
            StoreUnavailableError: If the transaction could not execute.
        """
        ...


class TicketStore(ABC):
    """Interface for reading an account's purchase history."""

    @abstractmethod
    def list_tickets(self, account_id: AccountId) -> list[TicketRecord]:
        """Return the account's purchases ordered by showtime ascending."""
        ...
