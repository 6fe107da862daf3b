"""Domain error codes for the theater module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    SHOWTIME_NOT_FOUND = "SHOWTIME_NOT_FOUND"
    SEAT_NOT_FOUND = "SEAT_NOT_FOUND"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    MOVIE_NOT_FOUND = "MOVIE_NOT_FOUND"
    THEATER_NOT_FOUND = "THEATER_NOT_FOUND"
    SEAT_UNAVAILABLE = "SEAT_UNAVAILABLE"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    ACCOUNT_EXISTS = "ACCOUNT_EXISTS"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_RECORD_ID = "INVALID_RECORD_ID"
    INVALID_TICKET_ID = "INVALID_TICKET_ID"
    TICKET_RENDER_FAILED = "TICKET_RENDER_FAILED"
    STORE_UNAVAILABLE = "STORE_UNAVAILABLE"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ShowtimeNotFoundError(DomainError):
    """Raised when a showtime does not exist."""

    def __init__(self, showtime_id: str) -> None:
        super().__init__(
            code=ErrorCode.SHOWTIME_NOT_FOUND,
            message="Showtime not found",
        )
        self.showtime_id = showtime_id


class SeatNotFoundError(DomainError):
    """Raised when no seat with the requested number exists in a showtime."""

    def __init__(self, showtime_id: str, seat_number: int) -> None:
        super().__init__(
            code=ErrorCode.SEAT_NOT_FOUND,
            message="Seat not found for showtime",
        )
        self.showtime_id = showtime_id
        self.seat_number = seat_number


class AccountNotFoundError(DomainError):
    """Raised when the buyer account cannot be resolved."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ACCOUNT_NOT_FOUND,
            message="Account not found",
        )


class MovieNotFoundError(DomainError):
    """Raised when a movie does not exist."""

    def __init__(self, movie_id: str) -> None:
        super().__init__(
            code=ErrorCode.MOVIE_NOT_FOUND,
            message="Movie not found",
        )
        self.movie_id = movie_id


class TheaterNotFoundError(DomainError):
    """Raised when a theater does not exist."""

    def __init__(self, theater_id: str) -> None:
        super().__init__(
            code=ErrorCode.THEATER_NOT_FOUND,
            message="Theater not found",
        )
        self.theater_id = theater_id


class SeatUnavailableError(DomainError):
    """Raised when the seat was already taken at transaction time."""

    def __init__(self, showtime_id: str, seat_number: int) -> None:
        super().__init__(
            code=ErrorCode.SEAT_UNAVAILABLE,
            message="Seat is no longer available",
        )
        self.showtime_id = showtime_id
        self.seat_number = seat_number


class UnauthenticatedError(DomainError):
    """Raised when a valid session is required but missing or expired."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.UNAUTHENTICATED,
            message="Login required",
        )


class InvalidCredentialsError(DomainError):
    """Raised when an email/password pair matches no account."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_CREDENTIALS,
            message="Account not found",
        )


class AccountExistsError(DomainError):
    """Raised when signing up with an email that is already registered."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.ACCOUNT_EXISTS,
            message="An account with this email already exists",
        )


class ValidationFailedError(DomainError):
    """Raised when submitted form fields are malformed.

    ``fields`` maps each field name to its validity flag so handlers can
    re-render the form with per-field feedback.
    """

    def __init__(self, fields: dict[str, bool]) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message="Some fields are invalid",
        )
        self.fields = dict(fields)


class InvalidRecordIdError(DomainError):
    """Raised when a structured record id cannot be parsed."""

    def __init__(self, value: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_RECORD_ID,
            message="Invalid record ID format",
        )
        self.value = value


class InvalidTicketIdError(DomainError):
    """Raised when a ticket identifier is empty."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TICKET_ID,
            message="Ticket identifier must not be empty",
        )


class TicketRenderError(DomainError):
    """Raised when an identifier cannot be encoded as a barcode."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.TICKET_RENDER_FAILED,
            message="Ticket could not be rendered",
        )


class StoreUnavailableError(DomainError):
    """Raised when the backing store fails to execute an operation."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.STORE_UNAVAILABLE,
            message="Service temporarily unavailable",
        )
