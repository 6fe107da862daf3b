"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from typing import Self
from uuid import UUID

from theater.domain.errors import InvalidRecordIdError


@dataclass(frozen=True)
class RecordId:
    """A ``table:key`` identifier as it travels through URLs.

    Parsed once at the boundary; everything past the handlers works with the
    typed ids below.
    """

    table: str
    key: str

    @classmethod
    def parse(cls, value: str, table: str | None = None) -> Self:
        """Parse ``"table:key"``.

        Raises:
            InvalidRecordIdError: If the value is malformed or names another table.
        """
        kind, sep, key = value.partition(":")
        if not sep or not kind or not key:
            raise InvalidRecordIdError(value)
        if table is not None and kind != table:
            raise InvalidRecordIdError(value)
        return cls(table=kind, key=key)

    def __str__(self) -> str:
        return f"{self.table}:{self.key}"


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except (TypeError, ValueError, AttributeError):
        raise InvalidRecordIdError(str(value)) from None


@dataclass(frozen=True)
class AccountId:
    """Unique identifier for an Account."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=_parse_uuid(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class MovieId:
    """Unique identifier for a Movie."""

    TABLE = "movies"

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Accept either a bare UUID or a ``movies:<uuid>`` record id."""
        if ":" in value:
            value = RecordId.parse(value, table=cls.TABLE).key
        return cls(value=_parse_uuid(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TheaterId:
    """Unique identifier for a Theater."""

    TABLE = "theaters"

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        if ":" in value:
            value = RecordId.parse(value, table=cls.TABLE).key
        return cls(value=_parse_uuid(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class ShowtimeId:
    """Unique identifier for a Showtime."""

    TABLE = "showtime"

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        """Parse a ``showtime:<uuid>`` record id or a bare UUID."""
        if ":" in value:
            value = RecordId.parse(value, table=cls.TABLE).key
        return cls(value=_parse_uuid(value))

    @property
    def record_id(self) -> RecordId:
        return RecordId(table=self.TABLE, key=str(self.value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SeatId:
    """Unique identifier for a Seat."""

    value: UUID

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class PurchaseId:
    """Unique identifier for a Purchase; the value encoded on the ticket."""

    value: UUID

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class SessionToken:
    """Opaque session token carried in the session cookie."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Session token cannot be empty")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class SeatNumber:
    """Positive seat number, unique within a showtime."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 1:
            raise ValueError("Seat number must be positive")


@dataclass(frozen=True)
class PaymentDetails:
    """Card metadata kept with a purchase.

    Only the last four digits and the expiry survive construction; the full
    card number and CVV are never stored.
    """

    card_last4: str
    expiry: str

    @classmethod
    def from_card(cls, card_number: str, expiry: str) -> Self:
        return cls(card_last4=card_number[-4:], expiry=expiry)

    def __post_init__(self) -> None:
        if len(self.card_last4) != 4 or not self.card_last4.isdigit():
            raise ValueError("card_last4 must be four digits")


@dataclass(frozen=True)
class Buyer:
    """Who is paying for a seat.

    Exactly one of ``account_id`` (session-gated checkout) or ``email``
    (email-on-checkout, account created inline when missing) is set.
    """

    account_id: AccountId | None = None
    email: str | None = None

    def __post_init__(self) -> None:
        if (self.account_id is None) == (self.email is None):
            raise ValueError("Buyer needs exactly one of account_id or email")
