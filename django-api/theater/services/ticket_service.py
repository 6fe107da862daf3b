"""Ticket issuing and ticket history.

A ticket is never stored: its QR code is re-derived from the purchase id
whenever it is shown.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

import qrcode
from django.utils import timezone
from qrcode.constants import ERROR_CORRECT_M
from qrcode.exceptions import DataOverflowError
from qrcode.image.svg import SvgPathFillImage

from theater.domain import AccountId, TicketRecord
from theater.domain.errors import (
    InvalidTicketIdError,
    TicketRenderError,
)
from theater.stores.interfaces import TicketStore

SHOWTIME_FORMAT = "%H:%M, %d %b %Y"


def format_showtime(value: datetime) -> str:
    """Format a showtime the way it is displayed (and searched) in local time."""
    return timezone.localtime(value).strftime(SHOWTIME_FORMAT)


class TicketImage(SvgPathFillImage):
    """Single-path QR SVG measured in user units, in a given palette."""

    def __init__(self, *args, dark_color: str, light_color: str, **kwargs) -> None:
        self.background = light_color
        self.QR_PATH_STYLE = {**SvgPathFillImage.QR_PATH_STYLE, "fill": dark_color}
        super().__init__(*args, **kwargs)

    def units(self, pixels, text=True):
        # One box-size pixel is one SVG user unit, not a tenth of a millimetre.
        units = Decimal(pixels)
        return str(units) if text else units


class TicketIssuer:
    """Render identifiers as QR code SVG documents.

    Output depends only on the identifier and the constructor arguments.
    """

    def __init__(
        self,
        min_size: int = 400,
        dark_color: str = "#000000",
        light_color: str = "#ffffff",
        border: int = 4,
    ) -> None:
        self._min_size = min_size
        self._dark_color = dark_color
        self._light_color = light_color
        self._border = border

    def render(self, identifier: str) -> str:
        """Return an SVG QR code encoding exactly ``identifier``.

        Raises:
            InvalidTicketIdError: If the identifier is empty.
            TicketRenderError: If the identifier exceeds the QR data capacity.
        """
        if not identifier:
            raise InvalidTicketIdError()
        code = qrcode.QRCode(
            error_correction=ERROR_CORRECT_M, box_size=1, border=self._border
        )
        code.add_data(identifier)
        try:
            code.make(fit=True)
        except DataOverflowError as exc:
            raise TicketRenderError() from exc

        # Smallest whole box size that reaches min_size, quiet zone included.
        modules = code.modules_count + 2 * self._border
        code.box_size = -(-self._min_size // modules)
        image = code.make_image(
            image_factory=TicketImage,
            dark_color=self._dark_color,
            light_color=self._light_color,
        )
        return image.to_string(encoding="unicode")


@dataclass(frozen=True)
class Ticket:
    """A purchase as shown to its owner, barcode included."""

    id: str
    movie: str
    starts_at: datetime
    seat: int
    svg: str

    @property
    def time(self) -> str:
        return format_showtime(self.starts_at)


class TicketService:
    """Service for listing and re-rendering an account's tickets."""

    def __init__(self, store: TicketStore, issuer: TicketIssuer) -> None:
        self._store = store
        self._issuer = issuer

    def render_ticket(self, identifier: str) -> str:
        """Return the barcode SVG for a purchase identifier.

        Raises:
            InvalidTicketIdError: If the identifier is empty.
            TicketRenderError: If the identifier cannot be encoded.
        """
        return self._issuer.render(identifier)

    def list_tickets(self, account_id: AccountId) -> list[Ticket]:
        """Return every ticket of an account, ordered by showtime."""
        return [self._to_ticket(record) for record in self._store.list_tickets(account_id)]

    def search_tickets(self, account_id: AccountId, query: str) -> list[Ticket]:
        """Return the account's tickets matching a free-text query.

        A ticket matches when the query is contained in the movie name
        (case-insensitive) or the displayed time, equals the seat number, or
        is contained in the purchase id.
        """
        needle = query.strip()
        matches = [
            record
            for record in self._store.list_tickets(account_id)
            if self._matches(record, needle)
        ]
        return [self._to_ticket(record) for record in matches]

    @staticmethod
    def _matches(record: TicketRecord, needle: str) -> bool:
        return (
            needle.lower() in record.movie_name.lower()
            or needle in format_showtime(record.starts_at)
            or needle == str(record.seat_number)
            or needle in str(record.purchase_id)
        )

    def _to_ticket(self, record: TicketRecord) -> Ticket:
        identifier = str(record.purchase_id)
        return Ticket(
            id=identifier,
            movie=record.movie_name,
            starts_at=record.starts_at,
            seat=record.seat_number,
            svg=self._issuer.render(identifier),
        )
