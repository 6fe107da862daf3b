from theater.domain.models import (
    Account,
    CastMember,
    Movie,
    MovieCast,
    MovieShowtimes,
    Seat,
    SessionLink,
    Showtime,
    Theater,
    TicketRecord,
)
from theater.domain.value_objects import (
    AccountId,
    Buyer,
    MovieId,
    PaymentDetails,
    PurchaseId,
    RecordId,
    SeatId,
    SeatNumber,
    SessionToken,
    ShowtimeId,
    TheaterId,
)

__all__ = [
    "Account",
    "CastMember",
    "Movie",
    "MovieCast",
    "MovieShowtimes",
    "Seat",
    "SessionLink",
    "Showtime",
    "Theater",
    "TicketRecord",
    "AccountId",
    "Buyer",
    "MovieId",
    "PaymentDetails",
    "PurchaseId",
    "RecordId",
    "SeatId",
    "SeatNumber",
    "SessionToken",
    "ShowtimeId",
    "TheaterId",
]
