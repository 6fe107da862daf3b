"""Django ORM implementations of the theater stores.

Every method converts ORM rows to domain models before returning, and
database failures surface as StoreUnavailableError.
"""

from datetime import date
from functools import wraps

from django.contrib.auth.hashers import check_password, is_password_usable, make_password
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Prefetch
from django.utils import timezone

from theater import models
from theater.domain import (
    Account,
    AccountId,
    Buyer,
    CastMember,
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
    StoreUnavailableError,
)
from theater.stores.interfaces import (
    AccountStore,
    CatalogStore,
    ReservationStore,
    SessionStore,
    TicketStore,
)


def translate_db_errors(method):
    """Re-raise driver and transaction failures as StoreUnavailableError."""

    @wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except DatabaseError as exc:
            raise StoreUnavailableError() from exc

    return wrapper


def _to_movie(row: models.Movie) -> Movie:
    return Movie(
        id=MovieId(row.id),
        name=row.name,
        genres=tuple(row.genres or ()),
        runtime=row.runtime,
        tagline=row.tagline,
        stars=row.stars,
        description=row.description,
        image_url=row.image_url,
    )


def _to_cast(credits: list[models.Credit]) -> tuple[CastMember, ...]:
    return tuple(CastMember(name=c.person.name, role=c.role) for c in credits)


def _to_showtime(row: models.Showtime) -> Showtime:
    return Showtime(
        id=ShowtimeId(row.id),
        movie_id=MovieId(row.movie_id),
        movie_name=row.movie.name,
        theater_id=TheaterId(row.theater_id),
        starts_at=row.starts_at,
    )


def _to_seat(row: models.Seat) -> Seat:
    return Seat(
        id=SeatId(row.id),
        showtime_id=ShowtimeId(row.showtime_id),
        number=SeatNumber(row.number),
        available=row.available,
    )


def _to_account(row: models.Account) -> Account:
    return Account(id=AccountId(row.id), email=row.email, created_at=row.created_at)


def _to_ticket(row: models.Purchase) -> TicketRecord:
    showtime = row.seat.showtime
    return TicketRecord(
        purchase_id=PurchaseId(row.id),
        movie_name=showtime.movie.name,
        starts_at=showtime.starts_at,
        seat_number=row.seat.number,
    )


class DjangoCatalogStore(CatalogStore):
    """Catalog reads backed by the Django ORM."""

    @translate_db_errors
    def list_movies(self) -> list[Movie]:
        return [_to_movie(row) for row in models.Movie.objects.order_by("name")]

    @translate_db_errors
    def get_movie(self, movie_id: MovieId) -> Movie | None:
        row = models.Movie.objects.filter(pk=movie_id.value).first()
        return _to_movie(row) if row else None

    @translate_db_errors
    def get_movie_cast(self, movie_id: MovieId) -> MovieCast:
        credits = (
            models.Credit.objects.select_related("person")
            .filter(movie_id=movie_id.value)
            .order_by("position")
        )
        by_kind: dict[str, list[models.Credit]] = {}
        for credit in credits:
            by_kind.setdefault(credit.kind, []).append(credit)

        kind = models.Credit.Kind
        writers = by_kind.get(kind.WRITER.value, [])
        directors = by_kind.get(kind.DIRECTOR.value, [])
        return MovieCast(
            stars=_to_cast(by_kind.get(kind.STAR.value, [])),
            writers=tuple(c.person.name for c in writers),
            director=directors[0].person.name if directors else None,
            actors=_to_cast(by_kind.get(kind.ACTOR.value, [])),
        )

    @translate_db_errors
    def get_theater(self, theater_id: TheaterId) -> Theater | None:
        row = models.Theater.objects.filter(pk=theater_id.value).first()
        return Theater(id=TheaterId(row.id), name=row.name) if row else None

    @translate_db_errors
    def get_showtime(self, showtime_id: ShowtimeId) -> Showtime | None:
        row = (
            models.Showtime.objects.select_related("movie")
            .filter(pk=showtime_id.value)
            .first()
        )
        return _to_showtime(row) if row else None

    @translate_db_errors
    def get_seat(self, showtime_id: ShowtimeId, number: int) -> Seat | None:
        row = models.Seat.objects.filter(
            showtime_id=showtime_id.value, number=number
        ).first()
        return _to_seat(row) if row else None

    @translate_db_errors
    def list_seats(self, showtime_id: ShowtimeId) -> list[Seat]:
        rows = models.Seat.objects.filter(showtime_id=showtime_id.value).order_by(
            "number"
        )
        return [_to_seat(row) for row in rows]

    @translate_db_errors
    def list_showtimes_for_theater_and_day(
        self, theater_id: TheaterId, day: date
    ) -> list[Showtime]:
        rows = (
            models.Showtime.objects.select_related("movie")
            .filter(theater_id=theater_id.value, starts_at__date=day)
            .order_by("starts_at")
        )
        return [_to_showtime(row) for row in rows]

    @translate_db_errors
    def list_movie_showtimes(self) -> list[MovieShowtimes]:
        showtimes = models.Showtime.objects.select_related("movie").order_by(
            "starts_at"
        )
        rows = models.Movie.objects.order_by("name").prefetch_related(
            Prefetch("showtimes", queryset=showtimes)
        )
        return [
            MovieShowtimes(
                movie=_to_movie(row),
                showtimes=tuple(_to_showtime(s) for s in row.showtimes.all()),
            )
            for row in rows
        ]


class DjangoAccountStore(AccountStore):
    """Account persistence backed by the Django ORM."""

    @translate_db_errors
    def check_password(self, email: str, password: str) -> Account | None:
        row = models.Account.objects.filter(email=email).first()
        if row is None or not check_password(password, row.password):
            return None
        return _to_account(row)

    @translate_db_errors
    def create_with_session(
        self, email: str, password: str, token: SessionToken
    ) -> Account:
        try:
            with transaction.atomic():
                row = models.Account.objects.select_for_update().filter(email=email).first()
                if row is None:
                    row = models.Account.objects.create(
                        email=email, password=make_password(password)
                    )
                elif is_password_usable(row.password):
                    raise AccountExistsError()
                else:
                    # Claim an account opened by an email checkout.
                    row.password = make_password(password)
                    row.save(update_fields=["password"])
                session = models.Session.objects.create(token=token.value)
                models.AccountSession.objects.create(
                    session=session, account=row, created_at=timezone.now()
                )
        except IntegrityError as exc:
            raise AccountExistsError() from exc
        return _to_account(row)


class DjangoSessionStore(SessionStore):
    """Session persistence backed by the Django ORM."""

    @translate_db_errors
    def get_session(self, token: SessionToken) -> SessionLink | None:
        link = models.AccountSession.objects.filter(session_id=token.value).first()
        if link is None:
            return None
        return SessionLink(
            token=token,
            account_id=AccountId(link.account_id),
            created_at=link.created_at,
        )

    @translate_db_errors
    def create_session(self, token: SessionToken, account_id: AccountId) -> SessionLink:
        with transaction.atomic():
            session = models.Session.objects.create(token=token.value)
            link = models.AccountSession.objects.create(
                session=session,
                account_id=account_id.value,
                created_at=timezone.now(),
            )
        return SessionLink(token=token, account_id=account_id, created_at=link.created_at)

    @translate_db_errors
    def delete_session(self, token: SessionToken) -> None:
        models.Session.objects.filter(pk=token.value).delete()


class DjangoReservationStore(ReservationStore):
    """Seat reservation as a single database transaction.

    The availability flip is a conditional UPDATE and the first write of the
    transaction, so the loser of a race sees zero rows changed. On PostgreSQL
    the seat row is also locked with SELECT ... FOR UPDATE; on SQLite the
    IMMEDIATE transaction mode serializes writers at BEGIN. The one-to-one
    purchase/seat constraint is the last guard.
    """

    @translate_db_errors
    def reserve_seat(
        self,
        showtime_id: ShowtimeId,
        seat_number: int,
        buyer: Buyer,
        payment: PaymentDetails,
    ) -> PurchaseId:
        with transaction.atomic():
            if not models.Showtime.objects.filter(pk=showtime_id.value).exists():
                raise ShowtimeNotFoundError(str(showtime_id))

            seat = (
                models.Seat.objects.select_for_update()
                .filter(showtime_id=showtime_id.value, number=seat_number)
                .first()
            )
            if seat is None:
                raise SeatNotFoundError(str(showtime_id), seat_number)

            claimed = models.Seat.objects.filter(pk=seat.pk, available=True).update(
                available=False
            )
            if claimed != 1:
                raise SeatUnavailableError(str(showtime_id), seat_number)

            # Rolled back with the flip if the buyer cannot be resolved.
            account = self._resolve_buyer(buyer)

            try:
                with transaction.atomic():
                    purchase = models.Purchase.objects.create(
                        account=account,
                        seat=seat,
                        purchased_at=timezone.now(),
                        card_last4=payment.card_last4,
                        card_expiry=payment.expiry,
                    )
            except IntegrityError as exc:
                raise SeatUnavailableError(str(showtime_id), seat_number) from exc

        return PurchaseId(purchase.id)

    def _resolve_buyer(self, buyer: Buyer) -> models.Account:
        if buyer.account_id is not None:
            account = models.Account.objects.filter(pk=buyer.account_id.value).first()
            if account is None:
                raise AccountNotFoundError()
            return account
        account, _ = models.Account.objects.get_or_create(
            email=buyer.email, defaults={"password": make_password(None)}
        )
        return account


class DjangoTicketStore(TicketStore):
    """Purchase history reads backed by the Django ORM."""

    @translate_db_errors
    def list_tickets(self, account_id: AccountId) -> list[TicketRecord]:
        rows = (
            models.Purchase.objects.select_related("seat__showtime__movie")
            .filter(account_id=account_id.value)
            .order_by("seat__showtime__starts_at", "seat__number")
        )
        return [_to_ticket(row) for row in rows]
