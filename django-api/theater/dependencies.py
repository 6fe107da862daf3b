"""Service construction.

Handlers get their services from here; each service receives its stores
explicitly so tests can hand in doubles instead.
"""

from theater.conf import get_theater_settings
from theater.services.account_service import AccountResolver, AccountService
from theater.services.catalog_service import CatalogService
from theater.services.reservation_service import ReservationService
from theater.services.ticket_service import TicketIssuer, TicketService
from theater.stores.django_store import (
    DjangoAccountStore,
    DjangoCatalogStore,
    DjangoReservationStore,
    DjangoSessionStore,
    DjangoTicketStore,
)


def catalog_service() -> CatalogService:
    return CatalogService(DjangoCatalogStore())


def account_resolver() -> AccountResolver:
    conf = get_theater_settings()
    return AccountResolver(
        DjangoSessionStore(),
        policy=conf.account_policy,
        max_age=conf.session_max_age,
    )


def account_service() -> AccountService:
    return AccountService(DjangoAccountStore(), DjangoSessionStore())


def reservation_service() -> ReservationService:
    return ReservationService(DjangoReservationStore(), account_resolver())


def ticket_issuer() -> TicketIssuer:
    conf = get_theater_settings()
    return TicketIssuer(
        min_size=conf.ticket_min_size,
        dark_color=conf.ticket_dark_color,
        light_color=conf.ticket_light_color,
    )


def ticket_service() -> TicketService:
    return TicketService(DjangoTicketStore(), ticket_issuer())
