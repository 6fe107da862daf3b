"""App settings read from the ``THEATER`` dict in Django settings."""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

from django.conf import settings


class AccountPolicy(Enum):
    """How a checkout is tied to an account."""

    SESSION = "session"
    EMAIL = "email"


DEFAULTS = {
    "ACCOUNT_POLICY": "session",
    "SESSION_COOKIE": "session",
    "SESSION_COOKIE_SALT": "theater.session",
    "SESSION_MAX_AGE": timedelta(days=14),
    "TICKET_MIN_SIZE": 400,
    "TICKET_DARK_COLOR": "#000000",
    "TICKET_LIGHT_COLOR": "#ffffff",
    "CATALOG_CACHE_TIMEOUT": 300,
}


@dataclass(frozen=True)
class TheaterSettings:
    account_policy: AccountPolicy
    session_cookie: str
    session_cookie_salt: str
    session_max_age: timedelta
    ticket_min_size: int
    ticket_dark_color: str
    ticket_light_color: str
    catalog_cache_timeout: int


def get_theater_settings() -> TheaterSettings:
    """Merge user overrides over the defaults.

    Read on every call so ``override_settings`` in tests takes effect.
    """
    values = {**DEFAULTS, **getattr(settings, "THEATER", {})}
    return TheaterSettings(
        account_policy=AccountPolicy(values["ACCOUNT_POLICY"]),
        session_cookie=values["SESSION_COOKIE"],
        session_cookie_salt=values["SESSION_COOKIE_SALT"],
        session_max_age=values["SESSION_MAX_AGE"],
        ticket_min_size=int(values["TICKET_MIN_SIZE"]),
        ticket_dark_color=values["TICKET_DARK_COLOR"],
        ticket_light_color=values["TICKET_LIGHT_COLOR"],
        catalog_cache_timeout=int(values["CATALOG_CACHE_TIMEOUT"]),
    )
