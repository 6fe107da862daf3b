"""Session cookie plumbing.

The token travels in a signed, HttpOnly cookie; the session itself lives in
the session store.
"""

from django.conf import settings
from django.http import HttpResponse

from theater.conf import get_theater_settings
from theater.domain import SessionToken


def read_session_token(request) -> str | None:
    """Return the session token, or None when absent or tampered with."""
    conf = get_theater_settings()
    return request.get_signed_cookie(
        conf.session_cookie, default=None, salt=conf.session_cookie_salt
    )


def set_session_cookie(response: HttpResponse, token: SessionToken) -> None:
    conf = get_theater_settings()
    response.set_signed_cookie(
        conf.session_cookie,
        token.value,
        salt=conf.session_cookie_salt,
        max_age=int(conf.session_max_age.total_seconds()),
        httponly=True,
        samesite="Lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )


def clear_session_cookie(response: HttpResponse) -> None:
    response.delete_cookie(get_theater_settings().session_cookie, samesite="Lax")
