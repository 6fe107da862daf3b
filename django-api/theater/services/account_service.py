"""Account resolution and session lifecycle.

AccountResolver maps a calling context to an account under the configured
policy. AccountService handles sign up, log in and log out.
"""

import logging
import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from theater.conf import AccountPolicy
from theater.domain import AccountId, Buyer, SessionToken
from theater.domain.errors import (
    InvalidCredentialsError,
    UnauthenticatedError,
    ValidationFailedError,
)
from theater.domain.validation import is_valid_email, is_valid_password
from theater.stores.interfaces import AccountStore, SessionStore

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def new_session_token() -> SessionToken:
    return SessionToken(secrets.token_urlsafe(32))


class AccountResolver:
    """Resolve who is acting: a session-bound account or a checkout email."""

    def __init__(
        self,
        sessions: SessionStore,
        policy: AccountPolicy,
        max_age: timedelta,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._sessions = sessions
        self._max_age = max_age
        self._clock = clock
        self.policy = policy

    def resolve_session(self, token: str | None) -> AccountId:
        """Return the account bound to a live session.

        Raises:
            UnauthenticatedError: If the token is missing, unknown or expired.
        """
        if not token:
            raise UnauthenticatedError()
        link = self._sessions.get_session(SessionToken(token))
        if link is None:
            raise UnauthenticatedError()
        if self._clock() - link.created_at > self._max_age:
            logger.info("Rejected expired session for account %s", link.account_id)
            raise UnauthenticatedError()
        return link.account_id

    def is_logged_in(self, token: str | None) -> bool:
        try:
            self.resolve_session(token)
        except UnauthenticatedError:
            return False
        return True

    def resolve_buyer(self, token: str | None, email: str | None = None) -> Buyer:
        """Return the buyer for a checkout under the configured policy.

        Under the email policy no account is touched here; the reservation
        transaction reuses or creates it.

        Raises:
            UnauthenticatedError: Session policy and no live session.
            ValidationFailedError: Email policy and a missing or malformed email.
        """
        if self.policy is AccountPolicy.SESSION:
            return Buyer(account_id=self.resolve_session(token))
        if not email or not is_valid_email(email):
            raise ValidationFailedError({"email": False})
        return Buyer(email=email)


class AccountService:
    """Service for sign up, log in and log out."""

    def __init__(self, accounts: AccountStore, sessions: SessionStore) -> None:
        self._accounts = accounts
        self._sessions = sessions

    def sign_up(self, email: str, password: str) -> SessionToken:
        """Create an account and log it in.

        Raises:
            ValidationFailedError: If the email or password is malformed.
            AccountExistsError: If the email is registered with a password.
        """
        fields = {
            "email": is_valid_email(email),
            "password": is_valid_password(password),
        }
        if not all(fields.values()):
            raise ValidationFailedError(fields)
        token = new_session_token()
        account = self._accounts.create_with_session(email, password, token)
        logger.info("Created account %s", account.id)
        return token

    def log_in(self, email: str, password: str) -> SessionToken:
        """Open a new session for matching credentials.

        Raises:
            ValidationFailedError: If the email is malformed.
            InvalidCredentialsError: If no account matches.
        """
        if not is_valid_email(email):
            raise ValidationFailedError({"email": False})
        account = self._accounts.check_password(email, password)
        if account is None:
            raise InvalidCredentialsError()
        return self.create_session(account.id)

    def create_session(self, account_id: AccountId) -> SessionToken:
        token = new_session_token()
        self._sessions.create_session(token, account_id)
        return token

    def log_out(self, token: str | None) -> None:
        """Delete the session; missing or unknown tokens are ignored."""
        if token:
            self._sessions.delete_session(SessionToken(token))
