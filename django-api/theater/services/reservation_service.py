"""Reservation service - seat purchase orchestration.

Exclusivity of a seat is the store's job (one transaction per attempt);
this layer validates input and resolves the buyer.
"""

import logging
from dataclasses import dataclass

from theater.conf import AccountPolicy
from theater.domain import Buyer, PaymentDetails, PurchaseId, ShowtimeId
from theater.domain.errors import (
    SeatNotFoundError,
    SeatUnavailableError,
    ValidationFailedError,
)
from theater.domain.validation import validate_payment_form
from theater.services.account_service import AccountResolver
from theater.stores.interfaces import ReservationStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PurchaseForm:
    """Raw checkout fields as submitted."""

    card_number: str
    expiry_date: str
    cvv: str
    email: str = ""


class ReservationService:
    """Service for reserving seats and completing purchases."""

    def __init__(self, store: ReservationStore, resolver: AccountResolver) -> None:
        self._store = store
        self._resolver = resolver

    def reserve_seat(
        self,
        showtime_id: str,
        seat_number: int,
        buyer: Buyer,
        payment: PaymentDetails,
    ) -> PurchaseId:
        """Reserve one seat and record the purchase.

        Not retried: a lost race is final for this attempt.

        Raises:
            InvalidRecordIdError: If the showtime_id is malformed.
            ShowtimeNotFoundError: If the showtime does not exist.
            SeatNotFoundError: If the seat number does not exist in the showtime.
            AccountNotFoundError: If the buyer account does not exist.
            SeatUnavailableError: If the seat is already taken.
            StoreUnavailableError: If the store could not run the transaction.
        """
        parsed = ShowtimeId.from_string(showtime_id)
        if seat_number < 1:
            raise SeatNotFoundError(showtime_id, seat_number)
        try:
            purchase_id = self._store.reserve_seat(parsed, seat_number, buyer, payment)
        except SeatUnavailableError:
            logger.warning("Seat %s of showtime %s already taken", seat_number, parsed)
            raise
        logger.info(
            "Reserved seat %s of showtime %s as purchase %s",
            seat_number,
            parsed,
            purchase_id,
        )
        return purchase_id

    def complete_purchase(
        self,
        showtime_id: str,
        seat_number: int,
        form: PurchaseForm,
        session_token: str | None,
    ) -> PurchaseId:
        """Validate a checkout form, resolve the buyer and reserve the seat.

        Under the session policy the session is checked before the form, so
        an anonymous caller is sent to log in without field feedback.

        Raises:
            UnauthenticatedError: Session policy and no live session.
            ValidationFailedError: If any form field is malformed; carries the
                per-field flags. Nothing is reserved.
            Any error of ``reserve_seat``.
        """
        email_policy = self._resolver.policy is AccountPolicy.EMAIL
        buyer = None if email_policy else self._resolver.resolve_buyer(session_token)

        fields = validate_payment_form(
            form.card_number,
            form.expiry_date,
            form.cvv,
            email=form.email,
            email_required=email_policy,
        )
        if not all(fields.values()):
            raise ValidationFailedError(fields)

        if buyer is None:
            buyer = self._resolver.resolve_buyer(session_token, form.email)
        payment = PaymentDetails.from_card(form.card_number, form.expiry_date)
        return self.reserve_seat(showtime_id, seat_number, buyer, payment)
