"""Field-format predicates shared by every form in the app.

Card checks are format-only; no payment gateway is involved.
"""

import re

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
EXPIRY_PATTERN = re.compile(r"^(0[1-9]|1[0-2])/[0-9]{2}$")
CARD_NUMBER_PATTERN = re.compile(r"^[0-9]{16}$")
CVV_PATTERN = re.compile(r"^[0-9]{3}$")


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_card_number(card_number: str) -> bool:
    return CARD_NUMBER_PATTERN.fullmatch(card_number) is not None


def is_valid_expiry(expiry: str) -> bool:
    """Accept ``MM/YY`` with a month between 01 and 12."""
    return EXPIRY_PATTERN.fullmatch(expiry) is not None


def is_valid_cvv(cvv: str) -> bool:
    return CVV_PATTERN.fullmatch(cvv) is not None


def is_valid_password(password: str) -> bool:
    return bool(password)


def validate_payment_form(
    card_number: str,
    expiry_date: str,
    cvv: str,
    email: str | None = None,
    email_required: bool = False,
) -> dict[str, bool]:
    """Return the validity flag of every payment form field.

    The email is only checked when it is required or was supplied.
    """
    if email:
        valid_email = is_valid_email(email)
    else:
        valid_email = not email_required
    return {
        "card_number": is_valid_card_number(card_number),
        "expiry_date": is_valid_expiry(expiry_date),
        "cvv": is_valid_cvv(cvv),
        "email": valid_email,
    }
