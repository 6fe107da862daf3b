"""API tests for seat selection and checkout.

Run with: pytest tests/test_purchase_flow.py -v
"""

import pytest
from django.urls import reverse

from tests.conftest import VALID_CARD
from theater import models

MOVIE = "Dune"
TIME = "19:30, 14 Mar 2026"


def submit_url(showtime_id: str, seat: int) -> str:
    return reverse(
        "purchase-submit",
        kwargs={"showtime_id": showtime_id, "seat": seat, "movie": MOVIE, "time": TIME},
    )


def seat_row(showtime, number: int) -> models.Seat:
    return models.Seat.objects.get(showtime=showtime, number=number)


@pytest.mark.django_db
class TestSeating:
    """Tests for the session-gated seat map."""

    def test_anonymous_is_sent_to_login(self, api_client, showtime_id):
        response = api_client.get(f"/seating/{showtime_id}")
        assert response.status_code == 302
        assert response["Location"] == "/login"

    def test_seat_map_is_ordered(self, logged_in_client, showtime_id):
        response = logged_in_client.get(f"/seating/{showtime_id}")
        assert response.status_code == 200
        seats = response.json()["seats"]
        assert [s["number"] for s in seats] == list(range(1, 51))
        assert all(s["available"] for s in seats)

    def test_unknown_showtime(self, logged_in_client, showtime):
        response = logged_in_client.get("/seating/showtime:00000000-0000-4000-8000-000000000000")
        assert response.status_code == 404
        assert response.json()["code"] == "SHOWTIME_NOT_FOUND"

    def test_malformed_showtime_id(self, logged_in_client):
        response = logged_in_client.get("/seating/garbage")
        assert response.status_code == 400
        assert response.json() == {
            "code": "INVALID_RECORD_ID",
            "message": "Invalid record ID format",
        }

    def test_seat_confirmation(self, logged_in_client, showtime_id):
        response = logged_in_client.get(f"/seating/{showtime_id}/7")
        assert response.status_code == 200
        body = response.json()
        assert body["seat"] == 7
        assert body["time"] == TIME
        assert body["movie"]["name"] == MOVIE

    def test_confirmation_of_missing_seat(self, logged_in_client, showtime_id):
        response = logged_in_client.get(f"/seating/{showtime_id}/999")
        assert response.status_code == 404
        assert response.json()["code"] == "SEAT_NOT_FOUND"


@pytest.mark.django_db
class TestPurchaseForm:
    def test_form_starts_blank(self, api_client, showtime_id):
        response = api_client.get(f"/purchase/{showtime_id}/7")
        body = response.json()
        assert response.status_code == 200
        assert body["movie"] == MOVIE
        assert body["time"] == TIME
        assert body["card_number"] == ""
        assert body["valid_card_number"] is True

    def test_form_for_missing_seat(self, api_client, showtime_id):
        response = api_client.get(f"/purchase/{showtime_id}/999")
        assert response.status_code == 404
        assert response.json()["code"] == "SEAT_NOT_FOUND"

    def test_form_for_unknown_showtime(self, api_client, showtime):
        response = api_client.get("/purchase/showtime:00000000-0000-4000-8000-000000000000/7")
        assert response.status_code == 404
        assert response.json()["code"] == "SHOWTIME_NOT_FOUND"


@pytest.mark.django_db
class TestCompletePurchase:
    """Tests for POST /purchase/{id}/{seat}/{movie}/{time}."""

    def test_happy_path(self, logged_in_client, showtime, showtime_id, account):
        """The seat is taken, the purchase recorded and a ticket offered."""
        response = logged_in_client.post(submit_url(showtime_id, 7), VALID_CARD)

        assert response.status_code == 302
        purchase = models.Purchase.objects.get()
        complete = reverse(
            "purchase-complete", kwargs={"seat": 7, "movie": MOVIE, "time": TIME}
        )
        assert response["Location"] == f"{complete}?ticket={purchase.id}"
        assert purchase.account == account
        assert purchase.card_last4 == "1111"
        assert seat_row(showtime, 7).available is False

        ticket = logged_in_client.get(response["Location"])
        assert ticket.status_code == 200
        assert ticket.json()["ticket"] == str(purchase.id)
        assert ticket.json()["svg"].startswith("<svg")

    @pytest.mark.parametrize(
        "field,value,flag",
        [
            ("card_number", "411111111111111", "valid_card_number"),
            ("cvv", "12a", "valid_cvv"),
            ("expiry_date", "13/29", "valid_expiry_date"),
        ],
    )
    def test_invalid_form_is_rerendered(
        self, logged_in_client, showtime, showtime_id, field, value, flag
    ):
        """Bad input comes back with flags; nothing is reserved."""
        response = logged_in_client.post(
            submit_url(showtime_id, 7), {**VALID_CARD, field: value}
        )
        assert response.status_code == 200
        body = response.json()
        assert body[flag] is False
        assert body["cvv"] == ""
        assert seat_row(showtime, 7).available is True
        assert not models.Purchase.objects.exists()

    def test_taken_seat_redirects_to_unavailable(self, logged_in_client, showtime, showtime_id):
        logged_in_client.post(submit_url(showtime_id, 7), VALID_CARD)
        response = logged_in_client.post(submit_url(showtime_id, 7), VALID_CARD)
        assert response.status_code == 302
        assert response["Location"] == reverse("purchase-unavailable")
        assert models.Purchase.objects.count() == 1

    def test_anonymous_checkout_is_sent_to_login(self, api_client, showtime, showtime_id):
        response = api_client.post(submit_url(showtime_id, 7), VALID_CARD)
        assert response.status_code == 302
        assert response["Location"] == "/login"
        assert seat_row(showtime, 7).available is True

    def test_tampered_cookie_is_anonymous(self, api_client, showtime_id, account):
        api_client.cookies["session"] = "forged"
        response = api_client.post(submit_url(showtime_id, 7), VALID_CARD)
        assert response["Location"] == "/login"

    def test_unknown_seat(self, logged_in_client, showtime_id):
        response = logged_in_client.post(submit_url(showtime_id, 999), VALID_CARD)
        assert response.status_code == 404
        assert response.json()["code"] == "SEAT_NOT_FOUND"

    def test_email_policy_checkout(self, api_client, settings, showtime, showtime_id):
        """With the email policy a guest checks out and gets an account."""
        settings.THEATER = {"ACCOUNT_POLICY": "email"}
        response = api_client.post(
            submit_url(showtime_id, 7), {**VALID_CARD, "email": "guest@example.com"}
        )
        assert response.status_code == 302
        account = models.Account.objects.get(email="guest@example.com")
        assert account.purchases.get().seat == seat_row(showtime, 7)

    def test_email_policy_requires_email(self, api_client, settings, showtime_id):
        settings.THEATER = {"ACCOUNT_POLICY": "email"}
        response = api_client.post(submit_url(showtime_id, 7), VALID_CARD)
        assert response.status_code == 200
        assert response.json()["valid_email"] is False
        assert not models.Account.objects.exists()


class TestPurchaseComplete:
    def test_missing_ticket(self, api_client):
        response = api_client.get(
            reverse("purchase-complete", kwargs={"seat": 7, "movie": MOVIE, "time": TIME})
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_TICKET_ID"

    def test_unavailable_page(self, api_client):
        response = api_client.get("/purchase/unavailable")
        assert response.status_code == 200
        assert response.json()["available"] is False
