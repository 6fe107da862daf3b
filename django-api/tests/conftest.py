"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime

import pytest
from django.contrib.auth.hashers import make_password
from rest_framework.test import APIClient

from theater import models

SEAT_COUNT = 50
PASSWORD = "correct horse"
VALID_CARD = {
    "card_number": "4111111111111111",
    "expiry_date": "12/29",
    "cvv": "123",
}


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def movie(db) -> models.Movie:
    return models.Movie.objects.create(
        name="Dune",
        genres=["Sci-Fi", "Adventure"],
        runtime=155,
        tagline="Fear is the mind-killer",
        stars=4.5,
        description="A desert planet and the spice.",
        image_url="/img/dune.jpg",
    )


@pytest.fixture
def theater(db) -> models.Theater:
    return models.Theater.objects.create(name="Screen 1")


@pytest.fixture
def showtime(movie, theater) -> models.Showtime:
    """A showtime with seats 1..50, inserted highest number first."""
    row = models.Showtime.objects.create(
        movie=movie,
        theater=theater,
        starts_at=datetime(2026, 3, 14, 19, 30, tzinfo=UTC),
    )
    models.Seat.objects.bulk_create(
        models.Seat(showtime=row, number=n) for n in range(SEAT_COUNT, 0, -1)
    )
    return row


@pytest.fixture
def showtime_id(showtime) -> str:
    return f"showtime:{showtime.id}"


@pytest.fixture
def account(db) -> models.Account:
    return models.Account.objects.create(
        email="ada@example.com", password=make_password(PASSWORD)
    )


@pytest.fixture
def logged_in_client(api_client, account) -> APIClient:
    response = api_client.post("/login", {"email": account.email, "password": PASSWORD})
    assert response.status_code == 302
    return api_client
