"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/models.py.
"""

import uuid

from django.db import models


class Account(models.Model):
    """Persistence model for accounts."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(max_length=254, unique=True)
    # Hashed with django.contrib.auth.hashers; unusable for checkout-created accounts.
    password = models.CharField(max_length=128, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.email


class Session(models.Model):
    """Persistence model for browsing sessions."""

    token = models.CharField(primary_key=True, max_length=64, editable=False)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return self.token


class AccountSession(models.Model):
    """Dated link binding a session to exactly one account."""

    session = models.OneToOneField(
        Session, on_delete=models.CASCADE, related_name="account_link"
    )
    account = models.ForeignKey(
        Account, on_delete=models.CASCADE, related_name="session_links"
    )
    created_at = models.DateTimeField()

    class Meta:
        indexes = [
            models.Index(fields=["account"], name="account_session_account_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.session_id} -> {self.account_id}"


class Movie(models.Model):
    """Persistence model for movies."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    genres = models.JSONField(default=list, blank=True)
    runtime = models.PositiveIntegerField()
    tagline = models.CharField(max_length=255, blank=True)
    stars = models.FloatField(default=0)
    description = models.TextField(blank=True)
    image_url = models.CharField(max_length=500, blank=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Person(models.Model):
    """Persistence model for people credited on movies."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class Credit(models.Model):
    """A person's part in a movie: starring, acting, writing or directing."""

    class Kind(models.TextChoices):
        STAR = "star", "Star"
        ACTOR = "actor", "Actor"
        WRITER = "writer", "Writer"
        DIRECTOR = "director", "Director"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    movie = models.ForeignKey(Movie, on_delete=models.CASCADE, related_name="credits")
    person = models.ForeignKey(Person, on_delete=models.CASCADE, related_name="credits")
    kind = models.CharField(max_length=16, choices=Kind.choices)
    # Character name; empty for writers and directors.
    role = models.CharField(max_length=255, blank=True)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["kind", "position"]
        indexes = [
            models.Index(fields=["movie", "kind", "position"], name="credit_movie_kind_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.person.name} ({self.kind}) in {self.movie.name}"


class Theater(models.Model):
    """Persistence model for theaters."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)

    def __str__(self) -> str:
        return self.name


class Showtime(models.Model):
    """Persistence model for showtimes."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    movie = models.ForeignKey(Movie, on_delete=models.CASCADE, related_name="showtimes")
    theater = models.ForeignKey(
        Theater, on_delete=models.CASCADE, related_name="showtimes"
    )
    starts_at = models.DateTimeField()

    class Meta:
        ordering = ["starts_at"]
        indexes = [
            models.Index(fields=["theater", "starts_at"], name="showtime_theater_time_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.movie.name} - {self.starts_at}"


class Seat(models.Model):
    """Persistence model for the seats of a showtime."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    showtime = models.ForeignKey(
        Showtime, on_delete=models.CASCADE, related_name="seats"
    )
    number = models.PositiveIntegerField()
    available = models.BooleanField(default=True)

    class Meta:
        ordering = ["number"]
        constraints = [
            models.UniqueConstraint(
                fields=["showtime", "number"], name="unique_seat_number_per_showtime"
            ),
        ]

    def __str__(self) -> str:
        return f"Seat {self.number} ({self.showtime_id})"


class Purchase(models.Model):
    """Persistence model for purchases.

    The one-to-one seat relation means a second purchase of the same seat
    fails at the database even if the availability check were bypassed.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    account = models.ForeignKey(
        Account, on_delete=models.PROTECT, related_name="purchases"
    )
    seat = models.OneToOneField(Seat, on_delete=models.PROTECT, related_name="purchase")
    purchased_at = models.DateTimeField()
    card_last4 = models.CharField(max_length=4)
    card_expiry = models.CharField(max_length=5)

    class Meta:
        indexes = [
            models.Index(fields=["account", "purchased_at"], name="purchase_account_time_idx"),
        ]

    def __str__(self) -> str:
        return str(self.id)
