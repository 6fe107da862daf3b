"""Serializers for transforming domain models to API responses, and for
parsing form input."""

from rest_framework import serializers

from theater.services.ticket_service import format_showtime


class MovieSerializer(serializers.Serializer):
    """Serializer for Movie domain model."""

    id = serializers.CharField(source="id.value")
    name = serializers.CharField()
    genres = serializers.ListField(child=serializers.CharField())
    runtime = serializers.IntegerField()
    tagline = serializers.CharField()
    stars = serializers.FloatField()
    description = serializers.CharField()
    image_url = serializers.CharField()


class CastMemberSerializer(serializers.Serializer):
    name = serializers.CharField()
    role = serializers.CharField()


class MovieCastSerializer(serializers.Serializer):
    """Serializer for the people credited on a movie."""

    stars = CastMemberSerializer(many=True)
    writers = serializers.ListField(child=serializers.CharField())
    director = serializers.CharField(allow_null=True)
    actors = CastMemberSerializer(many=True)


class ShowtimeSerializer(serializers.Serializer):
    """Serializer for Showtime domain model.

    ``id`` is the ``showtime:<uuid>`` record id used in seating URLs.
    """

    id = serializers.SerializerMethodField()
    movie_id = serializers.CharField(source="movie_id.value")
    movie_name = serializers.CharField()
    theater_id = serializers.CharField(source="theater_id.value")
    starts_at = serializers.DateTimeField()
    time = serializers.SerializerMethodField()

    def get_id(self, obj) -> str:
        return str(obj.id.record_id)

    def get_time(self, obj) -> str:
        return format_showtime(obj.starts_at)


class MovieShowtimesSerializer(serializers.Serializer):
    """Serializer for a movie and its showtimes."""

    movie = MovieSerializer()
    times = ShowtimeSerializer(source="showtimes", many=True)


class SeatSerializer(serializers.Serializer):
    """Serializer for Seat domain model."""

    number = serializers.IntegerField(source="number.value")
    available = serializers.BooleanField()


class TicketSerializer(serializers.Serializer):
    """Serializer for an issued ticket."""

    id = serializers.CharField()
    movie = serializers.CharField()
    time = serializers.CharField()
    seat = serializers.IntegerField()
    svg = serializers.CharField()


class DayQuerySerializer(serializers.Serializer):
    day = serializers.DateField(required=False)


class PurchaseFormSerializer(serializers.Serializer):
    """Checkout form input. Formats are checked by the domain validators."""

    card_number = serializers.CharField(allow_blank=True, default="", trim_whitespace=False)
    expiry_date = serializers.CharField(allow_blank=True, default="", trim_whitespace=False)
    cvv = serializers.CharField(allow_blank=True, default="", trim_whitespace=False)
    email = serializers.CharField(allow_blank=True, default="")


class CredentialsSerializer(serializers.Serializer):
    email = serializers.CharField(allow_blank=True, default="")
    password = serializers.CharField(allow_blank=True, default="", trim_whitespace=False)


class SearchSerializer(serializers.Serializer):
    query = serializers.CharField(allow_blank=True, default="")
