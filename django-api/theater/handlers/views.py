"""HTTP handlers for the booking pages.

Each view parses its input, calls one service and serializes the result.
Domain errors raised here are rendered by handlers/errors.py.
"""

from urllib.parse import urlencode

from django.core.cache import cache
from django.http import HttpResponseRedirect
from django.urls import reverse
from django.utils import timezone
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from theater import dependencies
from theater.cache_keys import MOVIE_LIST_KEY, SHOWTIMES_KEY, movie_detail_key
from theater.conf import get_theater_settings
from theater.domain import MovieId
from theater.domain.errors import (
    AccountExistsError,
    InvalidCredentialsError,
    SeatUnavailableError,
    ValidationFailedError,
)
from theater.handlers.cookies import (
    clear_session_cookie,
    read_session_token,
    set_session_cookie,
)
from theater.handlers.serializers import (
    CredentialsSerializer,
    DayQuerySerializer,
    MovieCastSerializer,
    MovieSerializer,
    MovieShowtimesSerializer,
    PurchaseFormSerializer,
    SearchSerializer,
    SeatSerializer,
    ShowtimeSerializer,
    TicketSerializer,
)
from theater.services.reservation_service import PurchaseForm
from theater.services.ticket_service import format_showtime

LOGIN_URL = "/login"


class SessionRequiredMixin:
    """Resolve the session before the handler runs.

    Views set ``login_url`` to redirect anonymous callers; without it they
    get a 401.
    """

    login_url: str | None = None

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        resolver = dependencies.account_resolver()
        self.account_id = resolver.resolve_session(read_session_token(request))


def _cached(key: str, build):
    data = cache.get(key)
    if data is None:
        data = build()
        cache.set(key, data, get_theater_settings().catalog_cache_timeout)
    return data


class IndexView(APIView):
    """Handler for GET /"""

    def get(self, request: Request) -> Response:
        resolver = dependencies.account_resolver()
        return Response({"logged_in": resolver.is_logged_in(read_session_token(request))})


class HomeView(APIView):
    """Handler for GET /home"""

    def get(self, request: Request) -> Response:
        def build():
            movies = dependencies.catalog_service().list_movies()
            return {"movies": list(MovieSerializer(movies, many=True).data)}

        return Response(_cached(MOVIE_LIST_KEY, build))


class ShowtimesView(APIView):
    """Handler for GET /showtimes"""

    def get(self, request: Request) -> Response:
        def build():
            movies = dependencies.catalog_service().list_movie_showtimes()
            return {"movies": list(MovieShowtimesSerializer(movies, many=True).data)}

        return Response(_cached(SHOWTIMES_KEY, build))


class MovieDetailView(APIView):
    """Handler for GET /movie/{movie_id}"""

    def get(self, request: Request, movie_id: str) -> Response:
        key = movie_detail_key(MovieId.from_string(movie_id).value)

        def build():
            catalog = dependencies.catalog_service()
            movie = catalog.get_movie(movie_id)
            cast = catalog.get_movie_cast(movie)
            return {**MovieSerializer(movie).data, "cast": MovieCastSerializer(cast).data}

        return Response(_cached(key, build))


class TheaterTimesView(APIView):
    """Handler for GET /seating/times/{theater_id}?day=YYYY-MM-DD"""

    def get(self, request: Request, theater_id: str) -> Response:
        query = DayQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)
        day = query.validated_data.get("day") or timezone.localdate()
        showtimes = dependencies.catalog_service().list_showtimes_for_theater_and_day(
            theater_id, day
        )
        return Response(
            {
                "theater_id": theater_id,
                "day": day.isoformat(),
                "times": ShowtimeSerializer(showtimes, many=True).data,
            }
        )


class SeatingView(SessionRequiredMixin, APIView):
    """Handler for GET /seating/{showtime_id}"""

    login_url = LOGIN_URL

    def get(self, request: Request, showtime_id: str) -> Response:
        seats = dependencies.catalog_service().list_seats(showtime_id)
        return Response(
            {"id": showtime_id, "seats": SeatSerializer(seats, many=True).data}
        )


class SeatConfirmationView(SessionRequiredMixin, APIView):
    """Handler for GET /seating/{showtime_id}/{seat}"""

    login_url = LOGIN_URL

    def get(self, request: Request, showtime_id: str, seat: int) -> Response:
        catalog = dependencies.catalog_service()
        showtime = catalog.get_showtime(showtime_id)
        catalog.get_seat(showtime_id, seat)
        movie = catalog.get_movie(str(showtime.movie_id))
        return Response(
            {
                "id": showtime_id,
                "time": format_showtime(showtime.starts_at),
                "seat": seat,
                "movie": MovieSerializer(movie).data,
            }
        )


def purchase_page(
    showtime_id: str,
    seat: int,
    movie: str,
    time: str,
    form: PurchaseForm | None = None,
    fields: dict[str, bool] | None = None,
) -> dict:
    """Payload of the purchase form; the CVV is never echoed back."""
    fields = fields or {}
    return {
        "id": showtime_id,
        "time": time,
        "seat": seat,
        "movie": movie,
        "card_number": form.card_number if form else "",
        "expiry_date": form.expiry_date if form else "",
        "cvv": "",
        "email": form.email if form else "",
        "valid_card_number": fields.get("card_number", True),
        "valid_expiry_date": fields.get("expiry_date", True),
        "valid_cvv": fields.get("cvv", True),
        "valid_email": fields.get("email", True),
    }


class PurchaseFormView(APIView):
    """Handler for GET /purchase/{showtime_id}/{seat}"""

    def get(self, request: Request, showtime_id: str, seat: int) -> Response:
        catalog = dependencies.catalog_service()
        showtime = catalog.get_showtime(showtime_id)
        catalog.get_seat(showtime_id, seat)
        return Response(
            purchase_page(
                showtime_id,
                seat,
                showtime.movie_name,
                format_showtime(showtime.starts_at),
            )
        )


class CompletePurchaseView(APIView):
    """Handler for POST /purchase/{showtime_id}/{seat}/{movie}/{time}"""

    login_url = LOGIN_URL

    def post(
        self, request: Request, showtime_id: str, seat: int, movie: str, time: str
    ) -> Response | HttpResponseRedirect:
        serializer = PurchaseFormSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        form = PurchaseForm(**serializer.validated_data)

        try:
            purchase_id = dependencies.reservation_service().complete_purchase(
                showtime_id, seat, form, read_session_token(request)
            )
        except ValidationFailedError as exc:
            return Response(purchase_page(showtime_id, seat, movie, time, form, exc.fields))
        except SeatUnavailableError:
            return HttpResponseRedirect(reverse("purchase-unavailable"))

        url = reverse(
            "purchase-complete", kwargs={"seat": seat, "movie": movie, "time": time}
        )
        return HttpResponseRedirect(f"{url}?{urlencode({'ticket': str(purchase_id)})}")


class PurchaseCompleteView(APIView):
    """Handler for GET /purchase/complete/{seat}/{movie}/{time}?ticket={id}"""

    def get(self, request: Request, seat: int, movie: str, time: str) -> Response:
        ticket = request.query_params.get("ticket", "")
        svg = dependencies.ticket_service().render_ticket(ticket)
        return Response(
            {"movie": movie, "time": time, "seat": seat, "ticket": ticket, "svg": svg}
        )


class UnavailableView(APIView):
    """Handler for GET /purchase/unavailable"""

    def get(self, request: Request) -> Response:
        return Response({"available": False, "message": "That seat was just taken"})


def _redirect_with_session(url: str, token) -> HttpResponseRedirect:
    response = HttpResponseRedirect(url)
    response["HX-Redirect"] = url
    set_session_cookie(response, token)
    return response


class LoginView(APIView):
    """Handler for GET|POST /login"""

    @staticmethod
    def page(email: str = "", valid_email: bool = True, account_found: bool = True) -> dict:
        return {"email": email, "valid_email": valid_email, "account_found": account_found}

    def get(self, request: Request) -> Response | HttpResponseRedirect:
        resolver = dependencies.account_resolver()
        if resolver.is_logged_in(read_session_token(request)):
            return HttpResponseRedirect(reverse("account"))
        return Response(self.page())

    def post(self, request: Request) -> Response | HttpResponseRedirect:
        serializer = CredentialsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]
        try:
            token = dependencies.account_service().log_in(
                email, serializer.validated_data["password"]
            )
        except ValidationFailedError:
            return Response(self.page(email, valid_email=False))
        except InvalidCredentialsError:
            return Response(self.page(email, account_found=False))
        return _redirect_with_session("/", token)


class SignUpView(APIView):
    """Handler for GET|POST /sign_up"""

    @staticmethod
    def page(
        email: str = "",
        valid_email: bool = True,
        valid_password: bool = True,
        account_found: bool = False,
    ) -> dict:
        return {
            "email": email,
            "valid_email": valid_email,
            "valid_password": valid_password,
            "account_found": account_found,
        }

    def get(self, request: Request) -> Response:
        return Response(self.page())

    def post(self, request: Request) -> Response | HttpResponseRedirect:
        serializer = CredentialsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        email = serializer.validated_data["email"]
        try:
            token = dependencies.account_service().sign_up(
                email, serializer.validated_data["password"]
            )
        except ValidationFailedError as exc:
            return Response(
                self.page(
                    email,
                    valid_email=exc.fields["email"],
                    valid_password=exc.fields["password"],
                )
            )
        except AccountExistsError:
            return Response(self.page(email, account_found=True))
        return _redirect_with_session("/", token)


class LogoutView(APIView):
    """Handler for POST /logout"""

    def post(self, request: Request) -> HttpResponseRedirect:
        dependencies.account_service().log_out(read_session_token(request))
        response = HttpResponseRedirect("/")
        clear_session_cookie(response)
        return response


class AccountTicketsView(SessionRequiredMixin, APIView):
    """Handler for GET /account"""

    def get(self, request: Request) -> Response:
        tickets = dependencies.ticket_service().list_tickets(self.account_id)
        return Response({"tickets": TicketSerializer(tickets, many=True).data})


class TicketSearchView(SessionRequiredMixin, APIView):
    """Handler for POST /account/search"""

    def post(self, request: Request) -> Response:
        serializer = SearchSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tickets = dependencies.ticket_service().search_tickets(
            self.account_id, serializer.validated_data["query"]
        )
        return Response({"tickets": TicketSerializer(tickets, many=True).data})
