from django.urls import path

from theater.handlers import (
    AccountTicketsView,
    CompletePurchaseView,
    HomeView,
    IndexView,
    LoginView,
    LogoutView,
    MovieDetailView,
    PurchaseCompleteView,
    PurchaseFormView,
    SeatConfirmationView,
    SeatingView,
    ShowtimesView,
    SignUpView,
    TheaterTimesView,
    TicketSearchView,
    UnavailableView,
)

purchase_patterns = [
    path("purchase/unavailable", UnavailableView.as_view(), name="purchase-unavailable"),
    # Listed before the four-segment checkout route, which would also match.
    path(
        "purchase/complete/<int:seat>/<str:movie>/<str:time>",
        PurchaseCompleteView.as_view(),
        name="purchase-complete",
    ),
    path(
        "purchase/<str:showtime_id>/<int:seat>",
        PurchaseFormView.as_view(),
        name="purchase-form",
    ),
    path(
        "purchase/<str:showtime_id>/<int:seat>/<str:movie>/<str:time>",
        CompletePurchaseView.as_view(),
        name="purchase-submit",
    ),
]

seating_patterns = [
    path(
        "seating/times/<str:theater_id>",
        TheaterTimesView.as_view(),
        name="theater-times",
    ),
    path("seating/<str:showtime_id>", SeatingView.as_view(), name="seating"),
    path(
        "seating/<str:showtime_id>/<int:seat>",
        SeatConfirmationView.as_view(),
        name="seat-confirmation",
    ),
]

urlpatterns = [
    path("", IndexView.as_view(), name="index"),
    path("home", HomeView.as_view(), name="home"),
    path("showtimes", ShowtimesView.as_view(), name="showtimes"),
    path("movie/<str:movie_id>", MovieDetailView.as_view(), name="movie-detail"),
    path("login", LoginView.as_view(), name="login"),
    path("logout", LogoutView.as_view(), name="logout"),
    path("sign_up", SignUpView.as_view(), name="sign-up"),
    path("account", AccountTicketsView.as_view(), name="account"),
    path("account/search", TicketSearchView.as_view(), name="ticket-search"),
    *seating_patterns,
    *purchase_patterns,
]
