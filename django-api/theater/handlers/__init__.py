from theater.handlers.views import (
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

__all__ = [
    "AccountTicketsView",
    "CompletePurchaseView",
    "HomeView",
    "IndexView",
    "LoginView",
    "LogoutView",
    "MovieDetailView",
    "PurchaseCompleteView",
    "PurchaseFormView",
    "SeatConfirmationView",
    "SeatingView",
    "ShowtimesView",
    "SignUpView",
    "TheaterTimesView",
    "TicketSearchView",
    "UnavailableView",
]
