from django.contrib import admin

from theater.models import (
    Account,
    Credit,
    Movie,
    Person,
    Purchase,
    Seat,
    Showtime,
    Theater,
)


class SeatInline(admin.TabularInline):
    model = Seat
    extra = 1


class ShowtimeInline(admin.TabularInline):
    model = Showtime
    extra = 1


class CreditInline(admin.TabularInline):
    model = Credit
    extra = 1
    autocomplete_fields = ["person"]


@admin.register(Movie)
class MovieAdmin(admin.ModelAdmin):
    list_display = ["name", "runtime", "stars"]
    search_fields = ["name"]
    inlines = [CreditInline, ShowtimeInline]


@admin.register(Person)
class PersonAdmin(admin.ModelAdmin):
    list_display = ["name"]
    search_fields = ["name"]


@admin.register(Theater)
class TheaterAdmin(admin.ModelAdmin):
    list_display = ["name"]


@admin.register(Showtime)
class ShowtimeAdmin(admin.ModelAdmin):
    list_display = ["movie", "theater", "starts_at"]
    list_filter = ["theater", "movie"]
    inlines = [SeatInline]


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = ["email", "created_at"]
    search_fields = ["email"]
    exclude = ["password"]


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    """Purchases are permanent: read-only in the admin."""

    list_display = ["id", "account", "seat", "purchased_at"]
    list_filter = ["seat__showtime__movie"]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
