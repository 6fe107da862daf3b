from django.apps import AppConfig


class TheaterConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "theater"

    def ready(self) -> None:
        from theater import signals  # noqa: F401
