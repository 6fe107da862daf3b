"""Django signals for cache invalidation.

Seat maps are never cached, so only catalog models are wired here.
"""

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from theater.cache_keys import (
    MOVIE_LIST_KEY,
    SHOWTIMES_KEY,
    movie_detail_key,
)
from theater.models import Credit, Movie, Person, Showtime, Theater


@receiver([post_save, post_delete], sender=Movie)
def invalidate_movie_cache(sender, instance, **kwargs):
    """Invalidate caches when a movie is saved or deleted."""
    cache.delete_many([MOVIE_LIST_KEY, SHOWTIMES_KEY, movie_detail_key(instance.pk)])


@receiver([post_save, post_delete], sender=Showtime)
def invalidate_showtime_cache(sender, instance, **kwargs):
    """Invalidate caches when a showtime is saved or deleted."""
    cache.delete(SHOWTIMES_KEY)


@receiver([post_save, post_delete], sender=Theater)
def invalidate_theater_cache(sender, instance, **kwargs):
    """Invalidate caches when a theater is saved or deleted."""
    cache.delete(SHOWTIMES_KEY)


@receiver([post_save, post_delete], sender=Credit)
def invalidate_credit_cache(sender, instance, **kwargs):
    """Invalidate the detail page of the credited movie."""
    cache.delete(movie_detail_key(instance.movie_id))


@receiver(post_save, sender=Person)
def invalidate_person_cache(sender, instance, **kwargs):
    """Invalidate the detail pages naming a renamed person."""
    movie_ids = instance.credits.values_list("movie_id", flat=True).distinct()
    cache.delete_many([movie_detail_key(movie_id) for movie_id in movie_ids])
