"""
Signal receivers of the `marketplace` app.

Any write to a listing table makes both store mirrors stale, so the admin
dashboard and the market refetch on their next request. ``log_snapshot``
is subscribed to both stores in ``MarketplaceConfig.ready``.
"""
import logging

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import JasaCari, JasaPosting
from .store import admin_store, market_store

logger = logging.getLogger(__name__)


@receiver(post_save, sender=JasaPosting)
@receiver(post_save, sender=JasaCari)
@receiver(post_delete, sender=JasaPosting)
@receiver(post_delete, sender=JasaCari)
def invalidate_listing_stores(sender, instance, **kwargs):
    market_store.invalidate()
    admin_store.invalidate()


def log_snapshot(snapshot):
    if snapshot.loading:
        logger.debug("Snapshot loading")
    else:
        logger.debug("Snapshot: %d postings, %d caris", len(snapshot.postings), len(snapshot.caris))
