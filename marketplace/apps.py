"""
Application configuration for the `marketplace` app.

Games, the two listing tables (Jasa Posting / Jasa Cari), the listing store
and the moderation dashboard live here.
"""
from __future__ import annotations

from django.apps import AppConfig


class MarketplaceConfig(AppConfig):
    """AppConfig for the marketplace app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'marketplace'
    verbose_name = 'Marketplace'

    def ready(self):
        from . import signals
        from .store import admin_store, market_store

        market_store.subscribe(signals.log_snapshot)
        admin_store.subscribe(signals.log_snapshot)
