"""
Moderation actions shared by the admin pages and the JSON API.
"""
from __future__ import annotations

import logging

from django.http import Http404
from django.shortcuts import get_object_or_404

from .models import LISTING_MODELS, Listing
from .store import admin_store, refresh_market_data

logger = logging.getLogger(__name__)

ACTIONS = ("approve", "reject", "delete")


def get_listing(kind: str, pk: int) -> Listing:
    model = LISTING_MODELS.get(kind)
    if model is None:
        raise Http404(f"Jenis listing tidak dikenal: {kind}")
    return get_object_or_404(model.objects.select_related("game"), pk=pk)


def apply_moderation(listing: Listing, action: str) -> None:
    """
    Approves, rejects or deletes ``listing`` and refreshes both stores so the
    market and the dashboard show the change right away.
    """
    if action == "approve":
        listing.is_approved = True
        listing.save(update_fields=["is_approved", "updated_at"])
    elif action == "reject":
        listing.is_approved = False
        listing.save(update_fields=["is_approved", "updated_at"])
    elif action == "delete":
        listing.delete()
    else:
        raise Http404(f"Aksi tidak dikenal: {action}")

    logger.info("Listing %s: %s", listing.code, action)
    refresh_market_data()
    admin_store.refresh()
