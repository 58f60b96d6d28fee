"""
Admin configuration for the `marketplace` app.

Games and both listing tables are registered with the Django admin. The
listing admins add bulk approve/reject actions; since ``update()`` skips the
model signals, the actions refresh the stores themselves.
"""
from __future__ import annotations

from django.contrib import admin

from .models import Game, JasaCari, JasaPosting
from .store import admin_store, refresh_market_data


@admin.register(Game)
class GameAdmin(admin.ModelAdmin):
    list_display = ('name', 'icon_name', 'created_at')
    search_fields = ('name',)


class ListingAdmin(admin.ModelAdmin):
    list_filter = ('is_approved', 'game', 'created_at')
    readonly_fields = ('code', 'created_at', 'updated_at')
    actions = ('approve_listings', 'reject_listings')

    def _set_approval(self, request, queryset, approved: bool) -> None:
        updated = queryset.update(is_approved=approved)
        refresh_market_data()
        admin_store.refresh()
        self.message_user(request, f"{updated} listing diperbarui.")

    @admin.action(description="Setujui listing terpilih")
    def approve_listings(self, request, queryset):
        self._set_approval(request, queryset, True)

    @admin.action(description="Tolak listing terpilih")
    def reject_listings(self, request, queryset):
        self._set_approval(request, queryset, False)


@admin.register(JasaPosting)
class JasaPostingAdmin(ListingAdmin):
    """Admin view for Jasa Posting."""
    list_display = ('code', 'owner_name', 'game', 'price', 'phone_number', 'is_safe', 'is_approved', 'created_at')
    search_fields = ('code', 'owner_name', 'phone_number')


@admin.register(JasaCari)
class JasaCariAdmin(ListingAdmin):
    """Admin view for Jasa Cari."""
    list_display = ('code', 'requester_name', 'game', 'price_min', 'price_max', 'phone_number', 'is_approved', 'created_at')
    search_fields = ('code', 'requester_name', 'phone_number', 'account_spec')
