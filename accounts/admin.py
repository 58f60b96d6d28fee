"""
Admin configuration for the `accounts` app.

Profiles are registered so administrators can be promoted from the Django
admin by ticking ``is_admin``.
"""
from __future__ import annotations

from django.contrib import admin

from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    """Admin view for Profiles."""
    list_display = ('user', 'phone_number', 'is_admin', 'created_at')
    list_filter = ('is_admin',)
    search_fields = ('user__username', 'phone_number')
    readonly_fields = ('created_at', 'updated_at')
