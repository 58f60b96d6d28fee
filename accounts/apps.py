"""
Application configuration for the `accounts` app.

The app owns the marketplace profile attached to every Django user (WhatsApp
number and admin flag), the sign-up and login forms and the WhatsApp number
login backend.
"""
from __future__ import annotations

from django.apps import AppConfig


class AccountsConfig(AppConfig):
    """AppConfig for the accounts app."""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'accounts'
    verbose_name = 'Akun'
