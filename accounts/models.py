"""
Data models for the `accounts` app.

``Profile`` extends Django's ``User`` with what the marketplace needs: the
WhatsApp number (stored normalized as ``62...``, usable as a login name) and
the ``is_admin`` flag that grants access to the moderation dashboard. A
profile is created for every new user by a ``post_save`` receiver.
"""

from django.db import models
from django.contrib.auth.models import User
from django.db.models.signals import post_save
from django.dispatch import receiver


class Profile(models.Model):
    """Marketplace settings of a user."""
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="profile")
    phone_number = models.CharField(
        max_length=20,
        unique=True,
        null=True,
        blank=True,
        verbose_name="Nomor WhatsApp",
    )
    is_admin = models.BooleanField(default=False, verbose_name="Admin")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.user.username


@receiver(post_save, sender=User)
def create_user_profile(sender, instance, created, **kwargs):
    if created:
        Profile.objects.create(user=instance, is_admin=instance.is_superuser)
