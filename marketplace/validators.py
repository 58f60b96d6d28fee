"""
Validation rules shared by the HTML forms and the JSON API serializers.

Each validator raises ``django.core.exceptions.ValidationError`` with the
message shown to the user; Django forms and DRF serializers both turn it
into a field error.
"""
from __future__ import annotations

from django.core.exceptions import ValidationError

from .models import MIN_LISTING_PRICE, MAX_POSTING_PHOTOS
from .utils import format_currency, validate_account_spec, validate_phone_number


def validate_listing_price(value) -> None:
    if value is None or value < MIN_LISTING_PRICE:
        raise ValidationError(f"Harga minimal {format_currency(MIN_LISTING_PRICE)}")


def validate_whatsapp_number(value: str) -> None:
    if not validate_phone_number(value):
        raise ValidationError("Nomor WhatsApp tidak valid")


def validate_spec_words(value: str) -> None:
    if not validate_account_spec(value or ""):
        raise ValidationError("Spesifikasi akun minimal 5 kata")


def validate_price_range(price_min, price_max) -> None:
    if price_max < price_min:
        raise ValidationError("Harga maksimal harus lebih besar dari harga minimal")


def validate_photos(photos: list[str]) -> None:
    if not photos:
        raise ValidationError("Minimal 1 foto akun harus diupload")
    if len(photos) > MAX_POSTING_PHOTOS:
        raise ValidationError(f"Maksimal {MAX_POSTING_PHOTOS} foto")
    for photo in photos:
        if not isinstance(photo, str) or not photo.startswith("data:image/"):
            raise ValidationError("Foto harus berupa gambar")
