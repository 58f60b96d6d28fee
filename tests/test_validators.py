import pytest
from django.core.exceptions import ValidationError

from marketplace.validators import (
    validate_listing_price,
    validate_photos,
    validate_price_range,
    validate_spec_words,
    validate_whatsapp_number,
)

from .conftest import PNG_DATA_URL


def test_listing_price_minimum():
    validate_listing_price(10_000)
    with pytest.raises(ValidationError, match="Harga minimal Rp 10.000"):
        validate_listing_price(9_999)


def test_whatsapp_number():
    validate_whatsapp_number("081234567890")
    with pytest.raises(ValidationError, match="Nomor WhatsApp tidak valid"):
        validate_whatsapp_number("12345")


def test_spec_words():
    validate_spec_words("akun sultan skin banyak lengkap")
    with pytest.raises(ValidationError, match="minimal 5 kata"):
        validate_spec_words("akun sultan")


def test_price_range_allows_equal_bounds():
    validate_price_range(50_000, 50_000)
    with pytest.raises(ValidationError, match="Harga maksimal harus lebih besar"):
        validate_price_range(60_000, 50_000)


def test_photos_count_and_type():
    validate_photos([PNG_DATA_URL] * 5)
    with pytest.raises(ValidationError, match="Minimal 1 foto"):
        validate_photos([])
    with pytest.raises(ValidationError, match="Maksimal 5 foto"):
        validate_photos([PNG_DATA_URL] * 6)
    with pytest.raises(ValidationError, match="Foto harus berupa gambar"):
        validate_photos(["data:text/plain;base64,aGFsbw=="])
