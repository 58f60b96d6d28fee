import pytest
from django.contrib.auth.models import User
from django.core.cache import cache
from django.core.files.uploadedfile import SimpleUploadedFile

from marketplace.models import Game, JasaCari, JasaPosting
from marketplace.store import admin_store, market_store

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"
PNG_DATA_URL = "data:image/png;base64,iVBORw0KGgoAAAANSUhEUg=="


@pytest.fixture(autouse=True)
def fresh_stores():
    cache.clear()
    market_store.reset()
    admin_store.reset()
    yield
    cache.clear()
    market_store.reset()
    admin_store.reset()


@pytest.fixture
def game(db):
    return Game.objects.create(name="Free Fire", icon_name="flame")


@pytest.fixture
def other_game(db):
    return Game.objects.create(name="Mobile Legend", icon_name="sword")


@pytest.fixture
def user(db):
    user = User.objects.create_user(username="budi", password="Kuda-Lari-77")
    user.profile.phone_number = "6281234567890"
    user.profile.save()
    return user


@pytest.fixture
def admin_user(db):
    user = User.objects.create_user(username="admin", password="Kuda-Lari-77")
    user.profile.is_admin = True
    user.profile.save()
    return user


@pytest.fixture
def make_posting(game):
    def _make(**kwargs):
        defaults = {
            "owner_name": "Budi",
            "game": game,
            "price": 50_000,
            "phone_number": "6281234567890",
            "is_safe": True,
            "photos": [PNG_DATA_URL],
        }
        defaults.update(kwargs)
        return JasaPosting.objects.create(**defaults)
    return _make


@pytest.fixture
def make_cari(game):
    def _make(**kwargs):
        defaults = {
            "requester_name": "Siti",
            "game": game,
            "price_min": 50_000,
            "price_max": 150_000,
            "phone_number": "6281298765432",
            "account_spec": "akun sultan banyak skin langka dan rank tinggi",
        }
        defaults.update(kwargs)
        return JasaCari.objects.create(**defaults)
    return _make


@pytest.fixture
def png_upload():
    def _make(name="akun.png"):
        return SimpleUploadedFile(name, PNG_BYTES, content_type="image/png")
    return _make
