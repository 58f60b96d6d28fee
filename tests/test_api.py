import pytest
from rest_framework.test import APIClient

from marketplace.models import JasaCari, JasaPosting

from .conftest import PNG_DATA_URL

pytestmark = pytest.mark.django_db


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def admin_client(api_client, admin_user):
    api_client.force_authenticate(admin_user)
    return api_client


def test_games(api_client, game, other_game):
    response = api_client.get("/api/games/")
    assert response.status_code == 200
    assert [g["name"] for g in response.json()] == ["Free Fire", "Mobile Legend"]


def test_market_snapshot(api_client, make_posting, make_cari):
    posting = make_posting(is_approved=True)
    make_posting()
    make_cari()

    data = api_client.get("/api/market/").json()

    assert [row["code"] for row in data["postings"]] == [posting.code]
    assert data["caris"] == []
    assert data["has_prefetched_data"] is True
    assert data["loading"] is False
    assert "phone_number" not in data["postings"][0]


def test_create_posting(api_client, game):
    response = api_client.post("/api/postings/", {
        "owner_name": "Budi",
        "game_id": game.pk,
        "price": 75_000,
        "phone_number": "081234567890",
        "is_safe": False,
        "photos": [PNG_DATA_URL],
        "is_approved": True,
    }, format="json")

    assert response.status_code == 201, response.json()
    body = response.json()
    assert body["code"].startswith("JP")
    assert body["is_approved"] is False
    assert body["game"]["name"] == "Free Fire"
    assert JasaPosting.objects.get().phone_number == "6281234567890"


def test_create_posting_validation(api_client, game):
    response = api_client.post("/api/postings/", {
        "owner_name": "Budi",
        "game_id": game.pk,
        "price": 5_000,
        "phone_number": "12",
        "is_safe": True,
        "photos": [],
    }, format="json")

    assert response.status_code == 400
    errors = response.json()
    assert errors["price"] == ["Harga minimal Rp 10.000"]
    assert errors["phone_number"] == ["Nomor WhatsApp tidak valid"]
    assert errors["photos"] == ["Minimal 1 foto akun harus diupload"]


def test_create_cari_for_signed_in_user(api_client, user, game):
    api_client.force_authenticate(user)
    response = api_client.post("/api/caris/", {
        "requester_name": "Budi",
        "game_id": game.pk,
        "price_min": 50_000,
        "price_max": 80_000,
        "phone_number": "+6281234567890",
        "account_spec": "akun sultan banyak skin langka",
    }, format="json")

    assert response.status_code == 201, response.json()
    assert JasaCari.objects.get().user == user


def test_create_cari_price_range(api_client, game):
    response = api_client.post("/api/caris/", {
        "requester_name": "Budi",
        "game_id": game.pk,
        "price_min": 90_000,
        "price_max": 80_000,
        "phone_number": "081234567890",
        "account_spec": "akun sultan banyak skin langka",
    }, format="json")

    assert response.status_code == 400
    assert response.json()["non_field_errors"] == ["Harga maksimal harus lebih besar dari harga minimal"]


def test_admin_endpoints_are_forbidden_for_others(api_client, user, make_posting):
    posting = make_posting()
    assert api_client.get("/api/admin/listings/").status_code == 403

    api_client.force_authenticate(user)
    assert api_client.get("/api/admin/listings/").status_code == 403
    assert api_client.post(f"/api/admin/posting/{posting.pk}/approve/").status_code == 403
    assert api_client.delete(f"/api/admin/posting/{posting.pk}/").status_code == 403


def test_admin_snapshot(admin_client, make_posting, make_cari):
    make_posting()
    make_cari(is_approved=True)

    data = admin_client.get("/api/admin/listings/").json()

    assert len(data["postings"]) == 1
    assert len(data["caris"]) == 1
    assert data["postings"][0]["phone_number"] == "6281234567890"


def test_admin_moderation(admin_client, make_posting):
    posting = make_posting()

    response = admin_client.post(f"/api/admin/posting/{posting.pk}/approve/")
    assert response.json() == {"code": posting.code, "is_approved": True}
    assert [row["code"] for row in APIClient().get("/api/market/").json()["postings"]] == [posting.code]

    response = admin_client.post(f"/api/admin/posting/{posting.pk}/reject/")
    assert response.json()["is_approved"] is False

    assert admin_client.post(f"/api/admin/posting/{posting.pk}/publish/").status_code == 400
    assert admin_client.post(f"/api/admin/other/{posting.pk}/approve/").status_code == 404

    assert admin_client.delete(f"/api/admin/posting/{posting.pk}/").status_code == 204
    assert not JasaPosting.objects.exists()
    assert admin_client.delete(f"/api/admin/posting/{posting.pk}/").status_code == 404
