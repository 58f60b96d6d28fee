from unittest import mock

import pytest
from django.db.models import ProtectedError

from marketplace.models import Game, JasaCari, JasaPosting

pytestmark = pytest.mark.django_db


def test_codes_are_generated_on_save(make_posting, make_cari):
    posting = make_posting()
    cari = make_cari()

    assert posting.code.startswith("JP")
    assert cari.code.startswith("JC")
    assert not posting.is_approved
    assert posting.status_label == "Pending"


def test_code_collision_is_retried(make_posting):
    first = make_posting()
    codes = iter([first.code, "JP99990001"])
    with mock.patch.object(JasaPosting, "code_generator", staticmethod(lambda: next(codes))):
        second = make_posting()
    assert second.code == "JP99990001"


def test_approved_queryset(make_posting):
    approved = make_posting(is_approved=True)
    make_posting()

    assert list(JasaPosting.objects.approved()) == [approved]
    assert JasaPosting.objects.pending().count() == 1


def test_cover_photo(make_posting):
    assert make_posting(photos=["data:image/png;base64,AA==", "data:image/png;base64,BB=="]).cover_photo.endswith("AA==")
    assert make_posting(photos=[]).cover_photo is None


def test_games_in_use_cannot_be_deleted(game, make_cari):
    make_cari()
    with pytest.raises(ProtectedError):
        game.delete()


def test_game_ordering(db):
    Game.objects.create(name="Roblox")
    Game.objects.create(name="Efootball")
    assert [g.name for g in Game.objects.all()] == ["Efootball", "Roblox"]


def test_anonymous_listing(make_cari):
    assert make_cari().user is None
    assert JasaCari.objects.get().requester_name == "Siti"
