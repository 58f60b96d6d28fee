"""
Views for the `marketplace` app.

Function-based views for the public storefront (home, tutorial, market and
listing details), the two submission forms and the admin moderation pages.
The market and the dashboard render from the listing store snapshots rather
than querying the tables on every request.
"""
from __future__ import annotations

import logging

import pandas as pd
from rapidfuzz import fuzz, process, utils as fuzz_utils

from django.contrib import messages
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.utils import timezone
from django.views.decorators.http import require_POST

from accounts.utils import admin_required
from .forms import JasaCariForm, JasaPostingForm
from .models import LISTING_MODELS, Game, JasaCari, JasaPosting
from .moderation import apply_moderation, get_listing
from .store import prefetch_admin_data, prefetch_market_data
from .utils import carousel_position

logger = logging.getLogger(__name__)

TABS = ("posting", "cari")

TESTIMONIALS = [
    {"author": "Ahmad Fajri", "text": "Transaksi lancar dan aman. Akun original, sesuai deskripsi.", "rating": 5},
    {"author": "Budi Santoso", "text": "Admin sangat responsif dan membantu. Proses verifikasi mudah.", "rating": 5},
    {"author": "Siti Nurhaliza", "text": "Harga sangat kompetitif dibanding tempat lain.", "rating": 5},
    {"author": "Eka Wijaya", "text": "Daftar akun cepat dan pembayaran fleksibel.", "rating": 5},
    {"author": "Randi Pratama", "text": "Akun aman dan tidak ada masalah hingga sekarang.", "rating": 5},
]

TUTORIALS = [
    {
        "section": "Jasa Posting (JasPost)",
        "videos": [
            {
                "title": "Cara Posting Akun",
                "text": "Pelajari langkah-langkah untuk memposting akun game Anda di platform kami:",
                "url": "https://www.youtube.com/embed/Fyr37Y7JZ8s",
            },
            {
                "title": "Cara Membeli Akun",
                "text": "Ikuti panduan ini untuk membeli akun game yang Anda inginkan:",
                "url": "https://www.youtube.com/embed/gO6dCSo50Ho",
            },
        ],
    },
    {
        "section": "Jasa Cari (JasCar)",
        "videos": [
            {
                "title": "Cara Mencari Akun",
                "text": "Temukan cara terbaik untuk mencari akun game sesuai spesifikasi yang Anda inginkan:",
                "url": "https://www.youtube.com/embed/yc1Wx31-pIU",
            },
            {
                "title": "Menawarkan Akun ke Pencari",
                "text": "Panduan lengkap untuk menawarkan akun game Anda kepada pembeli yang sedang mencari:",
                "url": "https://www.youtube.com/embed/gO6dCSo50Ho",
            },
        ],
    },
]

EXPORT_COLUMNS = {
    "posting": [
        "code", "owner_name", "game__name", "price", "phone_number", "is_safe",
        "additional_spec", "is_approved", "created_at",
    ],
    "cari": [
        "code", "requester_name", "game__name", "price_min", "price_max",
        "phone_number", "account_spec", "is_approved", "created_at",
    ],
}


def _active_tab(request: HttpRequest) -> str:
    tab = request.GET.get("tab", "posting")
    return tab if tab in TABS else "posting"


def _int_param(request: HttpRequest, name: str, default: int | None = None) -> int | None:
    try:
        return int(request.GET.get(name, ""))
    except ValueError:
        return default


def _local_phone(phone: str | None) -> str:
    """62812... -> 0812..., the form the submission forms accept."""
    if not phone:
        return ""
    return "0" + phone[2:] if phone.startswith("62") else phone


def _profile_initial(user, name_field: str) -> dict:
    if not user.is_authenticated:
        return {}
    profile = getattr(user, "profile", None)
    return {
        name_field: user.username,
        "phone_number": _local_phone(profile.phone_number if profile else None),
    }


def home(request: HttpRequest) -> HttpResponse:
    """Landing page: featured games and a testimonial carousel."""
    position = carousel_position(_int_param(request, "t", 0), len(TESTIMONIALS))
    context = {
        "games": Game.objects.order_by("name"),
        "testimonial": TESTIMONIALS[position.current],
        "testimonial_position": position,
        "testimonials": TESTIMONIALS,
    }
    return render(request, "marketplace/home.html", context)


def tutorial(request: HttpRequest) -> HttpResponse:
    return render(request, "marketplace/tutorial.html", {"tutorials": TUTORIALS})


def market(request: HttpRequest) -> HttpResponse:
    """Approved listings, rendered from the market snapshot."""
    snapshot = prefetch_market_data()
    postings, caris = snapshot.postings, snapshot.caris

    selected_game = _int_param(request, "game")
    if selected_game is not None:
        postings = [row for row in postings if row["game"]["id"] == selected_game]
        caris = [row for row in caris if row["game"]["id"] == selected_game]

    context = {
        "tab": _active_tab(request),
        "postings": postings,
        "caris": caris,
        "games": Game.objects.order_by("name"),
        "selected_game": selected_game,
        "loading": snapshot.loading,
        "last_fetch": snapshot.last_fetch,
    }
    return render(request, "marketplace/market.html", context)


def posting_detail(request: HttpRequest, pk: int) -> HttpResponse:
    posting = get_object_or_404(JasaPosting.objects.approved().select_related("game"), pk=pk)
    position = carousel_position(_int_param(request, "photo", 0), len(posting.photos))
    context = {
        "posting": posting,
        "photo": posting.photos[position.current] if posting.photos else None,
        "position": position,
    }
    return render(request, "marketplace/posting_detail.html", context)


def cari_detail(request: HttpRequest, pk: int) -> HttpResponse:
    cari = get_object_or_404(JasaCari.objects.approved().select_related("game"), pk=pk)
    return render(request, "marketplace/cari_detail.html", {"cari": cari})


def jasa_posting(request: HttpRequest) -> HttpResponse:
    """Account-for-sale form; the listing waits for admin approval."""
    if request.method == "POST":
        form = JasaPostingForm(request.POST, request.FILES)
        if form.is_valid():
            posting = form.save(user=request.user)
            logger.info("Jasa Posting %s submitted (%d photos)", posting.code, len(posting.photos))
            messages.success(
                request,
                f"Berhasil! Kode posting Anda: {posting.code}. Menunggu persetujuan admin.",
            )
            return redirect("jasa_posting")
    else:
        form = JasaPostingForm(initial=_profile_initial(request.user, "owner_name"))
    return render(request, "marketplace/jasa_posting.html", {"form": form})


def jasa_cari(request: HttpRequest) -> HttpResponse:
    if request.method == "POST":
        form = JasaCariForm(request.POST)
        if form.is_valid():
            cari = form.save(user=request.user)
            logger.info("Jasa Cari %s submitted", cari.code)
            messages.success(
                request,
                f"Berhasil! Kode pencarian Anda: {cari.code}. Menunggu persetujuan admin.",
            )
            return redirect("jasa_cari")
    else:
        form = JasaCariForm(initial=_profile_initial(request.user, "requester_name"))
    return render(request, "marketplace/jasa_cari.html", {"form": form})


def game_search(request: HttpRequest) -> JsonResponse:
    """Game suggestions: substring matches first, then fuzzy matches."""
    query = request.GET.get("q", "").strip()
    games = list(Game.objects.order_by("name"))

    if not query:
        results = games
    else:
        lowered = query.lower()
        results = [game for game in games if lowered in game.name.lower()]
        if len(query) >= 2:
            seen = {game.pk for game in results}
            matches = process.extract(
                query,
                [game.name for game in games],
                scorer=fuzz.WRatio,
                processor=fuzz_utils.default_process,
                limit=10,
                score_cutoff=70,
            )
            for name, score, index in matches:
                game = games[index]
                if game.pk not in seen:
                    results.append(game)
                    seen.add(game.pk)

    return JsonResponse(
        [{"id": game.id, "name": game.name, "icon_name": game.icon_name} for game in results],
        safe=False,
    )


@admin_required
def admin_dashboard(request: HttpRequest) -> HttpResponse:
    snapshot = prefetch_admin_data()
    context = {
        "tab": _active_tab(request),
        "postings": snapshot.postings,
        "caris": snapshot.caris,
        "loading": snapshot.loading,
        "last_fetch": snapshot.last_fetch,
    }
    return render(request, "marketplace/admin_dashboard.html", context)


@admin_required
@require_POST
def moderate(request: HttpRequest, kind: str, pk: int, action: str) -> HttpResponse:
    listing = get_listing(kind, pk)
    code = listing.code
    apply_moderation(listing, action)

    feedback = {
        "approve": f"{code} disetujui.",
        "reject": f"{code} ditolak dan disembunyikan dari market.",
        "delete": f"{code} dihapus.",
    }
    messages.success(request, feedback[action])
    return redirect(f"{reverse('admin_dashboard')}?tab={kind}")


@admin_required
def confirm_delete(request: HttpRequest, kind: str, pk: int) -> HttpResponse:
    listing = get_listing(kind, pk)
    return render(request, "marketplace/confirm_delete.html", {"listing": listing, "kind": kind})


@admin_required
def export_listings(request: HttpRequest, kind: str) -> HttpResponse:
    """CSV export of one listing table, built with pandas."""
    model = LISTING_MODELS.get(kind)
    if model is None:
        raise Http404(f"Jenis listing tidak dikenal: {kind}")

    columns = EXPORT_COLUMNS[kind]
    response = HttpResponse(content_type="text/csv")
    today = timezone.now().strftime("%Y-%m-%d")
    response["Content-Disposition"] = f'attachment; filename="jasa-{kind}-{today}.csv"'

    rows = model.objects.order_by("-created_at").values(*columns)
    df = pd.DataFrame(list(rows), columns=columns)

    yes_no = {True: "Ya", False: "Tidak"}
    for column in ("is_safe", "is_approved"):
        if column in df.columns:
            df[column] = df[column].map(yes_no)

    df.columns = [col.replace("game__name", "game").replace("_", " ").title() for col in df.columns]

    df.to_csv(response, sep=";", index=False, date_format="%d-%m-%Y %H:%M")
    return response
