"""
URL configuration for the thisizstore game account marketplace.
"""
from __future__ import annotations

from marketplace import views as market_views
from marketplace.api import views as api_views
from accounts.utils import is_market_admin
from django.urls import include, path
from django.contrib import admin
from django.conf import settings

def marketplace_context(request):
    """Exposes the admin flag and the contact number to every template."""
    return {
        'IS_MARKET_ADMIN': is_market_admin(getattr(request, 'user', None)),
        'MARKET_WHATSAPP_NUMBER': settings.MARKET_WHATSAPP_NUMBER,
    }

urlpatterns = [
    path("django-admin/", admin.site.urls),
    path('accounts/', include('accounts.urls')),

    path('i18n/', include('django.conf.urls.i18n')),

    path("", market_views.home, name="home"),
    path("tutorial/", market_views.tutorial, name="tutorial"),
    path("market/", market_views.market, name="market"),
    path("market/posting/<int:pk>/", market_views.posting_detail, name="posting_detail"),
    path("market/cari/<int:pk>/", market_views.cari_detail, name="cari_detail"),
    path("jasa-posting/", market_views.jasa_posting, name="jasa_posting"),
    path("jasa-cari/", market_views.jasa_cari, name="jasa_cari"),
    path("games/search/", market_views.game_search, name="game_search"),

    # Moderation
    path("admin/", market_views.admin_dashboard, name="admin_dashboard"),
    path("admin/<str:kind>/<int:pk>/<str:action>/", market_views.moderate, name="moderate"),
    path("admin/<str:kind>/<int:pk>/delete/confirm/", market_views.confirm_delete, name="confirm_delete"),
    path("admin/export/<str:kind>/", market_views.export_listings, name="export_listings"),

    # JSON API
    path("api/games/", api_views.GameListView.as_view(), name="api_games"),
    path("api/market/", api_views.market_snapshot, name="api_market"),
    path("api/postings/", api_views.JasaPostingCreateView.as_view(), name="api_postings"),
    path("api/caris/", api_views.JasaCariCreateView.as_view(), name="api_caris"),
    path("api/admin/listings/", api_views.admin_snapshot, name="api_admin_listings"),
    path("api/admin/<str:kind>/<int:pk>/", api_views.delete_listing, name="api_delete_listing"),
    path("api/admin/<str:kind>/<int:pk>/<str:action>/", api_views.moderate_listing, name="api_moderate_listing"),
]
