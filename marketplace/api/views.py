import logging

from rest_framework import generics, permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from accounts.utils import is_market_admin
from marketplace.models import Game
from marketplace.moderation import apply_moderation, get_listing
from marketplace.store import prefetch_admin_data, prefetch_market_data
from .serializers import GameSerializer, JasaCariSerializer, JasaPostingSerializer

logger = logging.getLogger(__name__)


class IsMarketAdmin(permissions.BasePermission):
    message = "Halaman ini hanya untuk admin."

    def has_permission(self, request, view):
        return is_market_admin(request.user)


class GameListView(generics.ListAPIView):
    """
    API endpoint listing every game, ordered by name.
    """
    queryset = Game.objects.order_by('name')
    serializer_class = GameSerializer
    pagination_class = None


class ListingCreateView(generics.CreateAPIView):
    """Submissions are always stored unapproved; anonymous ones have no user."""

    def perform_create(self, serializer):
        user = self.request.user if self.request.user.is_authenticated else None
        listing = serializer.save(user=user, is_approved=False)
        logger.info("%s submitted through the API", listing.code)


class JasaPostingCreateView(ListingCreateView):
    serializer_class = JasaPostingSerializer


class JasaCariCreateView(ListingCreateView):
    serializer_class = JasaCariSerializer


@api_view(['GET'])
def market_snapshot(request):
    """
    Approved listings, served from the market store.
    """
    return Response(prefetch_market_data().as_dict())


@api_view(['GET'])
@permission_classes([IsMarketAdmin])
def admin_snapshot(request):
    return Response(prefetch_admin_data().as_dict())


@api_view(['POST'])
@permission_classes([IsMarketAdmin])
def moderate_listing(request, kind, pk, action):
    """
    Approve or reject a listing.

    Only ``approve`` and ``reject`` are accepted here; deleting goes through
    ``DELETE /api/admin/<kind>/<pk>/``.
    """
    if action not in ('approve', 'reject'):
        return Response({'detail': f"Aksi tidak dikenal: {action}"}, status=status.HTTP_400_BAD_REQUEST)

    listing = get_listing(kind, pk)
    apply_moderation(listing, action)
    return Response({'code': listing.code, 'is_approved': listing.is_approved})


@api_view(['DELETE'])
@permission_classes([IsMarketAdmin])
def delete_listing(request, kind, pk):
    listing = get_listing(kind, pk)
    apply_moderation(listing, 'delete')
    return Response(status=status.HTTP_204_NO_CONTENT)
