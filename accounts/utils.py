from functools import wraps

from django.contrib.auth.decorators import login_required
from django.core.exceptions import PermissionDenied

from .models import Profile


def is_market_admin(user) -> bool:
    """True when ``user`` is signed in and flagged as marketplace admin."""
    if not getattr(user, 'is_authenticated', False):
        return False
    try:
        return user.profile.is_admin
    except Profile.DoesNotExist:
        return False


def admin_required(view_func):
    """Restricts a view to marketplace admins (403 for everyone else)."""
    @login_required
    @wraps(view_func)
    def _wrapped_view(request, *args, **kwargs):
        if not is_market_admin(request.user):
            raise PermissionDenied("Halaman ini hanya untuk admin.")
        return view_func(request, *args, **kwargs)
    return _wrapped_view
