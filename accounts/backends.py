from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend

from marketplace.utils import format_phone_number, looks_like_phone
from .models import Profile


class PhoneNumberBackend(ModelBackend):
    """
    Lets users log in with their WhatsApp number instead of the username.

    The number is normalized to the ``62...`` form stored on the profile.
    Anything that does not look like a number is left to the other backends.
    """

    def authenticate(self, request, username=None, password=None, **kwargs):
        if username is None or password is None or not looks_like_phone(username):
            return None
        try:
            profile = Profile.objects.select_related('user').get(
                phone_number=format_phone_number(username)
            )
        except Profile.DoesNotExist:
            # Same hashing cost as a wrong password.
            get_user_model()().set_password(password)
            return None
        user = profile.user
        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
