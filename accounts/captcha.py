"""
Captcha for the login and sign-up forms.

The four character challenge is shown in clear text and travels back with
the form as a signed token, so nothing has to be kept in the session. Tokens
expire after five minutes and are good for one correct answer: a solved
token is recorded in the Django cache until it would have expired anyway.
"""
from __future__ import annotations

import hashlib

from django.core import signing
from django.core.cache import cache

from marketplace.utils import generate_captcha

SALT = 'accounts.captcha'
MAX_AGE_SECONDS = 5 * 60


def issue_captcha() -> tuple[str, str]:
    """Returns a new ``(challenge, token)`` pair."""
    challenge = generate_captcha()
    return challenge, signing.dumps(challenge, salt=SALT)


def _used_key(token: str) -> str:
    return 'captcha-used:' + hashlib.sha256(token.encode()).hexdigest()


def verify_captcha(token: str, answer: str) -> bool:
    try:
        challenge = signing.loads(token, salt=SALT, max_age=MAX_AGE_SECONDS)
    except signing.BadSignature:
        return False
    if (answer or '').strip().upper() != challenge:
        return False
    # add() is a no-op when the key exists, so only the first solve wins.
    return cache.add(_used_key(token), True, timeout=MAX_AGE_SECONDS)
