"""
Helpers shared by the marketplace forms, views and templates.

Listing codes, WhatsApp number validation/normalization, rupiah formatting
and the small validators used by the submission and sign-up forms live here
so that the HTML views and the JSON API apply exactly the same rules.
"""
from __future__ import annotations

import random
import re
import string
import time
from typing import NamedTuple

from django.conf import settings

PHONE_RE = re.compile(r'^(\+62|0)[0-9]{9,12}$')
# Loose check used to tell a WhatsApp number apart from a username on login.
PHONE_INPUT_RE = re.compile(r'^[0-9+\-\s()]+$')

CAPTCHA_CHARS = string.ascii_uppercase + string.digits
CAPTCHA_LENGTH = 4

MIN_PASSWORD_LENGTH = 6
MIN_ACCOUNT_SPEC_WORDS = 5


def generate_code(prefix: str) -> str:
    """
    Builds a listing code: prefix, last four digits of the millisecond clock
    and a random number below 10000, cut to ten characters.
    """
    timestamp = str(int(time.time() * 1000))[-4:]
    suffix = random.randint(0, 9999)
    return f"{prefix}{timestamp}{suffix}"[:10]


def generate_jp_code() -> str:
    return generate_code('JP')


def generate_jc_code() -> str:
    return generate_code('JC')


def validate_phone_number(phone: str) -> bool:
    """Accepts ``+62``/``0`` numbers with 9 to 12 further digits, spaces ignored."""
    return bool(PHONE_RE.match(re.sub(r'\s', '', phone or '')))


def looks_like_phone(value: str) -> bool:
    return bool(PHONE_INPUT_RE.match(value.strip()))


def format_phone_number(phone: str) -> str:
    """Normalizes a WhatsApp number to the international ``62...`` form."""
    cleaned = re.sub(r'\D', '', phone or '')
    if cleaned.startswith('0'):
        cleaned = '62' + cleaned[1:]
    if not cleaned.startswith('62'):
        cleaned = '62' + cleaned
    return cleaned


def format_currency(value) -> str:
    """Formats an amount as rupiah without decimals: ``Rp 1.250.000``."""
    amount = int(value)
    digits = f"{abs(amount):,}".replace(",", ".")
    sign = "-" if amount < 0 else ""
    return f"{sign}Rp {digits}"


def validate_password_strength(password: str) -> bool:
    return len(password) >= MIN_PASSWORD_LENGTH


def generate_captcha() -> str:
    return ''.join(random.choice(CAPTCHA_CHARS) for _ in range(CAPTCHA_LENGTH))


def validate_account_spec(spec: str) -> bool:
    """An account spec needs at least five space separated words."""
    return len(spec.strip().split(' ')) >= MIN_ACCOUNT_SPEC_WORDS


def buyer_whatsapp_url(code: str) -> str:
    """Link that opens a chat with the store saying ``Minat <code>``."""
    return f"https://wa.me/{settings.MARKET_WHATSAPP_NUMBER}?text=Minat+{code}"


def contact_whatsapp_url(phone: str) -> str:
    return f"https://wa.me/{phone}"


class CarouselPosition(NamedTuple):
    current: int
    previous: int
    next: int
    count: int


def carousel_position(index: int, count: int) -> CarouselPosition:
    """Wraps ``index`` into ``[0, count)`` and returns its neighbours."""
    if count <= 0:
        return CarouselPosition(0, 0, 0, 0)
    current = index % count
    return CarouselPosition(
        current=current,
        previous=count - 1 if current == 0 else current - 1,
        next=0 if current == count - 1 else current + 1,
        count=count,
    )
