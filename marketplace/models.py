"""
Data models for the `marketplace` app.

``Game`` is the catalog every listing points at. Two kinds of listing share
the ``Listing`` base: ``JasaPosting`` (an account offered for sale) and
``JasaCari`` (an account somebody is looking for). Listings are created
unapproved and only appear in the public market once an admin approves them.
Each one carries a short public code (``JP...``/``JC...``) that buyers quote
on WhatsApp.
"""

from django.db import models
from django.conf import settings

from .utils import generate_jc_code, generate_jp_code

MIN_LISTING_PRICE = 10_000
MAX_POSTING_PHOTOS = 5


class Game(models.Model):
    """A game whose accounts can be traded."""
    name = models.CharField(max_length=100, unique=True)
    icon_name = models.CharField(max_length=50, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class ListingQuerySet(models.QuerySet):

    def approved(self):
        return self.filter(is_approved=True)

    def pending(self):
        return self.filter(is_approved=False)


class Listing(models.Model):
    """Fields shared by both listing tables."""
    code = models.CharField(max_length=10, unique=True, editable=False)
    game = models.ForeignKey(Game, on_delete=models.PROTECT, related_name="+")
    phone_number = models.CharField(max_length=20, verbose_name="Nomor WhatsApp")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
    )
    is_approved = models.BooleanField(default=False, db_index=True, verbose_name="Disetujui")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ListingQuerySet.as_manager()

    code_generator = None

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def save(self, *args, **kwargs):
        if not self.code:
            self.code = self._unique_code()
        super().save(*args, **kwargs)

    def _unique_code(self) -> str:
        code = self.code_generator()
        while type(self).objects.filter(code=code).exists():
            code = self.code_generator()
        return code

    @property
    def status_label(self) -> str:
        return "Disetujui" if self.is_approved else "Pending"


class JasaPosting(Listing):
    """An account offered for sale."""
    owner_name = models.CharField(max_length=100, verbose_name="Nama Pemilik Akun")
    price = models.PositiveIntegerField(verbose_name="Harga")
    is_safe = models.BooleanField(verbose_name="Data Aman")
    additional_spec = models.TextField(null=True, blank=True, verbose_name="Spesifikasi Tambahan")
    # Image data URLs, first one is the cover.
    photos = models.JSONField(default=list, blank=True)

    code_generator = staticmethod(generate_jp_code)

    class Meta(Listing.Meta):
        db_table = "jasa_posting"
        verbose_name = "Jasa Posting"
        verbose_name_plural = "Jasa Posting"

    def __str__(self) -> str:
        return f"{self.code} - {self.owner_name}"

    @property
    def cover_photo(self):
        return self.photos[0] if self.photos else None


class JasaCari(Listing):
    """A request for an account matching ``account_spec`` within a price range."""
    requester_name = models.CharField(max_length=100, verbose_name="Nama")
    price_min = models.PositiveIntegerField(verbose_name="Harga Minimal")
    price_max = models.PositiveIntegerField(verbose_name="Harga Maksimal")
    account_spec = models.TextField(verbose_name="Spesifikasi Akun")

    code_generator = staticmethod(generate_jc_code)

    class Meta(Listing.Meta):
        db_table = "jasa_cari"
        verbose_name = "Jasa Cari"
        verbose_name_plural = "Jasa Cari"

    def __str__(self) -> str:
        return f"{self.code} - {self.requester_name}"


LISTING_MODELS = {
    "posting": JasaPosting,
    "cari": JasaCari,
}
