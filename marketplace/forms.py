"""
Form definitions for the `marketplace` app.

* ``JasaPostingForm`` posts an account for sale. Between one and five
  screenshots are uploaded with it; they are kept as base64 data URLs on the
  row so the market can show them without a media server.
* ``JasaCariForm`` posts a request for an account within a price range.

Both forms save unapproved rows; the public code is generated on save and
the WhatsApp number is stored normalized (``62...``).
"""
from __future__ import annotations

import base64

from django import forms

from .models import Game, JasaCari, JasaPosting, MAX_POSTING_PHOTOS
from .utils import format_phone_number
from .validators import (
    validate_listing_price,
    validate_photos,
    validate_price_range,
    validate_spec_words,
    validate_whatsapp_number,
)

SAFETY_CHOICES = [
    ('true', 'Aman'),
    ('false', 'Kurang Aman'),
]


class MultipleFileInput(forms.ClearableFileInput):
    allow_multiple_selected = True


class MultipleImageField(forms.FileField):
    """File field that cleans to a list of uploaded files."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault('widget', MultipleFileInput(attrs={'accept': 'image/*'}))
        super().__init__(*args, **kwargs)

    def clean(self, data, initial=None):
        single_file_clean = super().clean
        if isinstance(data, (list, tuple)):
            return [single_file_clean(d, initial) for d in data]
        return [single_file_clean(data, initial)] if data else []


def to_data_url(upload) -> str:
    content_type = getattr(upload, 'content_type', '') or ''
    if not content_type.startswith('image/'):
        raise forms.ValidationError("Foto harus berupa gambar")
    encoded = base64.b64encode(upload.read()).decode('ascii')
    return f"data:{content_type};base64,{encoded}"


class ListingFormMixin:

    def _style_fields(self) -> None:
        for name, field in self.fields.items():
            if isinstance(field.widget, (forms.RadioSelect, forms.FileInput)):
                continue
            css_class = 'form-select' if isinstance(field, forms.ChoiceField) else 'form-control'
            field.widget.attrs.setdefault('class', css_class)
            if name.startswith('price'):
                field.widget.attrs['class'] += ' price-input'
                field.widget.attrs['inputmode'] = 'numeric'

    def clean_phone_number(self):
        phone = self.cleaned_data['phone_number']
        validate_whatsapp_number(phone)
        return format_phone_number(phone)

    def save(self, commit=True, user=None):
        obj = super().save(commit=False)
        if user is not None and user.is_authenticated and not obj.pk:
            obj.user = user
        obj.is_approved = False
        if commit:
            obj.save()
        return obj


class JasaPostingForm(ListingFormMixin, forms.ModelForm):
    """Form for posting an account for sale."""

    price = forms.IntegerField(
        label="Harga (Minimal Rp 10.000)",
        validators=[validate_listing_price],
        error_messages={'required': 'Harga minimal Rp 10.000'},
    )
    is_safe = forms.TypedChoiceField(
        label="Status Akun",
        choices=SAFETY_CHOICES,
        coerce=lambda value: value == 'true',
        widget=forms.RadioSelect,
        error_messages={'required': 'Status keamanan akun harus dipilih'},
    )
    photos = MultipleImageField(
        label=f"Upload Foto Akun (Max {MAX_POSTING_PHOTOS} Foto)",
        required=False,
    )

    class Meta:
        model = JasaPosting
        fields = ['owner_name', 'game', 'price', 'phone_number', 'is_safe', 'additional_spec']
        widgets = {
            'additional_spec': forms.Textarea(attrs={
                'rows': 4,
                'placeholder': 'Deskripsikan spesifikasi akun lebih detail...',
            }),
        }
        error_messages = {
            'owner_name': {'required': 'Nama pemilik akun harus diisi'},
            'game': {'required': 'Game harus dipilih'},
            'phone_number': {'required': 'Nomor WhatsApp tidak valid'},
        }

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.fields['game'].queryset = Game.objects.order_by('name')
        self.fields['owner_name'].widget.attrs['placeholder'] = 'Masukkan nama pemilik'
        self.fields['phone_number'].widget.attrs['placeholder'] = '0812345678'
        self._style_fields()

    def clean_owner_name(self):
        owner_name = self.cleaned_data['owner_name'].strip()
        if not owner_name:
            raise forms.ValidationError('Nama pemilik akun harus diisi')
        return owner_name

    def clean_photos(self):
        uploads = self.cleaned_data.get('photos') or []
        photos = [to_data_url(upload) for upload in uploads]
        validate_photos(photos)
        return photos

    def save(self, commit=True, user=None):
        self.instance.photos = self.cleaned_data['photos']
        return super().save(commit=commit, user=user)


class JasaCariForm(ListingFormMixin, forms.ModelForm):
    """Form for requesting an account."""

    price_min = forms.IntegerField(
        label="Harga Minimal",
        validators=[validate_listing_price],
        error_messages={'required': 'Harga minimal Rp 10.000'},
    )
    price_max = forms.IntegerField(
        label="Harga Maksimal",
        validators=[validate_listing_price],
        error_messages={'required': 'Harga minimal Rp 10.000'},
    )
    account_spec = forms.CharField(
        label="Spesifikasi Akun (minimal 5 kata)",
        validators=[validate_spec_words],
        widget=forms.Textarea(attrs={'rows': 4}),
        error_messages={'required': 'Spesifikasi akun minimal 5 kata'},
    )

    class Meta:
        model = JasaCari
        fields = ['requester_name', 'game', 'price_min', 'price_max', 'phone_number', 'account_spec']
        error_messages = {
            'requester_name': {'required': 'Nama harus diisi'},
            'game': {'required': 'Game harus dipilih'},
            'phone_number': {'required': 'Nomor WhatsApp tidak valid'},
        }

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.fields['game'].queryset = Game.objects.order_by('name')
        self.fields['phone_number'].widget.attrs['placeholder'] = '0812345678'
        self._style_fields()

    def clean_requester_name(self):
        requester_name = self.cleaned_data['requester_name'].strip()
        if not requester_name:
            raise forms.ValidationError('Nama harus diisi')
        return requester_name

    def clean(self):
        cleaned_data = super().clean()
        price_min = cleaned_data.get('price_min')
        price_max = cleaned_data.get('price_max')
        if price_min is not None and price_max is not None:
            try:
                validate_price_range(price_min, price_max)
            except forms.ValidationError as exc:
                self.add_error('price_max', exc)
        return cleaned_data
