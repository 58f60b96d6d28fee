"""
Form definitions for the `accounts` app.

* ``MarketSignupForm`` creates a user from a username, a WhatsApp number and
  a password. Usernames are stored lowercased and the number is normalized to
  the ``62...`` form before it is written on the profile.
* ``MarketLoginForm`` accepts either the username or the WhatsApp number in
  the username field.

Both forms carry a four character captcha (see ``accounts.captcha``).
"""
from __future__ import annotations

from django import forms
from django.contrib.auth.forms import AuthenticationForm, UserCreationForm
from django.contrib.auth.models import User

from marketplace.utils import (
    format_phone_number,
    looks_like_phone,
    validate_password_strength,
    validate_phone_number,
    MIN_PASSWORD_LENGTH,
)
from .captcha import issue_captcha, verify_captcha
from .models import Profile


class CaptchaFormMixin:
    """
    Issues a fresh challenge on every instantiation and validates the answer
    against the signed token submitted with the form. Subclasses declare the
    ``captcha`` and ``captcha_token`` fields; templates render
    ``signed_challenge`` into the hidden token input, never the posted value.
    """

    def _init_captcha(self) -> None:
        self.captcha_challenge, self.signed_challenge = issue_captcha()
        self.fields['captcha'].widget.attrs.update({'autocomplete': 'off', 'maxlength': 4})
        for name, field in self.fields.items():
            if name != 'captcha_token':
                field.widget.attrs.setdefault('class', 'form-control')

    def clean_captcha(self):
        answer = self.cleaned_data.get('captcha', '')
        if not verify_captcha(self.data.get('captcha_token', ''), answer):
            raise forms.ValidationError('Captcha salah!')
        return answer


class MarketSignupForm(CaptchaFormMixin, UserCreationForm):
    phone_number = forms.CharField(label='Nomor WhatsApp', max_length=20)
    captcha = forms.CharField(label='Captcha', max_length=8)
    captcha_token = forms.CharField(widget=forms.HiddenInput)

    class Meta(UserCreationForm.Meta):
        model = User
        fields = ('username',)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['username'].help_text = ''
        self.fields['phone_number'].widget.attrs['placeholder'] = '0812345678'
        self._init_captcha()

    def clean_username(self):
        username = (self.cleaned_data.get('username') or '').strip().lower()
        if not username:
            raise forms.ValidationError('Username harus diisi')
        if User.objects.filter(username__iexact=username).exists():
            raise forms.ValidationError('Username sudah dipakai.')
        return username

    def clean_phone_number(self):
        phone = self.cleaned_data['phone_number']
        if not validate_phone_number(phone):
            raise forms.ValidationError('Nomor WhatsApp tidak valid')
        formatted = format_phone_number(phone)
        if Profile.objects.filter(phone_number=formatted).exists():
            raise forms.ValidationError('Nomor WhatsApp sudah terdaftar.')
        return formatted

    def clean_password1(self):
        password = self.cleaned_data.get('password1') or ''
        if not validate_password_strength(password):
            raise forms.ValidationError(f'Password minimal {MIN_PASSWORD_LENGTH} karakter')
        return password

    def save(self, commit=True):
        user = super().save(commit=commit)
        if commit:
            # The profile row itself comes from the post_save receiver.
            Profile.objects.filter(user=user).update(phone_number=self.cleaned_data['phone_number'])
        return user


class MarketLoginForm(CaptchaFormMixin, AuthenticationForm):
    captcha = forms.CharField(label='Captcha', max_length=8)
    captcha_token = forms.CharField(widget=forms.HiddenInput)

    error_messages = {
        **AuthenticationForm.error_messages,
        'invalid_login': 'Username atau password salah',
        'unknown_phone': 'Nomor WhatsApp tidak ditemukan',
    }

    def __init__(self, request=None, *args, **kwargs):
        super().__init__(request, *args, **kwargs)
        self.fields['username'].label = 'Username / Nomor WhatsApp'
        self._init_captcha()

    def clean_username(self):
        username = (self.cleaned_data.get('username') or '').strip()
        if not username:
            raise forms.ValidationError('Username atau nomor WhatsApp harus diisi')
        if looks_like_phone(username):
            if not Profile.objects.filter(phone_number=format_phone_number(username)).exists():
                raise forms.ValidationError(self.error_messages['unknown_phone'], code='unknown_phone')
            return username
        return username.lower()

    def clean(self):
        if self.has_error('captcha') or self.has_error('username'):
            return self.cleaned_data
        return super().clean()
