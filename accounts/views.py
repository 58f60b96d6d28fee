"""
Views for the `accounts` app.

Login and logout are Django's own ``LoginView``/``LogoutView`` wired in
``accounts.urls`` with ``MarketLoginForm``; this module only adds sign-up.
"""
from __future__ import annotations

import logging

from django.contrib import messages
from django.http import HttpRequest, HttpResponse
from django.shortcuts import redirect, render

from .forms import MarketSignupForm

logger = logging.getLogger(__name__)


def signup(request: HttpRequest) -> HttpResponse:
    if request.user.is_authenticated:
        return redirect("market")
    if request.method == "POST":
        form = MarketSignupForm(request.POST)
        if form.is_valid():
            user = form.save()
            logger.info("New account %s", user.username)
            messages.success(request, "Sign up berhasil! Anda bisa langsung login.")
            return redirect("login")
    else:
        form = MarketSignupForm()
    return render(request, "registration/signup.html", {"form": form})
