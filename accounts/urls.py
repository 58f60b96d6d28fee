from django.contrib.auth import views as auth_views
from django.urls import path

from . import views
from .forms import MarketLoginForm

urlpatterns = [
    path("login/", auth_views.LoginView.as_view(authentication_form=MarketLoginForm), name="login"),
    path("logout/", auth_views.LogoutView.as_view(), name="logout"),
    path("signup/", views.signup, name="signup"),
]
