"""
Users Views - sign in, sign up and sign out
"""
import logging

from django.contrib import messages
from django.contrib.auth import login
from django.contrib.auth.views import LoginView, LogoutView
from django.urls import reverse_lazy
from django.utils.translation import gettext as _
from django.views.generic import CreateView

from .forms import SignInForm, SignUpForm
from .models import User

logger = logging.getLogger(__name__)


class SignInView(LoginView):
    template_name = "users/sign_in.html"
    authentication_form = SignInForm
    redirect_authenticated_user = True

    def form_invalid(self, form):
        logger.debug(f"Failed sign in for {form.data.get('username')}")
        return super().form_invalid(form)


class SignUpView(CreateView):
    """Create an account and start a session for it"""
    model = User
    form_class = SignUpForm
    template_name = "users/sign_up.html"
    success_url = reverse_lazy("appointments:list")

    def form_valid(self, form):
        response = super().form_valid(form)
        login(self.request, self.object, backend="django.contrib.auth.backends.ModelBackend")
        logger.info(f"New account created for {self.object.email}")
        messages.success(self.request, _("Welcome! Your account was created."))
        return response


class SignOutView(LogoutView):
    pass
