import pytest
from django.urls import reverse

from syncro.core.ui_state import UIState

pytestmark = pytest.mark.django_db


def test_preset_date_range_is_saved(auth_client):
    response = auth_client.post(reverse("core:date-range"), {"preset": "last_7"})

    assert response.status_code == 302
    assert auth_client.session["syncro:ui"]["date_range"]["label"] == "Last 7 days"


def test_custom_range_redirects_to_next(auth_client):
    response = auth_client.post(
        reverse("core:date-range"),
        {"start": "2025-01-01", "end": "2025-01-31", "label": "January", "next": "/payments/"},
    )

    assert response["Location"] == "/payments/"
    assert auth_client.session["syncro:ui"]["date_range"]["label"] == "January"


def test_inverted_range_is_refused(auth_client):
    auth_client.post(reverse("core:date-range"), {"start": "2025-02-01", "end": "2025-01-01"})

    assert "syncro:ui" not in auth_client.session


def test_external_next_is_ignored(auth_client):
    response = auth_client.post(reverse("core:date-range"), {"preset": "today", "next": "https://evil.example.com/"})

    assert response["Location"] == reverse("appointments:list")


def test_theme_and_sidebar_toggles(auth_client):
    assert auth_client.post(reverse("core:theme-toggle")).json()["theme"] == "dark"
    assert auth_client.post(reverse("core:sidebar-toggle")).json()["sidebar_open"] is False
    assert auth_client.post(reverse("core:theme-toggle")).json()["theme"] == "light"


def test_ui_state_reaches_templates(auth_client):
    response = auth_client.get(reverse("appointments:list"))

    assert isinstance(response.context["ui"], UIState)
