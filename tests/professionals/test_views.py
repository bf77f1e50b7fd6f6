import pytest
from django.urls import reverse

from syncro.professionals.models import Professional

from ..helpers import aware

pytestmark = pytest.mark.django_db


def test_create_professional(auth_client):
    response = auth_client.post(reverse("professionals:create"), {"display_name": "Beatriz Lima"})

    assert response.status_code == 302
    assert Professional.objects.filter(display_name="Beatriz Lima").exists()


def test_professional_with_appointments_is_not_deleted(auth_client, professional, make_appointment):
    make_appointment(aware(2025, 3, 10, 10, 0))

    response = auth_client.post(reverse("professionals:delete", args=[professional.pk]))

    assert response.status_code == 302
    assert Professional.objects.filter(pk=professional.pk).exists()


def test_list_counts_appointments(auth_client, professional, make_appointment):
    make_appointment(aware(2025, 3, 10, 10, 0))

    response = auth_client.get(reverse("professionals:list"))

    assert response.context["professionals"][0].appointment_count == 1
