from datetime import date
from decimal import Decimal
from io import BytesIO

import pytest
from django.urls import reverse
from openpyxl import load_workbook

from syncro.payments.models import Payment

from ..helpers import aware

pytestmark = pytest.mark.django_db


def select_range(client, start, end):
    client.post(reverse("core:date-range"), {"start": start.isoformat(), "end": end.isoformat()})


def test_list_follows_the_selected_range(auth_client, customer):
    inside = Payment.objects.create(customer=customer, paid_at=aware(2025, 3, 10, 9, 0), amount=Decimal("80.00"), payment_type="pix")
    Payment.objects.create(customer=customer, paid_at=aware(2025, 5, 10, 9, 0), amount=Decimal("30.00"), payment_type="pix")
    select_range(auth_client, date(2025, 3, 1), date(2025, 3, 31))

    response = auth_client.get(reverse("payments:list"))

    assert list(response.context["payments"]) == [inside]
    assert response.context["totals"]["total"] == Decimal("80.00")


def test_create_payment(auth_client, customer):
    response = auth_client.post(
        reverse("payments:create"),
        {"customer": customer.pk, "paid_at": "2025-03-10T09:30", "amount": "150.00", "payment_type": " pix "},
    )

    assert response.status_code == 302
    payment = Payment.objects.get()
    assert payment.payment_type == "pix"
    assert payment.paid_at == aware(2025, 3, 10, 9, 30)


def test_amount_must_be_positive(auth_client, customer):
    response = auth_client.post(
        reverse("payments:create"),
        {"customer": customer.pk, "paid_at": "2025-03-10T09:30", "amount": "0", "payment_type": "pix"},
    )

    assert response.status_code == 200
    assert "amount" in response.context["form"].errors


def test_export_downloads_a_workbook(auth_client, customer):
    Payment.objects.create(customer=customer, paid_at=aware(2025, 3, 10, 9, 0), amount=Decimal("80.00"), payment_type="pix")

    response = auth_client.get(reverse("payments:export"), {"month": "2025-03"})

    assert response["Content-Disposition"] == 'attachment; filename="Payments_2025_03.xlsx"'
    workbook = load_workbook(BytesIO(response.content))
    assert workbook["Summary"]["B4"].value == 1
