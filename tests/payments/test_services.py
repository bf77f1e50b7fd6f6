from decimal import Decimal
from io import BytesIO

import pytest
from openpyxl import load_workbook

from syncro.payments.models import Payment
from syncro.payments.services import build_monthly_workbook, month_bounds, payment_totals, payments_between

from ..helpers import aware

pytestmark = pytest.mark.django_db


@pytest.fixture
def payments(customer, service, professional):
    def pay(paid_at, amount, payment_type):
        return Payment.objects.create(
            customer=customer,
            paid_at=paid_at,
            amount=Decimal(amount),
            payment_type=payment_type,
            service=service,
            professional=professional,
        )

    return [
        pay(aware(2025, 3, 1, 0, 0), "100.00", "pix"),
        pay(aware(2025, 3, 15, 14, 0), "50.50", "cash"),
        pay(aware(2025, 3, 31, 23, 59), "20.00", "pix"),
        pay(aware(2025, 4, 1, 0, 0), "999.00", "card"),
    ]


def test_totals_per_type(payments):
    totals = payment_totals(Payment.objects.filter(paid_at__lt=aware(2025, 4, 1)))

    assert totals["total"] == Decimal("170.50")
    assert totals["count"] == 3
    assert totals["by_type"] == [
        {"payment_type": "pix", "total": Decimal("120.00"), "count": 2},
        {"payment_type": "cash", "total": Decimal("50.50"), "count": 1},
    ]


def test_totals_of_nothing(db):
    totals = payment_totals(Payment.objects.none())

    assert totals == {"total": Decimal("0.00"), "count": 0, "by_type": []}


def test_payments_between_is_inclusive(payments):
    found = payments_between(aware(2025, 3, 15, 14, 0), aware(2025, 3, 31, 23, 59))

    assert list(found) == [payments[2], payments[1]]


def test_month_bounds_roll_over_the_year():
    start, end = month_bounds(2025, 12)

    assert start == aware(2025, 12, 1)
    assert end == aware(2026, 1, 1)


def test_monthly_workbook(payments):
    wb = build_monthly_workbook(2025, 3)

    buffer = BytesIO()
    wb.save(buffer)
    buffer.seek(0)
    loaded = load_workbook(buffer)

    assert loaded.sheetnames == ["Summary", "Payments"]
    summary = loaded["Summary"]
    assert summary["B3"].value == 170.5
    assert summary["B4"].value == 3

    rows = list(loaded["Payments"].iter_rows(min_row=2, values_only=True))
    assert len(rows) == 3
    assert rows[0][1] == "Maria Oliveira"
    assert rows[0][3] == "pix"
    assert rows[0][4] == 100.0
