"""
Payment queries, totals and the monthly spreadsheet report.
"""
import logging
from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from django.db.models import Count, Sum
from django.utils import timezone
from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter

from syncro.core.ui_state import start_of_day

from .models import Payment

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(start_color="5156BE", end_color="5156BE", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF")


def payments_between(start, end):
    """Payments inside the closed datetime interval [start, end], newest first"""
    return (
        Payment.objects.select_related("customer", "professional", "service")
        .filter(paid_at__gte=start, paid_at__lte=end)
        .order_by("-paid_at")
    )


def payment_totals(queryset):
    """Sum and count of a payment queryset, overall and per payment type"""
    overall = queryset.aggregate(total=Sum("amount"), count=Count("id"))
    by_type = (
        queryset.order_by()
        .values("payment_type")
        .annotate(total=Sum("amount"), count=Count("id"))
        .order_by("-total", "payment_type")
    )
    return {
        "total": overall["total"] or Decimal("0.00"),
        "count": overall["count"],
        "by_type": [
            {"payment_type": row["payment_type"], "total": row["total"], "count": row["count"]}
            for row in by_type
        ],
    }


def month_bounds(year, month):
    """Aware [first instant of the month, first instant of the next month)"""
    first = date(year, month, 1)
    return start_of_day(first), start_of_day(first + relativedelta(months=1))


def payments_for_month(year, month):
    start, end = month_bounds(year, month)
    return (
        Payment.objects.select_related("customer", "professional", "service")
        .filter(paid_at__gte=start, paid_at__lt=end)
        .order_by("paid_at")
    )


def _write_header(ws, headers):
    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col)
        cell.value = header
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal="center")


def _create_summary_sheet(wb, year, month, totals):
    ws = wb.active
    ws.title = "Summary"

    ws["A1"] = f"Payments Report - {date(year, month, 1):%m/%Y}"
    ws["A1"].font = Font(bold=True, size=16)
    ws.merge_cells("A1:C1")

    ws["A3"] = "Total received"
    ws["B3"] = float(totals["total"])
    ws["A4"] = "Number of payments"
    ws["B4"] = totals["count"]
    for cell in ("A3", "A4"):
        ws[cell].font = Font(bold=True)

    row = 6
    for col, header in enumerate(["Payment type", "Count", "Total"], 1):
        cell = ws.cell(row=row, column=col, value=header)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
    for item in totals["by_type"]:
        row += 1
        ws.cell(row=row, column=1, value=item["payment_type"])
        ws.cell(row=row, column=2, value=item["count"])
        ws.cell(row=row, column=3, value=float(item["total"]))

    ws.column_dimensions["A"].width = 25
    ws.column_dimensions["B"].width = 20
    ws.column_dimensions["C"].width = 20


def _create_payments_sheet(wb, payments):
    ws = wb.create_sheet("Payments")
    headers = ["Date", "Customer", "CPF", "Payment type", "Amount", "Professional", "Service", "Notes"]
    _write_header(ws, headers)

    for row, payment in enumerate(payments, 2):
        ws.cell(row=row, column=1, value=timezone.localtime(payment.paid_at).strftime("%d/%m/%Y %H:%M"))
        ws.cell(row=row, column=2, value=payment.customer.full_name)
        ws.cell(row=row, column=3, value=payment.customer.cpf)
        ws.cell(row=row, column=4, value=payment.payment_type)
        ws.cell(row=row, column=5, value=float(payment.amount))
        ws.cell(row=row, column=6, value=payment.professional.display_name if payment.professional else "")
        ws.cell(row=row, column=7, value=payment.service.display_name if payment.service else "")
        ws.cell(row=row, column=8, value=payment.notes)

    for col in range(1, len(headers) + 1):
        ws.column_dimensions[get_column_letter(col)].width = 18


def build_monthly_workbook(year, month):
    """Workbook with a summary sheet and one row per payment of the month"""
    payments = payments_for_month(year, month)
    totals = payment_totals(payments)
    logger.info(f"Building payments report for {month:02d}/{year}: {totals['count']} payments")

    wb = Workbook()
    _create_summary_sheet(wb, year, month, totals)
    _create_payments_sheet(wb, payments)
    return wb
