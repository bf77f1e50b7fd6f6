"""
Payments Views
"""
import logging
from datetime import datetime

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.db import DatabaseError
from django.db.models import Q
from django.http import HttpResponse
from django.urls import reverse_lazy
from django.utils import timezone
from django.utils.translation import gettext as _
from django.views import View
from django.views.generic import CreateView, DeleteView, ListView, UpdateView

from syncro.core.ui_state import UIState

from .forms import PaymentForm
from .models import Payment
from .services import build_monthly_workbook, payment_totals, payments_between

logger = logging.getLogger(__name__)


class PaymentListView(LoginRequiredMixin, ListView):
    """Payments of the selected date range, with totals"""
    model = Payment
    template_name = "payments/payment_list.html"
    context_object_name = "payments"
    paginate_by = 50

    def get_queryset(self):
        date_range = UIState.load(self.request).date_range
        queryset = payments_between(date_range.start, date_range.end)

        payment_type = self.request.GET.get("payment_type")
        if payment_type:
            queryset = queryset.filter(payment_type__iexact=payment_type)

        search = self.request.GET.get("search")
        if search:
            queryset = queryset.filter(
                Q(customer__name__icontains=search)
                | Q(customer__surname__icontains=search)
                | Q(customer__cpf__startswith=search)
                | Q(notes__icontains=search)
            )
        return queryset

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["totals"] = payment_totals(self.object_list)
        context["current_month"] = timezone.localdate().strftime("%Y-%m")
        context["current_payment_type"] = self.request.GET.get("payment_type", "")
        context["current_search"] = self.request.GET.get("search", "")
        return context


class PaymentCreateView(LoginRequiredMixin, CreateView):
    model = Payment
    form_class = PaymentForm
    template_name = "payments/payment_form.html"
    success_url = reverse_lazy("payments:list")

    def get_initial(self):
        initial = super().get_initial()
        if self.request.GET.get("customer"):
            initial["customer"] = self.request.GET["customer"]
        return initial

    def form_valid(self, form):
        try:
            response = super().form_valid(form)
        except DatabaseError as e:
            logger.error(f"Error creating payment: {e}")
            messages.error(self.request, _("Error saving payment. Try again."))
            return self.form_invalid(form)
        messages.success(self.request, _("Payment registered successfully!"))
        return response


class PaymentUpdateView(LoginRequiredMixin, UpdateView):
    model = Payment
    form_class = PaymentForm
    template_name = "payments/payment_form.html"
    success_url = reverse_lazy("payments:list")

    def form_valid(self, form):
        try:
            response = super().form_valid(form)
        except DatabaseError as e:
            logger.error(f"Error updating payment {self.object.pk}: {e}")
            messages.error(self.request, _("Error saving payment. Try again."))
            return self.form_invalid(form)
        messages.success(self.request, _("Payment updated successfully!"))
        return response


class PaymentDeleteView(LoginRequiredMixin, DeleteView):
    model = Payment
    template_name = "payments/payment_confirm_delete.html"
    success_url = reverse_lazy("payments:list")

    def form_valid(self, form):
        messages.success(self.request, _("Payment deleted successfully."))
        return super().form_valid(form)


class PaymentExportView(LoginRequiredMixin, View):
    """Download the payments of one month (?month=YYYY-MM) as an Excel file"""

    def get(self, request):
        selected_month = request.GET.get("month")
        try:
            selected_date = datetime.strptime(selected_month, "%Y-%m") if selected_month else timezone.localdate()
        except ValueError:
            selected_date = timezone.localdate()

        wb = build_monthly_workbook(selected_date.year, selected_date.month)

        response = HttpResponse(
            content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        filename = f"Payments_{selected_date.year}_{selected_date.month:02d}.xlsx"
        response["Content-Disposition"] = f'attachment; filename="{filename}"'
        wb.save(response)
        return response
