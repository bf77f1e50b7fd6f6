"""
Customers Views
"""
import logging

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.db import DatabaseError
from django.db.models import Count, ProtectedError
from django.http import Http404
from django.shortcuts import redirect
from django.urls import reverse, reverse_lazy
from django.utils.translation import gettext as _
from django.views.generic import DeleteView, DetailView, FormView, ListView, UpdateView

from syncro.appointments.services import appointments_for_customer

from .forms import CustomerForm
from .models import Customer
from .services import create_customer, normalize_cpf, search_customers, update_customer

logger = logging.getLogger(__name__)


class CustomerListView(LoginRequiredMixin, ListView):
    """Display all customers with search"""
    model = Customer
    template_name = "customers/customer_list.html"
    context_object_name = "customers"
    paginate_by = 50

    def get_queryset(self):
        return search_customers(self.request.GET.get("search")).annotate(
            appointment_count=Count("appointments")
        )

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["total_count"] = Customer.objects.count()
        context["current_search"] = self.request.GET.get("search", "")
        return context


class CustomerCreateView(LoginRequiredMixin, FormView):
    """Register a customer, optionally with a captured photo"""
    form_class = CustomerForm
    template_name = "customers/customer_form.html"

    def form_valid(self, form):
        try:
            customer = create_customer(form.cleaned_data, form.cleaned_data.get("photo_data"))
        except DatabaseError:
            messages.error(self.request, _("Could not save the customer. Try again."))
            return self.form_invalid(form)
        messages.success(self.request, _("Customer created successfully!"))
        return redirect("customers:profile", cpf=customer.cpf)


class CustomerProfileView(LoginRequiredMixin, DetailView):
    """Customer profile, looked up by CPF, with appointment history"""
    model = Customer
    template_name = "customers/customer_profile.html"
    context_object_name = "customer"

    def get_object(self, queryset=None):
        try:
            return Customer.objects.get(cpf=normalize_cpf(self.kwargs["cpf"]))
        except Customer.DoesNotExist:
            raise Http404(_("Customer not found"))

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        appointments = appointments_for_customer(self.object.pk)
        context["appointments"] = appointments[:20]
        context["total_appointments"] = appointments.count()
        return context


class CustomerUpdateView(LoginRequiredMixin, UpdateView):
    """Edit customer information"""
    model = Customer
    form_class = CustomerForm
    template_name = "customers/customer_form.html"

    def form_valid(self, form):
        try:
            self.object = update_customer(form.instance, form.cleaned_data, form.cleaned_data.get("photo_data"))
        except DatabaseError:
            messages.error(self.request, _("Could not save the customer. Try again."))
            return self.form_invalid(form)
        messages.success(self.request, _("Customer updated successfully!"))
        return redirect(self.get_success_url())

    def get_success_url(self):
        return reverse("customers:profile", kwargs={"cpf": self.object.cpf})


class CustomerDeleteView(LoginRequiredMixin, DeleteView):
    """Delete a customer without appointments or payments"""
    model = Customer
    template_name = "customers/customer_confirm_delete.html"
    success_url = reverse_lazy("customers:list")

    def form_valid(self, form):
        try:
            self.object.delete()
        except ProtectedError:
            logger.info(f"Refused to delete customer {self.object.pk}: has related records")
            messages.error(self.request, _("This customer has appointments or payments and cannot be deleted."))
            return redirect("customers:profile", cpf=self.object.cpf)
        messages.success(self.request, _("Customer deleted successfully."))
        return redirect(self.success_url)
