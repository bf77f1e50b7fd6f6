"""
Professionals Views
"""
import logging

from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.db.models import Count, ProtectedError
from django.shortcuts import redirect
from django.urls import reverse_lazy
from django.utils.translation import gettext as _
from django.views.generic import CreateView, DeleteView, ListView, UpdateView

from .models import Professional

logger = logging.getLogger(__name__)


class ProfessionalListView(LoginRequiredMixin, ListView):
    model = Professional
    template_name = "professionals/professional_list.html"
    context_object_name = "professionals"
    paginate_by = 50

    def get_queryset(self):
        queryset = Professional.objects.annotate(appointment_count=Count("appointments"))
        search = self.request.GET.get("search")
        if search:
            queryset = queryset.filter(display_name__icontains=search)
        return queryset.order_by("display_name")


class ProfessionalCreateView(LoginRequiredMixin, CreateView):
    model = Professional
    template_name = "professionals/professional_form.html"
    fields = ["display_name"]
    success_url = reverse_lazy("professionals:list")

    def form_valid(self, form):
        messages.success(self.request, _("Professional created successfully!"))
        return super().form_valid(form)


class ProfessionalUpdateView(LoginRequiredMixin, UpdateView):
    model = Professional
    template_name = "professionals/professional_form.html"
    fields = ["display_name"]
    success_url = reverse_lazy("professionals:list")

    def form_valid(self, form):
        messages.success(self.request, _("Professional updated successfully!"))
        return super().form_valid(form)


class ProfessionalDeleteView(LoginRequiredMixin, DeleteView):
    model = Professional
    template_name = "professionals/professional_confirm_delete.html"
    success_url = reverse_lazy("professionals:list")

    def form_valid(self, form):
        try:
            self.object.delete()
        except ProtectedError:
            logger.info(f"Refused to delete professional {self.object.pk}: has appointments")
            messages.error(self.request, _("This professional has appointments and cannot be deleted."))
            return redirect(self.success_url)
        messages.success(self.request, _("Professional deleted successfully."))
        return redirect(self.success_url)
