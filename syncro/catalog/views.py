"""
Services Views
"""
from django.contrib import messages
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.shortcuts import get_object_or_404, redirect
from django.urls import reverse_lazy
from django.utils.translation import gettext as _
from django.views.generic import DeleteView, FormView, ListView

from syncro.core.forms import DisplayNameForm

from .models import Service
from .services import service_registry


class ServiceListView(LoginRequiredMixin, ListView):
    """List all services"""
    model = Service
    template_name = "catalog/service_list.html"
    context_object_name = "services"
    paginate_by = 50

    def get_queryset(self):
        queryset = service_registry.all()
        search = self.request.GET.get("search")
        if search:
            queryset = queryset.filter(display_name__icontains=search)
        return queryset

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["current_search"] = self.request.GET.get("search", "")
        return context


class ServiceCreateView(LoginRequiredMixin, FormView):
    """Create a new service"""
    form_class = DisplayNameForm
    template_name = "catalog/service_form.html"
    success_url = reverse_lazy("catalog:service-list")

    def form_valid(self, form):
        try:
            service_registry.create(form.cleaned_data["display_name"])
        except ValidationError as e:
            form.add_error(None, e)
            return self.form_invalid(form)
        except DatabaseError:
            messages.error(self.request, _("Could not save the service. Try again."))
            return self.form_invalid(form)
        messages.success(self.request, _("Service created successfully!"))
        return super().form_valid(form)


class ServiceUpdateView(LoginRequiredMixin, FormView):
    """Rename a service"""
    form_class = DisplayNameForm
    template_name = "catalog/service_form.html"
    success_url = reverse_lazy("catalog:service-list")

    def dispatch(self, request, *args, **kwargs):
        self.object = get_object_or_404(Service, pk=kwargs["pk"])
        return super().dispatch(request, *args, **kwargs)

    def get_initial(self):
        return {"display_name": self.object.display_name}

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["service"] = self.object
        return context

    def form_valid(self, form):
        try:
            service_registry.update(self.object, form.cleaned_data["display_name"])
        except ValidationError as e:
            form.add_error(None, e)
            return self.form_invalid(form)
        except DatabaseError:
            messages.error(self.request, _("Could not save the service. Try again."))
            return self.form_invalid(form)
        messages.success(self.request, _("Service updated successfully!"))
        return super().form_valid(form)


class ServiceDeleteView(LoginRequiredMixin, DeleteView):
    """Delete a service that no appointment uses"""
    model = Service
    template_name = "catalog/service_confirm_delete.html"
    success_url = reverse_lazy("catalog:service-list")

    def form_valid(self, form):
        try:
            service_registry.delete(self.object)
        except ValidationError as e:
            messages.error(self.request, " ".join(e.messages))
            return redirect(self.success_url)
        except DatabaseError:
            messages.error(self.request, _("Could not delete the service. Try again."))
            return redirect(self.success_url)
        messages.success(self.request, _("Service deleted successfully."))
        return redirect(self.success_url)
