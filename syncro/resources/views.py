"""
Rooms Views
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

from .models import Room
from .services import room_registry


class RoomListView(LoginRequiredMixin, ListView):
    """List all rooms"""
    model = Room
    template_name = "resources/room_list.html"
    context_object_name = "rooms"
    paginate_by = 50

    def get_queryset(self):
        queryset = room_registry.all()
        search = self.request.GET.get("search")
        if search:
            queryset = queryset.filter(display_name__icontains=search)
        return queryset

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["current_search"] = self.request.GET.get("search", "")
        return context


class RoomCreateView(LoginRequiredMixin, FormView):
    """Create a new room"""
    form_class = DisplayNameForm
    template_name = "resources/room_form.html"
    success_url = reverse_lazy("resources:room-list")

    def form_valid(self, form):
        try:
            room_registry.create(form.cleaned_data["display_name"])
        except ValidationError as e:
            form.add_error(None, e)
            return self.form_invalid(form)
        except DatabaseError:
            messages.error(self.request, _("Could not save the room. Try again."))
            return self.form_invalid(form)
        messages.success(self.request, _("Room created successfully!"))
        return super().form_valid(form)


class RoomUpdateView(LoginRequiredMixin, FormView):
    """Rename a room"""
    form_class = DisplayNameForm
    template_name = "resources/room_form.html"
    success_url = reverse_lazy("resources:room-list")

    def dispatch(self, request, *args, **kwargs):
        self.object = get_object_or_404(Room, pk=kwargs["pk"])
        return super().dispatch(request, *args, **kwargs)

    def get_initial(self):
        return {"display_name": self.object.display_name}

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["room"] = self.object
        return context

    def form_valid(self, form):
        try:
            room_registry.update(self.object, form.cleaned_data["display_name"])
        except ValidationError as e:
            form.add_error(None, e)
            return self.form_invalid(form)
        except DatabaseError:
            messages.error(self.request, _("Could not save the room. Try again."))
            return self.form_invalid(form)
        messages.success(self.request, _("Room updated successfully!"))
        return super().form_valid(form)


class RoomDeleteView(LoginRequiredMixin, DeleteView):
    """Delete a room that no appointment uses"""
    model = Room
    template_name = "resources/room_confirm_delete.html"
    success_url = reverse_lazy("resources:room-list")

    def form_valid(self, form):
        try:
            room_registry.delete(self.object)
        except ValidationError as e:
            messages.error(self.request, " ".join(e.messages))
            return redirect(self.success_url)
        except DatabaseError:
            messages.error(self.request, _("Could not delete the room. Try again."))
            return redirect(self.success_url)
        messages.success(self.request, _("Room deleted successfully."))
        return redirect(self.success_url)
