"""
Appointments Views
"""
import json
import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.db.models import Count, Q
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect
from django.urls import reverse, reverse_lazy
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime, parse_time
from django.utils.translation import gettext as _
from django.utils.translation import gettext_lazy, ngettext
from django.views import View
from django.views.decorators.http import require_http_methods
from django.views.generic import DeleteView, DetailView, FormView, ListView, UpdateView

from syncro.core.ui_state import UIState, start_of_day
from syncro.professionals.models import Professional
from syncro.resources.models import Room

from .availability import check_booking
from .forms import AppointmentBookingForm, AppointmentUpdateForm
from .models import Appointment
from .services import (
    appointments_between,
    appointments_for_day,
    appointments_queryset,
    book_appointments,
    change_status,
)
from .validators import combine_date_time, validate_booking

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    Appointment.PENDING: gettext_lazy("Appointment reopened."),
    Appointment.COMPLETED: gettext_lazy("Appointment marked as completed."),
    Appointment.CANCELLED: gettext_lazy("Appointment cancelled."),
    Appointment.RESCHEDULED: gettext_lazy("Appointment marked as rescheduled."),
}

STATUS_COLORS = {
    Appointment.PENDING: "bg-warning",
    Appointment.COMPLETED: "bg-success",
    Appointment.CANCELLED: "bg-danger",
    Appointment.RESCHEDULED: "bg-info",
}


def _errors_to_form(form, error):
    """Copy a ValidationError raised by the service layer onto the form"""
    if hasattr(error, "error_dict"):
        for field_name, field_errors in error.message_dict.items():
            form.add_error(field_name if field_name in form.fields else None, field_errors)
    else:
        form.add_error(None, error.messages)


def _appointment_json(apt):
    return {
        "id": apt.id,
        "customerId": apt.customer_id,
        "customerName": apt.customer.full_name,
        "serviceId": apt.service_id,
        "serviceName": apt.service.display_name,
        "professionalId": apt.professional_id,
        "professionalName": apt.professional.display_name,
        "roomId": apt.room_id,
        "roomName": apt.room.display_name,
        "scheduledAt": timezone.localtime(apt.scheduled_at).isoformat(),
        "status": apt.status,
        "statusDisplay": apt.get_status_display(),
    }


class AppointmentListView(LoginRequiredMixin, ListView):
    """Appointments for a day, or for the selected date range"""
    model = Appointment
    template_name = "appointments/appointment_list.html"
    context_object_name = "appointments"
    paginate_by = 50

    def get_queryset(self):
        day = parse_date(self.request.GET.get("date", "") or "")
        if day:
            queryset = appointments_for_day(day)
        else:
            date_range = UIState.load(self.request).date_range
            queryset = appointments_between(date_range.start, date_range.end)

        status = self.request.GET.get("status")
        if status:
            queryset = queryset.filter(status=status)

        professional_id = self.request.GET.get("professional")
        if professional_id:
            queryset = queryset.filter(professional_id=professional_id)

        room_id = self.request.GET.get("room")
        if room_id:
            queryset = queryset.filter(room_id=room_id)

        search = self.request.GET.get("search")
        if search:
            queryset = queryset.filter(
                Q(customer__name__icontains=search)
                | Q(customer__surname__icontains=search)
                | Q(customer__nickname__icontains=search)
                | Q(service__display_name__icontains=search)
            )

        return queryset

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        counts = dict(
            self.object_list.order_by().values_list("status").annotate(total=Count("id"))
        )
        context["status_counts"] = {value: counts.get(value, 0) for value, _label in Appointment.STATUS_CHOICES}
        context["status_choices"] = Appointment.STATUS_CHOICES
        context["professionals"] = Professional.objects.all()
        context["rooms"] = Room.objects.all()
        context["current_status"] = self.request.GET.get("status", "")
        context["current_date"] = self.request.GET.get("date", "")
        context["current_search"] = self.request.GET.get("search", "")
        return context


class AppointmentCreateView(LoginRequiredMixin, FormView):
    """
    Booking flow: validate, check availability, warn on conflicts and
    create one appointment per recurrence date once the user confirms.
    """
    form_class = AppointmentBookingForm
    template_name = "appointments/appointment_form.html"
    success_url = reverse_lazy("appointments:list")

    def get_initial(self):
        initial = super().get_initial()
        for key in ("customer", "professional", "room", "service"):
            if self.request.GET.get(key):
                initial[key] = self.request.GET[key]
        day = parse_date(self.request.GET.get("date", "") or "")
        if day:
            initial["appointment_date"] = day
        return initial

    def form_valid(self, form):
        data = form.cleaned_data

        check = check_booking(data["professional"], data["room"], form.scheduled_at)
        if not check.available:
            form.add_error(None, check.message)
            return self.form_invalid(form)
        if check.warning and not data.get("confirm"):
            # Ask the user to confirm; the template re-posts with confirm=1
            return self.render_to_response(
                self.get_context_data(form=form, availability_warning=check)
            )

        try:
            created = book_appointments(
                customer=data["customer"],
                service=data["service"],
                professional=data["professional"],
                room=data["room"],
                appointment_date=data["appointment_date"],
                appointment_time=data["appointment_time"],
                cadence=data["cadence"],
                occurrences=data["occurrences"],
            )
        except ValidationError as e:
            _errors_to_form(form, e)
            return self.form_invalid(form)
        except DatabaseError:
            messages.error(self.request, _("Error creating appointment. Try again."))
            return self.form_invalid(form)

        messages.success(
            self.request,
            ngettext(
                "Appointment created successfully!",
                "%(count)d appointments created successfully!",
                len(created),
            ) % {"count": len(created)},
        )
        return super().form_valid(form)


class AppointmentDetailView(LoginRequiredMixin, DetailView):
    model = Appointment
    template_name = "appointments/appointment_detail.html"
    context_object_name = "appointment"

    def get_queryset(self):
        return appointments_queryset()

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        # Any other status is one click away
        context["status_actions"] = [
            (value, label) for value, label in Appointment.STATUS_CHOICES if value != self.object.status
        ]
        return context


class AppointmentUpdateView(LoginRequiredMixin, UpdateView):
    model = Appointment
    form_class = AppointmentUpdateForm
    template_name = "appointments/appointment_edit.html"

    def form_valid(self, form):
        scheduled_at = combine_date_time(
            form.cleaned_data["appointment_date"], form.cleaned_data["appointment_time"]
        )
        check = check_booking(
            form.cleaned_data["professional"], form.cleaned_data["room"], scheduled_at, exclude_id=self.object.pk
        )
        if check.warning:
            messages.warning(self.request, check.message)
        try:
            response = super().form_valid(form)
        except DatabaseError as e:
            logger.error(f"Error updating appointment {self.object.pk}: {e}")
            messages.error(self.request, _("Could not save the appointment. Try again."))
            return self.form_invalid(form)
        messages.success(self.request, _("Appointment updated successfully!"))
        return response

    def get_success_url(self):
        return reverse("appointments:detail", kwargs={"pk": self.object.pk})


class AppointmentDeleteView(LoginRequiredMixin, DeleteView):
    model = Appointment
    template_name = "appointments/appointment_confirm_delete.html"
    success_url = reverse_lazy("appointments:list")

    def form_valid(self, form):
        messages.success(self.request, _("Appointment deleted successfully."))
        return super().form_valid(form)


class AppointmentChangeStatusView(LoginRequiredMixin, View):
    """Handle status changes for appointments"""

    def post(self, request, pk):
        appointment = get_object_or_404(Appointment, pk=pk)
        new_status = request.POST.get("status")

        try:
            change_status(appointment, new_status)
        except ValidationError:
            messages.error(request, _("Invalid status."))
        except DatabaseError:
            messages.error(request, _("Could not update the status. Try again."))
        else:
            messages.success(request, STATUS_MESSAGES.get(new_status, _("Status updated.")))

        return redirect("appointments:detail", pk=appointment.pk)


@login_required
@require_http_methods(["GET"])
def check_availability(request):
    """
    Advisory conflict check for the booking form.

    Query parameters: professional_id, room_id, date (YYYY-MM-DD), time (HH:MM)
    and, when editing, exclude (the appointment being edited).
    """
    params = {
        "professional_id": request.GET.get("professional_id"),
        "room_id": request.GET.get("room_id"),
        "appointment_date": request.GET.get("date"),
        "appointment_time": request.GET.get("time"),
    }
    errors = {
        key: message for key, message in validate_booking(params).items()
        if key not in ("customer_id", "service_id")
    }
    if errors:
        return JsonResponse({"success": False, "errors": errors}, status=400)

    try:
        professional = Professional.objects.filter(pk=params["professional_id"]).first()
        room = Room.objects.filter(pk=params["room_id"]).first()
    except ValueError:
        professional = room = None
    if professional is None or room is None:
        return JsonResponse({"success": False, "message": _("Professional or room not found")}, status=404)

    scheduled_at = combine_date_time(parse_date(params["appointment_date"]), parse_time(params["appointment_time"]))
    exclude = request.GET.get("exclude", "")
    exclude_id = int(exclude) if exclude.isdigit() else None

    check = check_booking(professional, room, scheduled_at, exclude_id=exclude_id)

    return JsonResponse({
        "success": True,
        "available": check.available,
        "warning": check.warning,
        "message": check.message,
        "professional": {
            "count": check.professional.count,
            "conflicts": [_appointment_json(apt) for apt in check.professional.conflicts],
        },
        "room": {
            "count": check.room.count,
            "conflicts": [_appointment_json(apt) for apt in check.room.conflicts],
        },
    })


def _parse_bound(value):
    """Calendar bounds come either as dates or as ISO datetimes"""
    if not value:
        return None
    parsed = parse_datetime(value)
    if parsed:
        return parsed if timezone.is_aware(parsed) else timezone.make_aware(parsed)
    day = parse_date(value)
    if day:
        return start_of_day(day)
    return None


@login_required
@require_http_methods(["GET"])
def appointments_json(request):
    """
    Return appointments as JSON for the calendar
    """
    queryset = appointments_queryset()

    start = _parse_bound(request.GET.get("start"))
    end = _parse_bound(request.GET.get("end"))
    if start:
        queryset = queryset.filter(scheduled_at__gte=start)
    if end:
        queryset = queryset.filter(scheduled_at__lt=end)

    professional_id = request.GET.get("professional_id")
    if professional_id:
        queryset = queryset.filter(professional_id=professional_id)
    room_id = request.GET.get("room_id")
    if room_id:
        queryset = queryset.filter(room_id=room_id)

    events = []
    for apt in queryset.order_by("scheduled_at"):
        events.append({
            "id": apt.id,
            "title": f"{apt.customer.full_name} - {apt.service.display_name}",
            "start": timezone.localtime(apt.scheduled_at).isoformat(),
            "className": STATUS_COLORS.get(apt.status, "bg-primary"),
            "extendedProps": _appointment_json(apt),
        })

    return JsonResponse(events, safe=False)


@login_required
@require_http_methods(["POST"])
def update_status_ajax(request, appointment_id):
    """
    Change an appointment status from the calendar or the detail panel
    """
    try:
        appointment = appointments_queryset().get(id=appointment_id)
        data = json.loads(request.body or b"{}")
        if not isinstance(data, dict):
            raise ValueError(_("Request body must be a JSON object"))
        change_status(appointment, data.get("status"))

        return JsonResponse({
            "success": True,
            "message": STATUS_MESSAGES.get(appointment.status, _("Status updated.")),
            "appointment": _appointment_json(appointment),
        })

    except Appointment.DoesNotExist:
        return JsonResponse({
            "success": False,
            "message": "Appointment not found"
        }, status=404)
    except (ValueError, ValidationError) as e:
        message = " ".join(e.messages) if isinstance(e, ValidationError) else str(e)
        return JsonResponse({
            "success": False,
            "message": message
        }, status=400)
    except DatabaseError as e:
        logger.error(f"Error updating status of appointment {appointment_id}: {e}")
        return JsonResponse({
            "success": False,
            "message": _("Could not update the status. Try again.")
        }, status=500)
