"""
Appointments Forms
"""
from django import forms
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from syncro.catalog.models import Service
from syncro.customers.models import Customer
from syncro.professionals.models import Professional
from syncro.resources.models import Room

from .models import Appointment
from .recurrence import CADENCE_CHOICES, MAX_OCCURRENCES, NONE
from .validators import combine_date_time, validate_booking, validate_not_past


def _add_validator_errors(form, errors):
    """Attach validator messages to fields, skipping fields Django already rejected"""
    field_map = {
        "customer_id": "customer",
        "service_id": "service",
        "professional_id": "professional",
        "room_id": "room",
    }
    for key, message in errors.items():
        field_name = field_map.get(key, key)
        if field_name in form.errors:
            continue
        form.add_error(field_name if field_name in form.fields else None, message)


class AppointmentBookingForm(forms.Form):
    """Booking form; required checks are done by validate_booking"""
    customer = forms.ModelChoiceField(Customer.objects.all(), required=False, label=_("Customer"))
    service = forms.ModelChoiceField(Service.objects.all(), required=False, label=_("Service"))
    professional = forms.ModelChoiceField(Professional.objects.all(), required=False, label=_("Professional"))
    room = forms.ModelChoiceField(Room.objects.all(), required=False, label=_("Room"))
    appointment_date = forms.DateField(
        required=False,
        label=_("Date"),
        widget=forms.DateInput(attrs={"type": "date", "class": "form-control"}),
    )
    appointment_time = forms.TimeField(
        required=False,
        label=_("Time"),
        widget=forms.TimeInput(attrs={"type": "time", "class": "form-control"}),
    )
    cadence = forms.ChoiceField(choices=CADENCE_CHOICES, required=False, initial=NONE, label=_("Repeat"))
    occurrences = forms.IntegerField(
        required=False,
        initial=1,
        label=_("Occurrences"),
        widget=forms.NumberInput(attrs={"min": 1, "max": MAX_OCCURRENCES, "class": "form-control"}),
    )
    # Set once the user has seen and accepted the conflict warning
    confirm = forms.BooleanField(required=False, widget=forms.HiddenInput)

    def clean(self):
        cleaned_data = super().clean()
        cadence = cleaned_data.get("cadence") or NONE
        cleaned_data["cadence"] = cadence

        occurrences = cleaned_data.get("occurrences")
        if cadence == NONE:
            occurrences = None
        elif occurrences is None:
            occurrences = 0

        errors = validate_booking(
            {
                "customer_id": getattr(cleaned_data.get("customer"), "pk", None),
                "service_id": getattr(cleaned_data.get("service"), "pk", None),
                "professional_id": getattr(cleaned_data.get("professional"), "pk", None),
                "room_id": getattr(cleaned_data.get("room"), "pk", None),
                "appointment_date": cleaned_data.get("appointment_date"),
                "appointment_time": cleaned_data.get("appointment_time"),
                "occurrences": occurrences,
            }
        )
        _add_validator_errors(self, errors)
        cleaned_data["occurrences"] = occurrences or 1
        return cleaned_data

    @property
    def scheduled_at(self):
        return combine_date_time(self.cleaned_data["appointment_date"], self.cleaned_data["appointment_time"])


class AppointmentUpdateForm(forms.ModelForm):
    """Full edit of an existing appointment, status included"""
    appointment_date = forms.DateField(
        label=_("Date"),
        widget=forms.DateInput(attrs={"type": "date", "class": "form-control"}),
    )
    appointment_time = forms.TimeField(
        label=_("Time"),
        widget=forms.TimeInput(attrs={"type": "time", "class": "form-control"}),
    )

    class Meta:
        model = Appointment
        fields = ["customer", "service", "professional", "room", "status"]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.pk and not self.is_bound:
            local = timezone.localtime(self.instance.scheduled_at)
            self.initial.setdefault("appointment_date", local.date())
            self.initial.setdefault("appointment_time", local.time().replace(second=0, microsecond=0))

    def clean(self):
        cleaned_data = super().clean()
        day = cleaned_data.get("appointment_date")
        at = cleaned_data.get("appointment_time")
        if day is None or at is None:
            return cleaned_data

        # Only a move is checked; past appointments can still have their status updated
        scheduled_at = combine_date_time(day, at)
        if scheduled_at != self.instance.scheduled_at.replace(second=0, microsecond=0):
            past_error = validate_not_past(scheduled_at)
            if past_error:
                self.add_error(None, past_error)
        return cleaned_data

    def save(self, commit=True):
        self.instance.scheduled_at = combine_date_time(
            self.cleaned_data["appointment_date"], self.cleaned_data["appointment_time"]
        )
        return super().save(commit=commit)
