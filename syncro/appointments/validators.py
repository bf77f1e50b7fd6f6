"""
Booking validation.

Every problem is collected so the form can show them all at once. The
mapping is keyed by form field; a past date is reported under
"availability" so it can be told apart from a missing field.
"""
from datetime import date, datetime, time

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_time
from django.utils.translation import gettext as _

from .recurrence import MAX_OCCURRENCES

PAST_DATE_KEY = "availability"

REQUIRED_FIELDS = [
    ("customer_id", lambda: _("Select a customer")),
    ("service_id", lambda: _("Select a service")),
    ("professional_id", lambda: _("Select a professional")),
    ("room_id", lambda: _("Select a room")),
    ("appointment_date", lambda: _("Select a date")),
    ("appointment_time", lambda: _("Select a time")),
]


def combine_date_time(day, at):
    """Aware datetime for a local date and time in the current time zone"""
    return timezone.make_aware(datetime.combine(day, at))


def _as_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date(value)


def _as_time(value):
    if isinstance(value, time):
        return value
    return parse_time(value)


def validate_not_past(instant, now=None):
    """Return the past-date error for instant, or None"""
    now = now or timezone.now()
    if instant < now:
        return _("Appointments cannot be scheduled in the past")
    return None


def validate_booking(data, now=None):
    """
    Validate a booking submission.

    data holds customer_id, service_id, professional_id, room_id,
    appointment_date, appointment_time and, for recurring bookings,
    occurrences. Dates and times may be objects or ISO strings.

    Returns a dict of field name to message; empty means valid.
    """
    errors = {}

    for field_name, message in REQUIRED_FIELDS:
        if data.get(field_name) in (None, ""):
            errors[field_name] = message()

    day = at = None
    if "appointment_date" not in errors:
        try:
            day = _as_date(data["appointment_date"])
        except ValueError:
            day = None
        if day is None:
            errors["appointment_date"] = _("Enter a valid date")
    if "appointment_time" not in errors:
        try:
            at = _as_time(data["appointment_time"])
        except ValueError:
            at = None
        if at is None:
            errors["appointment_time"] = _("Enter a valid time")

    occurrences = data.get("occurrences")
    if occurrences is not None and occurrences < 1:
        errors["occurrences"] = _("Number of occurrences must be at least 1")
    elif occurrences is not None and occurrences > MAX_OCCURRENCES:
        errors["occurrences"] = _("Number of occurrences must be at most %(max)d") % {"max": MAX_OCCURRENCES}

    if day is not None and at is not None:
        past_error = validate_not_past(combine_date_time(day, at), now=now)
        if past_error:
            errors[PAST_DATE_KEY] = past_error

    return errors
