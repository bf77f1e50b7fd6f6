"""
Appointment queries and writes used by the views and the JSON endpoints.
"""
import logging
from datetime import timedelta

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from django.utils.translation import gettext as _

from syncro.core.ui_state import start_of_day

from .availability import check_professional_availability, check_room_availability
from .models import Appointment
from .recurrence import NONE, generate_dates
from .validators import PAST_DATE_KEY, combine_date_time, validate_booking, validate_not_past

logger = logging.getLogger(__name__)


def appointments_queryset():
    return Appointment.objects.select_related("customer", "service", "professional", "room")


def appointments_for_day(day):
    """Appointments of one local calendar day, earliest first"""
    logger.debug(f"Fetching appointments for {day}")
    return appointments_queryset().filter(
        scheduled_at__gte=start_of_day(day),
        scheduled_at__lt=start_of_day(day + timedelta(days=1)),
    ).order_by("scheduled_at")


def appointments_in_range(start_date, end_date):
    """Appointments from start_date 00:00 up to, not including, end_date 00:00"""
    logger.debug(f"Fetching appointments from {start_date:%d/%m/%Y} to {end_date:%d/%m/%Y}")
    return appointments_queryset().filter(
        scheduled_at__gte=start_of_day(start_date),
        scheduled_at__lt=start_of_day(end_date),
    ).order_by("scheduled_at")


def appointments_between(start, end):
    """Appointments inside the closed datetime interval [start, end]"""
    return appointments_queryset().filter(
        scheduled_at__gte=start,
        scheduled_at__lte=end,
    ).order_by("scheduled_at")


def appointments_for_customer(customer_id):
    return appointments_queryset().filter(customer_id=customer_id).order_by("-scheduled_at")


def appointments_for_customer_cpf(cpf):
    """Appointment history for a CPF, newest first; empty when the CPF is unknown"""
    from syncro.customers.models import Customer
    from syncro.customers.services import normalize_cpf

    try:
        customer = Customer.objects.get(cpf=normalize_cpf(cpf))
        return list(appointments_for_customer(customer.pk))
    except Customer.DoesNotExist:
        logger.info(f"Customer not found for CPF {cpf}")
        return []
    except DatabaseError as e:
        logger.error(f"Error fetching appointments for CPF {cpf}: {e}")
        return []


def create_appointment(*, customer, service, professional, room, scheduled_at,
                       status=Appointment.PENDING, now=None):
    """
    Insert one appointment after re-checking required fields and the past
    date rule. Conflicts are only logged; they never block the insert.
    """
    errors = {}
    for field_name, value in (("customer_id", customer), ("service_id", service),
                              ("professional_id", professional), ("room_id", room)):
        if value is None:
            errors[field_name] = _("This field is required.")
    if scheduled_at is None:
        errors["appointment_date"] = _("Select a date")
    else:
        past_error = validate_not_past(scheduled_at, now=now)
        if past_error:
            errors[PAST_DATE_KEY] = past_error
    if errors:
        raise ValidationError(errors)

    professional_result = check_professional_availability(professional.pk, scheduled_at)
    logger.debug(f"Professional {professional.pk} has {professional_result.count} appointments near this time")
    room_result = check_room_availability(room.pk, scheduled_at)
    logger.debug(f"Room {room.pk} has {room_result.count} appointments near this time")

    try:
        appointment = Appointment.objects.create(
            customer=customer,
            service=service,
            professional=professional,
            room=room,
            scheduled_at=scheduled_at,
            status=status,
        )
    except DatabaseError as e:
        logger.error(f"Error creating appointment: {e}")
        raise

    logger.debug(f"Appointment created with ID: {appointment.pk}")
    return appointment


def book_appointments(*, customer, service, professional, room, appointment_date, appointment_time,
                      cadence=NONE, occurrences=1, status=Appointment.PENDING, now=None):
    """
    Create every occurrence of a (possibly recurring) booking.

    The series is written in one transaction: either all occurrences are
    stored or none is.
    """
    errors = validate_booking(
        {
            "customer_id": customer and customer.pk,
            "service_id": service and service.pk,
            "professional_id": professional and professional.pk,
            "room_id": room and room.pk,
            "appointment_date": appointment_date,
            "appointment_time": appointment_time,
            "occurrences": occurrences if cadence != NONE else None,
        },
        now=now,
    )
    if errors:
        raise ValidationError(errors)

    try:
        dates = generate_dates(appointment_date, cadence, occurrences)
    except ValueError as e:
        raise ValidationError({"occurrences": str(e)}) from e
    with transaction.atomic():
        created = [
            create_appointment(
                customer=customer,
                service=service,
                professional=professional,
                room=room,
                scheduled_at=combine_date_time(day, appointment_time),
                status=status,
                now=now,
            )
            for day in dates
        ]

    logger.info(f"{len(created)} appointment(s) booked for customer {customer.pk}")
    return created


def change_status(appointment, new_status):
    """
    Move an appointment to any of the four statuses.

    Every transition between statuses is allowed. Only status and
    updated_at are written; if the write fails the instance keeps its
    previous status and the error propagates.
    """
    if new_status not in dict(Appointment.STATUS_CHOICES):
        raise ValidationError({"status": _("Invalid status: %(status)s") % {"status": new_status}})

    old_status = appointment.status
    logger.debug(f"Changing appointment {appointment.pk} status: {old_status} -> {new_status}")
    if old_status == new_status:
        return appointment

    appointment.status = new_status
    try:
        appointment.save(update_fields=["status", "updated_at"])
    except DatabaseError as e:
        appointment.status = old_status
        logger.error(f"Error updating status of appointment {appointment.pk}: {e}")
        raise

    return appointment
