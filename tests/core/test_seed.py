from io import StringIO

import pytest
from django.core.management import call_command

from syncro.appointments.availability import check_professional_availability, check_room_availability
from syncro.appointments.models import Appointment
from syncro.professionals.models import Professional

pytestmark = pytest.mark.django_db


def test_seeded_agenda_has_no_conflicts():
    call_command("seed_syncro", days=2, stdout=StringIO())

    assert Appointment.objects.exists()
    for appointment in Appointment.objects.all():
        assert check_professional_availability(
            appointment.professional_id, appointment.scheduled_at, exclude_id=appointment.pk
        ).count == 0
        assert check_room_availability(appointment.room_id, appointment.scheduled_at, exclude_id=appointment.pk).count == 0


def test_each_professional_keeps_to_one_room():
    call_command("seed_syncro", days=1, stdout=StringIO())

    for professional in Professional.objects.all():
        appointments = Appointment.objects.filter(professional=professional).order_by()
        assert appointments.values("room_id").distinct().count() == 1
