import json
from unittest import mock

import pytest
from django.urls import reverse

from syncro.appointments import views
from syncro.appointments.availability import AvailabilityResult
from syncro.appointments.models import Appointment

from ..helpers import aware

pytestmark = pytest.mark.django_db


@pytest.fixture
def booking_data(customer, service, professional, room):
    return {
        "customer": customer.pk,
        "service": service.pk,
        "professional": professional.pk,
        "room": room.pk,
        "appointment_date": "2030-03-11",
        "appointment_time": "10:00",
        "cadence": "none",
        "occurrences": "1",
    }


class TestAppointmentCreateView:
    url = reverse("appointments:create")

    def test_requires_login(self, client):
        response = client.get(self.url)

        assert response.status_code == 302
        assert reverse("users:login") in response["Location"]

    def test_free_slot_is_booked_directly(self, auth_client, booking_data):
        response = auth_client.post(self.url, booking_data)

        assert response.status_code == 302
        appointment = Appointment.objects.get()
        assert appointment.scheduled_at == aware(2030, 3, 11, 10, 0)

    def test_conflict_asks_for_confirmation(self, auth_client, booking_data, make_appointment):
        make_appointment(aware(2030, 3, 11, 10, 30))

        response = auth_client.post(self.url, booking_data)

        assert response.status_code == 200
        assert response.context["availability_warning"].warning
        assert Appointment.objects.count() == 1

    def test_confirmed_conflict_is_booked(self, auth_client, booking_data, make_appointment):
        make_appointment(aware(2030, 3, 11, 10, 30))

        response = auth_client.post(self.url, {**booking_data, "confirm": "1"})

        assert response.status_code == 302
        assert Appointment.objects.count() == 2

    def test_weekly_series(self, auth_client, booking_data):
        response = auth_client.post(self.url, {**booking_data, "cadence": "weekly", "occurrences": "3"})

        assert response.status_code == 302
        assert Appointment.objects.count() == 3

    def test_missing_fields_are_shown_on_the_form(self, auth_client, booking_data):
        del booking_data["room"]

        response = auth_client.post(self.url, booking_data)

        assert response.status_code == 200
        assert "room" in response.context["form"].errors
        assert not Appointment.objects.exists()

    def test_past_date_is_a_form_error(self, auth_client, booking_data):
        response = auth_client.post(self.url, {**booking_data, "appointment_date": "2020-01-01"})

        assert response.status_code == 200
        assert response.context["form"].non_field_errors()
        assert not Appointment.objects.exists()

    def test_failed_check_blocks_booking(self, auth_client, booking_data):
        with mock.patch(
            "syncro.appointments.availability.check_professional_availability",
            return_value=AvailabilityResult.failed("down"),
        ):
            response = auth_client.post(self.url, booking_data)

        assert response.status_code == 200
        assert "Could not verify availability. Try again." in response.context["form"].non_field_errors()
        assert not Appointment.objects.exists()

    def test_failed_check_blocks_a_confirmed_booking(self, auth_client, booking_data):
        with mock.patch(
            "syncro.appointments.availability.check_room_availability",
            return_value=AvailabilityResult.failed("down"),
        ):
            response = auth_client.post(self.url, {**booking_data, "confirm": "1"})

        assert response.status_code == 200
        assert "Could not verify availability. Try again." in response.context["form"].non_field_errors()
        assert not Appointment.objects.exists()

    def test_too_many_occurrences_is_a_form_error(self, auth_client, booking_data):
        response = auth_client.post(self.url, {**booking_data, "cadence": "monthly", "occurrences": "200000"})

        assert response.status_code == 200
        assert "occurrences" in response.context["form"].errors
        assert not Appointment.objects.exists()

    def test_series_past_the_last_date_is_a_form_error(self, auth_client, booking_data):
        response = auth_client.post(
            self.url,
            {**booking_data, "appointment_date": "9999-06-01", "cadence": "monthly", "occurrences": "12"},
        )

        assert response.status_code == 200
        assert "occurrences" in response.context["form"].errors
        assert not Appointment.objects.exists()


class TestAppointmentStatusViews:
    def test_change_status(self, auth_client, make_appointment):
        appointment = make_appointment(aware(2030, 3, 11, 10, 0))

        response = auth_client.post(
            reverse("appointments:change-status", args=[appointment.pk]), {"status": Appointment.COMPLETED}
        )

        assert response.status_code == 302
        appointment.refresh_from_db()
        assert appointment.status == Appointment.COMPLETED

    def test_status_ajax(self, auth_client, make_appointment):
        appointment = make_appointment(aware(2030, 3, 11, 10, 0))

        response = auth_client.post(
            reverse("appointments:status-ajax", args=[appointment.pk]),
            data=json.dumps({"status": Appointment.CANCELLED}),
            content_type="application/json",
        )

        assert response.status_code == 200
        assert response.json()["appointment"]["status"] == Appointment.CANCELLED

    def test_status_ajax_rejects_unknown_status(self, auth_client, make_appointment):
        appointment = make_appointment(aware(2030, 3, 11, 10, 0))

        response = auth_client.post(
            reverse("appointments:status-ajax", args=[appointment.pk]),
            data=json.dumps({"status": "archived"}),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_status_ajax_rejects_a_non_object_body(self, auth_client, make_appointment):
        appointment = make_appointment(aware(2030, 3, 11, 10, 0))

        response = auth_client.post(
            reverse("appointments:status-ajax", args=[appointment.pk]),
            data=json.dumps([]),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert response.json()["success"] is False
        appointment.refresh_from_db()
        assert appointment.status == Appointment.PENDING

    def test_status_ajax_unknown_appointment(self, auth_client):
        response = auth_client.post(
            reverse("appointments:status-ajax", args=[999]),
            data=json.dumps({"status": Appointment.CANCELLED}),
            content_type="application/json",
        )

        assert response.status_code == 404


class TestAvailabilityJson:
    url = reverse("appointments:availability-json")

    def test_reports_conflicts(self, auth_client, make_appointment, professional, room):
        existing = make_appointment(aware(2030, 3, 11, 10, 0))

        response = auth_client.get(
            self.url, {"professional_id": professional.pk, "room_id": room.pk, "date": "2030-03-11", "time": "10:30"}
        )

        data = response.json()
        assert response.status_code == 200
        assert data["warning"] is True
        assert data["professional"]["count"] == 1
        assert data["professional"]["conflicts"][0]["id"] == existing.pk
        assert data["room"]["count"] == 1

    def test_missing_parameters(self, auth_client, professional):
        response = auth_client.get(self.url, {"professional_id": professional.pk})

        assert response.status_code == 400
        assert set(response.json()["errors"]) == {"room_id", "appointment_date", "appointment_time"}

    def test_unknown_room(self, auth_client, professional):
        response = auth_client.get(
            self.url, {"professional_id": professional.pk, "room_id": 999, "date": "2030-03-11", "time": "10:30"}
        )

        assert response.status_code == 404


class TestAppointmentsJson:
    def test_returns_calendar_events_in_range(self, auth_client, make_appointment):
        inside = make_appointment(aware(2030, 3, 11, 10, 0))
        make_appointment(aware(2030, 3, 20, 10, 0))

        response = auth_client.get(reverse("appointments:appointments-json"), {"start": "2030-03-10", "end": "2030-03-12"})

        events = response.json()
        assert [event["id"] for event in events] == [inside.pk]
        assert events[0]["className"] == views.STATUS_COLORS[Appointment.PENDING]
        assert events[0]["title"] == "Maria Oliveira - Facial cleansing"


class TestAppointmentListView:
    def test_day_filter(self, auth_client, make_appointment):
        wanted = make_appointment(aware(2030, 3, 11, 10, 0))
        make_appointment(aware(2030, 3, 12, 10, 0))

        response = auth_client.get(reverse("appointments:list"), {"date": "2030-03-11"})

        assert list(response.context["appointments"]) == [wanted]
        assert response.context["status_counts"][Appointment.PENDING] == 1

    def test_edit_moves_the_appointment(self, auth_client, make_appointment, customer, service, professional, room):
        appointment = make_appointment(aware(2030, 3, 11, 10, 0))

        response = auth_client.post(
            reverse("appointments:edit", args=[appointment.pk]),
            {
                "customer": customer.pk,
                "service": service.pk,
                "professional": professional.pk,
                "room": room.pk,
                "status": Appointment.RESCHEDULED,
                "appointment_date": "2030-03-12",
                "appointment_time": "15:00",
            },
        )

        assert response.status_code == 302
        appointment.refresh_from_db()
        assert appointment.scheduled_at == aware(2030, 3, 12, 15, 0)
        assert appointment.status == Appointment.RESCHEDULED

    def test_edit_cannot_move_into_the_past(self, auth_client, make_appointment, customer, service, professional, room):
        appointment = make_appointment(aware(2030, 3, 11, 10, 0))

        response = auth_client.post(
            reverse("appointments:edit", args=[appointment.pk]),
            {
                "customer": customer.pk,
                "service": service.pk,
                "professional": professional.pk,
                "room": room.pk,
                "status": Appointment.PENDING,
                "appointment_date": "2001-01-01",
                "appointment_time": "09:00",
            },
        )

        assert response.status_code == 200
        assert response.context["form"].non_field_errors()
        appointment.refresh_from_db()
        assert appointment.scheduled_at == aware(2030, 3, 11, 10, 0)

    def test_past_appointment_status_can_be_edited(self, auth_client, make_appointment, customer, service,
                                                   professional, room):
        appointment = make_appointment(aware(2020, 3, 11, 10, 0))

        response = auth_client.post(
            reverse("appointments:edit", args=[appointment.pk]),
            {
                "customer": customer.pk,
                "service": service.pk,
                "professional": professional.pk,
                "room": room.pk,
                "status": Appointment.COMPLETED,
                "appointment_date": "2020-03-11",
                "appointment_time": "10:00",
            },
        )

        assert response.status_code == 302
        appointment.refresh_from_db()
        assert appointment.status == Appointment.COMPLETED
