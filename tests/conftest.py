from datetime import date, time

import pytest

from syncro.appointments.models import Appointment
from syncro.catalog.models import Service
from syncro.customers.models import Customer
from syncro.professionals.models import Professional
from syncro.resources.models import Room


@pytest.fixture
def customer(db):
    return Customer.objects.create(name="Maria", surname="Oliveira", cpf="52998224725", phone="11900000001")


@pytest.fixture
def other_customer(db):
    return Customer.objects.create(name="Joana", surname="Pereira", cpf="11144477735", phone="11900000002")


@pytest.fixture
def service(db):
    return Service.objects.create(display_name="Facial cleansing")


@pytest.fixture
def professional(db):
    return Professional.objects.create(display_name="Ana Souza")


@pytest.fixture
def room(db):
    return Room.objects.create(display_name="Room 1")


@pytest.fixture
def make_appointment(customer, service, professional, room):
    def _make(scheduled_at, **overrides):
        fields = {
            "customer": customer,
            "service": service,
            "professional": professional,
            "room": room,
            "scheduled_at": scheduled_at,
        }
        fields.update(overrides)
        return Appointment.objects.create(**fields)

    return _make


@pytest.fixture
def user(django_user_model):
    return django_user_model.objects.create_user(email="staff@example.com", password="secret-pass", name="Staff")


@pytest.fixture
def auth_client(client, user):
    client.force_login(user)
    return client


@pytest.fixture
def future_day():
    return date(2030, 3, 11)


@pytest.fixture
def ten_am():
    return time(10, 0)
