import logging

from django.db import DatabaseError, transaction
from django.db.models import Q

from .models import Customer
from .tasks import store_customer_photo_task

logger = logging.getLogger(__name__)

CUSTOMER_FIELDS = [
    "name", "surname", "nickname", "cpf", "email", "phone", "address",
    "emergency_name", "emergency_phone", "emergency_relationship", "birth_date",
]


def normalize_cpf(value):
    return "".join(ch for ch in (value or "") if ch.isdigit())


def search_customers(search=None):
    queryset = Customer.objects.all()
    if search:
        digits = normalize_cpf(search)
        criteria = (
            Q(name__icontains=search)
            | Q(surname__icontains=search)
            | Q(nickname__icontains=search)
            | Q(phone__icontains=search)
            | Q(email__icontains=search)
        )
        if digits:
            criteria |= Q(cpf__startswith=digits)
        queryset = queryset.filter(criteria)
    return queryset.order_by("name", "surname")


def get_customer_by_cpf(cpf):
    return Customer.objects.get(cpf=normalize_cpf(cpf))


def schedule_photo_upload(customer, data_url):
    """Upload the photo in the background once the customer row is committed"""
    transaction.on_commit(lambda: store_customer_photo_task.delay(customer.pk, data_url))
    logger.debug(f"Queued photo upload for customer {customer.pk}")


def create_customer(data, photo_data_url=None):
    """
    Create a customer and, when a captured photo is given, queue its upload.

    A failing upload never removes the customer.
    """
    fields = {key: data[key] for key in CUSTOMER_FIELDS if key in data}
    try:
        customer = Customer.objects.create(**fields)
    except DatabaseError as e:
        logger.error(f"Error creating customer: {e}")
        raise

    logger.info(f"Customer {customer.pk} created")
    if photo_data_url:
        schedule_photo_upload(customer, photo_data_url)
    return customer


def update_customer(customer, data, photo_data_url=None):
    for key in CUSTOMER_FIELDS:
        if key in data:
            setattr(customer, key, data[key])
    try:
        customer.save()
    except DatabaseError as e:
        logger.error(f"Error updating customer {customer.pk}: {e}")
        raise

    if photo_data_url:
        schedule_photo_upload(customer, photo_data_url)
    return customer
