from datetime import datetime

from django.utils import timezone


def aware(year, month, day, hour=0, minute=0, second=0):
    """Aware datetime in the project time zone"""
    return timezone.make_aware(datetime(year, month, day, hour, minute, second))
