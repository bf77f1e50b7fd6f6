"""
Double-booking detection for professionals and rooms.

Two appointments are "too close" when their start instants are within the
conflict window of each other (one hour either side by default). The check
is advisory: it reports conflicts but never prevents a booking, and there is
no lock between the check and the insert that follows it.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from django.conf import settings
from django.db import DatabaseError
from django.utils.translation import gettext as _

from .models import Appointment

logger = logging.getLogger(__name__)

# Shown in place of a real count when the conflict query failed
UNKNOWN_CONFLICT_COUNT = 999


@dataclass(frozen=True)
class ConflictWindow:
    start: datetime
    end: datetime

    def __contains__(self, instant):
        return self.start <= instant <= self.end


def conflict_window(instant: datetime) -> ConflictWindow:
    """Closed interval [instant - radius, instant + radius]"""
    radius = timedelta(minutes=getattr(settings, "CONFLICT_WINDOW_MINUTES", 60))
    return ConflictWindow(start=instant - radius, end=instant + radius)


@dataclass
class AvailabilityResult:
    """
    Outcome of a conflict query.

    Either the list of conflicting appointments, or the error that kept the
    query from running. Callers choose how to treat an error through
    has_conflicts(fail_closed=...).
    """
    conflicts: List[Appointment] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def failed(cls, error):
        return cls(conflicts=[], error=str(error))

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def count(self) -> int:
        return len(self.conflicts) if self.ok else UNKNOWN_CONFLICT_COUNT

    def has_conflicts(self, fail_closed: bool = True) -> bool:
        if not self.ok:
            return fail_closed
        return bool(self.conflicts)


def _find_conflicts(field_name, entity_id, instant, exclude_id=None) -> AvailabilityResult:
    window = conflict_window(instant)
    try:
        queryset = (
            Appointment.objects.select_related("customer", "service", "professional", "room")
            .filter(**{field_name: entity_id})
            .filter(scheduled_at__gte=window.start, scheduled_at__lte=window.end)
            .exclude(status=Appointment.CANCELLED)
            .order_by("scheduled_at")
        )
        if exclude_id is not None:
            queryset = queryset.exclude(pk=exclude_id)
        conflicts = list(queryset)
    except DatabaseError as e:
        logger.error(f"Error checking {field_name} {entity_id} at {instant:%d/%m/%Y %H:%M}: {e}")
        return AvailabilityResult.failed(e)

    logger.debug(f"{len(conflicts)} appointments found for {field_name} {entity_id} near {instant:%d/%m/%Y %H:%M}")
    return AvailabilityResult(conflicts=conflicts)


def check_professional_availability(professional_id, instant, exclude_id=None) -> AvailabilityResult:
    return _find_conflicts("professional_id", professional_id, instant, exclude_id=exclude_id)


def check_room_availability(room_id, instant, exclude_id=None) -> AvailabilityResult:
    return _find_conflicts("room_id", room_id, instant, exclude_id=exclude_id)


@dataclass
class BookingCheck:
    professional: AvailabilityResult
    room: AvailabilityResult
    available: bool
    warning: bool
    message: str

    @property
    def conflicts(self):
        return self.professional.conflicts + self.room.conflicts


def check_booking(professional, room, instant, exclude_id=None) -> BookingCheck:
    """
    Check a professional and a room for the same instant.

    A failed query makes the slot unavailable. Conflicts only produce a
    warning the user may confirm past; the professional warning takes
    precedence over the room warning.
    """
    professional_result = check_professional_availability(professional.pk, instant, exclude_id=exclude_id)
    room_result = check_room_availability(room.pk, instant, exclude_id=exclude_id)

    if not (professional_result.ok and room_result.ok):
        return BookingCheck(
            professional=professional_result,
            room=room_result,
            available=False,
            warning=False,
            message=_("Could not verify availability. Try again."),
        )

    if professional_result.has_conflicts():
        message = _(
            "Warning: %(name)s already has %(count)d appointment(s) at this time. Do you want to continue?"
        ) % {"name": professional, "count": professional_result.count}
    elif room_result.has_conflicts():
        message = _(
            "Warning: room %(name)s already has %(count)d appointment(s) at this time. Do you want to continue?"
        ) % {"name": room, "count": room_result.count}
    else:
        return BookingCheck(
            professional=professional_result,
            room=room_result,
            available=True,
            warning=False,
            message=_("Time slot available"),
        )

    return BookingCheck(
        professional=professional_result,
        room=room_result,
        available=True,
        warning=True,
        message=message,
    )
