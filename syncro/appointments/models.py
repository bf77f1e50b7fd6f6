from django.db import models
from django.utils.translation import gettext_lazy as _

from syncro.core.models import TimeStampedModel


class Appointment(TimeStampedModel):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"

    STATUS_CHOICES = [
        (PENDING, _("Pending")),
        (COMPLETED, _("Completed")),
        (CANCELLED, _("Cancelled")),
        (RESCHEDULED, _("Rescheduled")),
    ]

    customer     = models.ForeignKey("customers.Customer", on_delete=models.PROTECT, related_name="appointments")
    service      = models.ForeignKey("catalog.Service", on_delete=models.PROTECT, related_name="appointments")
    professional = models.ForeignKey("professionals.Professional", on_delete=models.PROTECT, related_name="appointments")
    room         = models.ForeignKey("resources.Room", on_delete=models.PROTECT, related_name="appointments")
    scheduled_at = models.DateTimeField(_("Date and time"))
    status       = models.CharField(_("Status"), max_length=16, choices=STATUS_CHOICES, default=PENDING)

    class Meta:
        indexes = [
            models.Index(fields=["scheduled_at"], name="appointment_scheduled_idx"),
            models.Index(fields=["professional", "scheduled_at"], name="appointment_prof_sched_idx"),
            models.Index(fields=["room", "scheduled_at"], name="appointment_room_sched_idx"),
        ]
        ordering = ["scheduled_at"]

    def __str__(self):
        return f"{self.customer.full_name} – {self.service} @ {self.scheduled_at:%d/%m %H:%M}"
