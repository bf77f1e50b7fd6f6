from django.db import models
from django.utils.translation import gettext_lazy as _

from syncro.core.models import TimeStampedModel


class Professional(TimeStampedModel):
    """Someone who performs services and can be booked"""
    display_name = models.CharField(_("Name"), max_length=120)

    class Meta:
        verbose_name = _("Professional")
        verbose_name_plural = _("Professionals")
        ordering = ["display_name"]

    def __str__(self):
        return self.display_name
