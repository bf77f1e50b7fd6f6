from django.db import models
from django.utils.translation import gettext_lazy as _


class TimeStampedModel(models.Model):
    created_at = models.DateTimeField(_("Created at"), auto_now_add=True)
    updated_at = models.DateTimeField(_("Updated at"), auto_now=True)

    class Meta:
        abstract = True


class DisplayNamedModel(TimeStampedModel):
    """Lookup entity identified to the user by a single unique name"""
    display_name = models.CharField(_("Name"), max_length=120, unique=True)

    class Meta:
        abstract = True
        ordering = ["display_name"]

    def __str__(self):
        return self.display_name
