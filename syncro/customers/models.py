from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from syncro.core.models import TimeStampedModel


def customer_photo_path(instance, filename):
    return f"{settings.CUSTOMER_PHOTO_PREFIX}/{instance.pk}.jpg"


class Customer(TimeStampedModel):
    name = models.CharField(_("Name"), max_length=100)
    surname = models.CharField(_("Surname"), max_length=100)
    nickname = models.CharField(_("Nickname"), max_length=50, blank=True)
    cpf = models.CharField(_("CPF"), max_length=11, unique=True)

    email = models.EmailField(_("Email"), blank=True)
    phone = models.CharField(_("Phone"), max_length=20, db_index=True)
    address = models.CharField(_("Address"), max_length=200, blank=True)

    emergency_name = models.CharField(_("Emergency contact"), max_length=100, blank=True)
    emergency_phone = models.CharField(_("Emergency phone"), max_length=20, blank=True)
    emergency_relationship = models.CharField(_("Relationship"), max_length=50, blank=True)

    birth_date = models.DateField(_("Birth date"), null=True, blank=True)
    photo = models.ImageField(_("Photo"), upload_to=customer_photo_path, blank=True)

    class Meta:
        verbose_name = _("Customer")
        verbose_name_plural = _("Customers")
        ordering = ["name", "surname"]

    def __str__(self):
        return f"{self.full_name} ({self.cpf})"

    @property
    def full_name(self):
        return f"{self.name} {self.surname}".strip()

    @property
    def photo_url(self):
        return self.photo.url if self.photo else ""
