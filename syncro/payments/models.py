from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from syncro.core.models import TimeStampedModel


class Payment(TimeStampedModel):
    customer = models.ForeignKey(
        "customers.Customer", on_delete=models.PROTECT, related_name="payments", verbose_name=_("Customer")
    )
    paid_at = models.DateTimeField(_("Paid at"), default=timezone.now, db_index=True)
    amount = models.DecimalField(
        _("Amount"), max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))]
    )
    # Free text so each clinic can use its own categories (pix, card, cash...)
    payment_type = models.CharField(_("Payment type"), max_length=64)
    notes = models.TextField(_("Notes"), blank=True)

    professional = models.ForeignKey(
        "professionals.Professional",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="payments",
        verbose_name=_("Professional"),
    )
    service = models.ForeignKey(
        "catalog.Service",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="payments",
        verbose_name=_("Service"),
    )

    class Meta:
        ordering = ["-paid_at"]
        verbose_name = _("Payment")
        verbose_name_plural = _("Payments")

    def __str__(self):
        return f"{self.customer.full_name} - {self.amount} ({self.payment_type})"
