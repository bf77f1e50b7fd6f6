from django import forms
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from .models import Payment


class PaymentForm(forms.ModelForm):
    paid_at = forms.DateTimeField(
        label=_("Paid at"),
        input_formats=["%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M", "%Y-%m-%d %H:%M:%S"],
        widget=forms.DateTimeInput(attrs={"type": "datetime-local", "class": "form-control"}, format="%Y-%m-%dT%H:%M"),
    )

    class Meta:
        model = Payment
        fields = ["customer", "paid_at", "amount", "payment_type", "professional", "service", "notes"]
        widgets = {
            "notes": forms.Textarea(attrs={"rows": 3}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if not self.instance.pk and not self.is_bound:
            self.initial.setdefault("paid_at", timezone.localtime().replace(second=0, microsecond=0))

    def clean_payment_type(self):
        payment_type = self.cleaned_data["payment_type"].strip()
        if not payment_type:
            raise forms.ValidationError(_("Enter a payment type."))
        return payment_type
