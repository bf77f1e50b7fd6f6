from django import forms
from django.utils.translation import gettext_lazy as _

from .models import Customer
from .services import CUSTOMER_FIELDS, normalize_cpf


class CustomerForm(forms.ModelForm):
    # Accepts formatted input (000.000.000-00); stored as digits only
    cpf = forms.CharField(label=_("CPF"), max_length=14)
    # Camera capture posted by the browser as a data URL
    photo_data = forms.CharField(widget=forms.HiddenInput, required=False)

    class Meta:
        model = Customer
        fields = CUSTOMER_FIELDS
        widgets = {
            "birth_date": forms.DateInput(attrs={"type": "date", "class": "form-control"}),
            "address": forms.TextInput(attrs={"class": "form-control"}),
        }

    def clean_cpf(self):
        cpf = normalize_cpf(self.cleaned_data.get("cpf"))
        if len(cpf) != 11:
            raise forms.ValidationError(_("CPF must have 11 digits."))
        duplicates = Customer.objects.filter(cpf=cpf)
        if self.instance.pk:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise forms.ValidationError(_("A customer with this CPF already exists."))
        return cpf

    def clean_photo_data(self):
        data = self.cleaned_data.get("photo_data", "")
        if data and not data.startswith("data:image/"):
            raise forms.ValidationError(_("Invalid photo."))
        return data
