from django import forms
from django.utils.translation import gettext_lazy as _


class DisplayNameForm(forms.Form):
    # Required/duplicate checks live in DisplayNameRegistry
    display_name = forms.CharField(
        label=_("Name"),
        max_length=120,
        required=False,
        widget=forms.TextInput(attrs={"class": "form-control"}),
    )
