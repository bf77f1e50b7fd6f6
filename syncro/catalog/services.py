from django.utils.translation import gettext_lazy as _

from syncro.core.services import DisplayNameRegistry

from .models import Service

service_registry = DisplayNameRegistry(Service, label=_("service"))
