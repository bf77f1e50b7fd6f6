from django.utils.translation import gettext_lazy as _

from syncro.core.services import DisplayNameRegistry

from .models import Room

room_registry = DisplayNameRegistry(Room, label=_("room"))
