from django.utils.translation import gettext_lazy as _

from syncro.core.models import DisplayNamedModel


class Room(DisplayNamedModel):
    class Meta(DisplayNamedModel.Meta):
        verbose_name = _("Room")
        verbose_name_plural = _("Rooms")
