from django.utils.translation import gettext_lazy as _

from syncro.core.models import DisplayNamedModel


class Service(DisplayNamedModel):
    """A treatment or procedure offered by the clinic"""

    class Meta(DisplayNamedModel.Meta):
        verbose_name = _("Service")
        verbose_name_plural = _("Services")
