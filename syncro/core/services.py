"""
Shared management service for the services and rooms catalogs.

Both tables hold a single unique display name and are referenced by
appointments, so they share the same rules: names are trimmed and required,
duplicates are rejected, and a record referenced by any appointment cannot
be deleted.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.utils.translation import gettext as _

logger = logging.getLogger(__name__)


class DisplayNameRegistry:
    """CRUD with validation for a DisplayNamedModel referenced by appointments"""

    def __init__(self, model, label):
        self.model = model
        self.label = label
        self.log_prefix = f"[{model.__name__}Registry]"

    def all(self):
        return self.model.objects.order_by("display_name")

    def get(self, pk):
        logger.debug(f"{self.log_prefix} get - ID: {pk}")
        return self.model.objects.get(pk=pk)

    def clean_name(self, display_name, exclude_pk=None):
        name = (display_name or "").strip()
        if not name:
            raise ValidationError(
                {"display_name": _("The %(label)s name is required.") % {"label": self.label}}
            )

        duplicates = self.model.objects.filter(display_name=name)
        if exclude_pk is not None:
            duplicates = duplicates.exclude(pk=exclude_pk)
        if duplicates.exists():
            raise ValidationError(
                {"display_name": _('A %(label)s named "%(name)s" already exists.') % {"label": self.label, "name": name}}
            )
        return name

    def create(self, display_name):
        name = self.clean_name(display_name)
        logger.debug(f"{self.log_prefix} create - Name: {name}")
        try:
            return self.model.objects.create(display_name=name)
        except DatabaseError as e:
            logger.error(f"{self.log_prefix} create - Error: {e}")
            raise

    def update(self, obj, display_name):
        name = self.clean_name(display_name, exclude_pk=obj.pk)
        logger.debug(f"{self.log_prefix} update - ID: {obj.pk}, Name: {name}")
        obj.display_name = name
        try:
            obj.save(update_fields=["display_name", "updated_at"])
        except DatabaseError as e:
            logger.error(f"{self.log_prefix} update - Error: {e}")
            raise
        return obj

    def is_in_use(self, obj):
        """True when at least one appointment references obj"""
        return obj.appointments.exists()

    def delete(self, obj):
        logger.debug(f"{self.log_prefix} delete - ID: {obj.pk}")
        if self.is_in_use(obj):
            raise ValidationError(
                _("This %(label)s cannot be deleted because it is linked to appointments.") % {"label": self.label}
            )
        try:
            obj.delete()
        except DatabaseError as e:
            logger.error(f"{self.log_prefix} delete - Error: {e}")
            raise
