"""
Customer photo storage.

Photos are captured by the browser camera and posted as a base64 data URL.
Each customer has at most one stored photo, saved at customers/<id>.jpg and
overwritten on every new capture.
"""
import base64
import binascii
import logging
import re

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage

logger = logging.getLogger(__name__)

DATA_URL_RE = re.compile(r"^data:(?P<mime>image/[\w.+-]+);base64,(?P<data>.+)$", re.DOTALL)


def decode_data_url(data_url):
    """Return the raw bytes of a base64 image data URL"""
    match = DATA_URL_RE.match(data_url or "")
    if not match:
        raise ValueError("Invalid image")
    try:
        content = base64.b64decode(match.group("data"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("Invalid image") from e
    if not content:
        raise ValueError("Invalid image")
    return content


def photo_path(customer_id):
    return f"{settings.CUSTOMER_PHOTO_PREFIX}/{customer_id}.jpg"


def save_customer_photo(customer, data_url):
    """
    Store the photo for a customer and link it to the record.

    Returns the public URL of the stored file.
    """
    logger.debug(f"Saving photo for customer {customer.pk}")
    content = decode_data_url(data_url)
    path = photo_path(customer.pk)

    if default_storage.exists(path):
        default_storage.delete(path)
    saved_path = default_storage.save(path, ContentFile(content))

    customer.photo.name = saved_path
    customer.save(update_fields=["photo", "updated_at"])

    url = default_storage.url(saved_path)
    logger.debug(f"Photo saved for customer {customer.pk}: {url}")
    return url
