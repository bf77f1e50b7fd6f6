import base64
from unittest import mock

import pytest
from django.core.files.storage import default_storage

from syncro.customers.photos import decode_data_url, photo_path, save_customer_photo
from syncro.customers.tasks import store_customer_photo_task

PIXEL = b"\xff\xd8\xff\xe0fake-jpeg-bytes"
DATA_URL = "data:image/jpeg;base64," + base64.b64encode(PIXEL).decode()


def test_decode_data_url():
    assert decode_data_url(DATA_URL) == PIXEL


@pytest.mark.parametrize("value", ["", "not a data url", "data:text/plain;base64,aGVsbG8=", "data:image/png;base64,@@@"])
def test_invalid_data_urls(value):
    with pytest.raises(ValueError, match="Invalid image"):
        decode_data_url(value)


def test_photo_path():
    assert photo_path(42) == "customers/42.jpg"


@pytest.mark.django_db
class TestSaveCustomerPhoto:
    def test_stores_and_links_the_photo(self, customer):
        url = save_customer_photo(customer, DATA_URL)

        path = f"customers/{customer.pk}.jpg"
        customer.refresh_from_db()
        assert customer.photo.name == path
        assert url == default_storage.url(path)
        with default_storage.open(path) as stored:
            assert stored.read() == PIXEL

    def test_new_capture_overwrites_the_old_one(self, customer):
        save_customer_photo(customer, DATA_URL)
        newer = b"\xff\xd8second-capture"

        save_customer_photo(customer, "data:image/jpeg;base64," + base64.b64encode(newer).decode())

        customer.refresh_from_db()
        assert customer.photo.name == f"customers/{customer.pk}.jpg"
        with default_storage.open(customer.photo.name) as stored:
            assert stored.read() == newer

    def test_invalid_data_url_changes_nothing(self, customer):
        with pytest.raises(ValueError):
            save_customer_photo(customer, "garbage")

        customer.refresh_from_db()
        assert not customer.photo


@pytest.mark.django_db
class TestStoreCustomerPhotoTask:
    def test_success(self, customer):
        result = store_customer_photo_task.delay(customer.pk, DATA_URL).get()

        assert result["success"] is True
        customer.refresh_from_db()
        assert customer.photo

    def test_unknown_customer(self, db):
        assert store_customer_photo_task.delay(999, DATA_URL).get() == {"error": "Customer not found"}

    def test_invalid_payload_is_not_retried(self, customer):
        with mock.patch.object(store_customer_photo_task, "retry") as retry:
            result = store_customer_photo_task.delay(customer.pk, "garbage").get()

        assert result == {"error": "Invalid image"}
        retry.assert_not_called()

    def test_storage_error_is_retried(self, customer):
        with mock.patch("syncro.customers.photos.default_storage.save", side_effect=OSError("disk full")):
            with mock.patch.object(store_customer_photo_task, "retry", side_effect=RuntimeError("retry")) as retry:
                with pytest.raises(RuntimeError):
                    store_customer_photo_task.apply(args=(customer.pk, DATA_URL), throw=True)

        assert retry.call_args.kwargs["countdown"] == 60
