import logging

from celery import shared_task
from django.apps import apps

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3)
def store_customer_photo_task(self, customer_id, data_url):
    """
    Async task to upload a captured photo and link it to the customer
    """
    Customer = apps.get_model("customers", "Customer")
    try:
        from .photos import save_customer_photo

        customer = Customer.objects.get(id=customer_id)
        url = save_customer_photo(customer, data_url)

        logger.info(f"Photo stored for customer {customer_id}")
        return {"success": True, "url": url}

    except Customer.DoesNotExist:
        logger.error(f"Customer {customer_id} not found")
        return {"error": "Customer not found"}
    except ValueError as e:
        # Bad payload, retrying will not help
        logger.error(f"Invalid photo for customer {customer_id}: {e}")
        return {"error": str(e)}
    except Exception as exc:
        logger.error(f"Error storing photo for customer {customer_id}: {exc}")
        raise self.retry(exc=exc, countdown=60 * (2 ** self.request.retries))
