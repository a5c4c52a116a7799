from functools import lru_cache
from app.core.config import settings
from app.services.payment_service import PaymentService
from app.services.webhook_service import WebhookService

# Services are built once per process from the immutable settings.
# Tests swap them out through app.dependency_overrides.

@lru_cache
def get_payment_service() -> PaymentService:
    return PaymentService(settings)

@lru_cache
def get_webhook_service() -> WebhookService:
    return WebhookService(settings)
