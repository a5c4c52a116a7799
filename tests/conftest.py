import hashlib
import hmac
import pytest
from fastapi.testclient import TestClient
from app.main import app as fastapi_app
from app.api.deps import get_payment_service, get_webhook_service
from app.core.config import Settings
from app.services.payment_service import PaymentService
from app.services.webhook_service import WebhookService

KEY_SECRET = "test_key_secret"
WEBHOOK_SECRET = "test_webhook_secret"


def sign(secret, message):
    """Signature the way Razorpay computes it, for building signed requests."""
    if isinstance(message, str):
        message = message.encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


@pytest.fixture
def test_settings():
    return Settings(
        RAZORPAY_KEY_ID="rzp_test_key",
        RAZORPAY_KEY_SECRET=KEY_SECRET,
        RAZORPAY_WEBHOOK_SECRET=WEBHOOK_SECRET,
    )


@pytest.fixture
def razorpay_client(mocker):
    return mocker.Mock()


@pytest.fixture
def payment_service(test_settings, razorpay_client):
    return PaymentService(test_settings, client=razorpay_client)


@pytest.fixture
def webhook_service(test_settings):
    return WebhookService(test_settings)


@pytest.fixture
def client(payment_service, webhook_service):
    fastapi_app.dependency_overrides[get_payment_service] = lambda: payment_service
    fastapi_app.dependency_overrides[get_webhook_service] = lambda: webhook_service
    with TestClient(fastapi_app) as c:
        yield c
    fastapi_app.dependency_overrides.clear()
