import json
import logging
from typing import Optional

import razorpay
from razorpay.errors import SignatureVerificationError

from app.core.config import Settings
from app.core.exceptions import WebhookProcessingFailed, WebhookSignatureInvalid
from app.schemas.webhook import WebhookAck, WebhookEvent
from app.services.webhook_handlers import WebhookHandlerRegistry, default_registry

logger = logging.getLogger(__name__)


class WebhookService:
    def __init__(self, config: Settings, registry: Optional[WebhookHandlerRegistry] = None):
        self.webhook_secret = config.RAZORPAY_WEBHOOK_SECRET
        self.registry = registry or default_registry()
        self.utility = razorpay.Utility()
        if not self.webhook_secret:
            logger.warning("RAZORPAY_WEBHOOK_SECRET not set. All webhooks will be rejected.")

    def verify(self, body: bytes, signature: Optional[str]) -> bool:
        if not self.webhook_secret or not signature:
            return False
        try:
            self.utility.verify_webhook_signature(body.decode("utf-8"), signature, self.webhook_secret)
        except UnicodeDecodeError:
            logger.warning("Webhook body is not valid UTF-8")
            return False
        except SignatureVerificationError:
            return False
        return True

    def process(self, body: bytes, signature: Optional[str]) -> WebhookAck:
        """
        Verifies the signature over the exact raw body, then dispatches the
        event by type. Nothing is parsed or dispatched for an invalid signature.
        """
        if not self.verify(body, signature):
            logger.warning("Invalid webhook signature")
            raise WebhookSignatureInvalid()

        try:
            event = WebhookEvent.model_validate(json.loads(body))
            result = self.registry.dispatch(event)
        except Exception as e:
            logger.error(f"Webhook error: {e}")
            raise WebhookProcessingFailed() from e

        logger.info(f"Webhook {result.event} processed (handled={result.handled})")
        return WebhookAck(received=True)
