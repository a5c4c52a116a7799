import logging
from typing import Any, Dict, Optional

from app.schemas.webhook import WebhookEvent, WebhookResult

logger = logging.getLogger(__name__)


class WebhookHandler:
    """
    One handler per Razorpay event type. Handlers only log for now; this is
    where subscription updates and emails would hook in.
    """

    def handle(self, event: WebhookEvent) -> WebhookResult:
        raise NotImplementedError


class EntityLoggingHandler(WebhookHandler):
    entity_key: str = ""
    label: str = ""

    def handle(self, event: WebhookEvent) -> WebhookResult:
        # Raises KeyError on a malformed payload, reported as a processing failure
        entity = event.payload[self.entity_key]["entity"]
        logger.info(f"{self.label}: {entity}")
        entity_id = entity.get("id")
        return WebhookResult(
            event=event.event,
            handled=True,
            detail=str(entity_id) if entity_id is not None else None,
        )


class PaymentCapturedHandler(EntityLoggingHandler):
    entity_key = "payment"
    label = "Payment captured"


class PaymentFailedHandler(EntityLoggingHandler):
    entity_key = "payment"
    label = "Payment failed"


class SubscriptionActivatedHandler(EntityLoggingHandler):
    entity_key = "subscription"
    label = "Subscription activated"


class SubscriptionCancelledHandler(EntityLoggingHandler):
    entity_key = "subscription"
    label = "Subscription cancelled"


class UnhandledEventHandler(WebhookHandler):
    def handle(self, event: WebhookEvent) -> WebhookResult:
        logger.info(f"Unhandled event: {event.event}")
        return WebhookResult(event=event.event, handled=False)


class WebhookHandlerRegistry:
    def __init__(self, fallback: Optional[WebhookHandler] = None):
        self._handlers: Dict[str, WebhookHandler] = {}
        self.fallback = fallback or UnhandledEventHandler()

    def register(self, event_type: str, handler: WebhookHandler) -> None:
        self._handlers[event_type] = handler

    def get(self, event_type: Any) -> WebhookHandler:
        if not isinstance(event_type, str):
            return self.fallback
        return self._handlers.get(event_type, self.fallback)

    def dispatch(self, event: WebhookEvent) -> WebhookResult:
        return self.get(event.event).handle(event)


def default_registry() -> WebhookHandlerRegistry:
    registry = WebhookHandlerRegistry()
    registry.register("payment.captured", PaymentCapturedHandler())
    registry.register("payment.failed", PaymentFailedHandler())
    registry.register("subscription.activated", SubscriptionActivatedHandler())
    registry.register("subscription.cancelled", SubscriptionCancelledHandler())
    return registry
