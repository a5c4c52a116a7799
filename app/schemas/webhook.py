from typing import Any, Optional
from pydantic import BaseModel

# Both fields stay untyped: Razorpay's payload is opaque and only the
# handler registered for an event type knows its shape.

class WebhookEvent(BaseModel):
    event: Any = None  # e.g. "payment.captured"
    payload: Any = None

class WebhookResult(BaseModel):
    event: Any = None
    handled: bool
    detail: Optional[str] = None

class WebhookAck(BaseModel):
    received: bool = True
