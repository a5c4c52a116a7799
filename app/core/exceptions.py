from enum import Enum
from typing import Any, Dict, Optional


class ValidationKind(str, Enum):
    MISSING_FIELD = "MissingField"
    INVALID_AMOUNT = "InvalidAmount"
    UNSUPPORTED_CURRENCY = "UnsupportedCurrency"
    MALFORMED_BODY = "MalformedBody"


class PaymentError(Exception):
    """Base for every error that is turned into a JSON response."""

    status_code: int = 500

    def __init__(self, message: str, extra: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.extra = extra or {}

    def to_content(self) -> Dict[str, Any]:
        return {"success": False, "message": self.message, **self.extra}


class RequestValidationFailed(PaymentError):
    status_code = 400

    def __init__(self, kind: ValidationKind, message: str):
        super().__init__(message)
        self.kind = kind


class SignatureMismatch(PaymentError):
    status_code = 400

    def __init__(self, message: str = "Invalid payment signature"):
        super().__init__(message)


class ProviderError(PaymentError):
    """Error reported by Razorpay itself (bad request, gateway failure...)."""

    status_code = 400

    def __init__(self, description: str, code: Optional[str] = None):
        super().__init__(f"Payment Error: {description}", {"errorCode": code})
        self.description = description
        self.code = code


class UnexpectedError(PaymentError):
    status_code = 500


class ProviderNotConfigured(Exception):
    pass


class WebhookError(PaymentError):
    # Webhook responses carry a bare message, Razorpay ignores the body anyway
    def to_content(self) -> Dict[str, Any]:
        return {"message": self.message}


class WebhookSignatureInvalid(WebhookError):
    status_code = 400

    def __init__(self):
        super().__init__("Invalid webhook signature")


class WebhookProcessingFailed(WebhookError):
    status_code = 500

    def __init__(self):
        super().__init__("Webhook processing failed")
