import time
import logging
from typing import Optional

import razorpay
from razorpay.errors import BadRequestError, GatewayError, ServerError, SignatureVerificationError
from fastapi.concurrency import run_in_threadpool

from app.core.config import Settings
from app.core.exceptions import (
    ProviderError,
    ProviderNotConfigured,
    RequestValidationFailed,
    SignatureMismatch,
    ValidationKind,
)
from app.schemas.payment import (
    OrderCreateRequest,
    OrderResult,
    PaymentStatus,
    PaymentVerificationRequest,
    PaymentVerificationResponse,
)

logger = logging.getLogger(__name__)

SUPPORTED_CURRENCY = "INR"
MIN_AMOUNT = 100  # ₹1 in paise
MAX_AMOUNT = 1_000_000  # ₹10,000 in paise
RECEIPT_PART_LENGTH = 8

PROVIDER_ERROR_CODES = (
    (BadRequestError, "BAD_REQUEST_ERROR"),
    (GatewayError, "GATEWAY_ERROR"),
    (ServerError, "SERVER_ERROR"),
)


def build_receipt(user_id: str, now_ms: Optional[int] = None) -> str:
    """
    Receipt id sent to Razorpay. Stays under the provider's 40 char limit:
    "order_" + 8 timestamp digits + "_" + up to 8 user id chars.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"order_{str(now_ms)[-RECEIPT_PART_LENGTH:]}_{user_id[-RECEIPT_PART_LENGTH:]}"


def provider_error_from(exc: Exception) -> Optional[ProviderError]:
    for error_cls, code in PROVIDER_ERROR_CODES:
        if isinstance(exc, error_cls):
            return ProviderError(str(exc) or code, code)
    return None


class PaymentService:
    def __init__(self, config: Settings, client: Optional[razorpay.Client] = None):
        self.key_id = config.RAZORPAY_KEY_ID
        self.key_secret = config.RAZORPAY_KEY_SECRET
        self.timeout = config.PROVIDER_TIMEOUT_SECONDS
        # Signature checks only need the secret, not an authenticated client
        self.utility = razorpay.Utility()

        if client is not None:
            self.client = client
        elif self.key_id and self.key_secret:
            self.client = razorpay.Client(auth=(self.key_id, self.key_secret))
        else:
            self.client = None
            logger.warning("Razorpay keys not set. Payment operations will fail.")

    def _require_client(self) -> razorpay.Client:
        if not self.client:
            raise ProviderNotConfigured("Razorpay client not initialized")
        return self.client

    @staticmethod
    def validate_order(request: OrderCreateRequest) -> None:
        if not request.planId or not request.userId or not request.amount:
            raise RequestValidationFailed(
                ValidationKind.MISSING_FIELD,
                "Missing required fields: planId, userId, and amount are required",
            )
        if request.amount <= 0:
            raise RequestValidationFailed(ValidationKind.INVALID_AMOUNT, "Amount must be greater than 0")
        if request.currency != SUPPORTED_CURRENCY:
            raise RequestValidationFailed(
                ValidationKind.UNSUPPORTED_CURRENCY, "Only INR currency is supported"
            )
        if request.amount < MIN_AMOUNT or request.amount > MAX_AMOUNT:
            raise RequestValidationFailed(
                ValidationKind.INVALID_AMOUNT, "Amount must be between ₹1 and ₹10,000"
            )

    async def create_order(self, request: OrderCreateRequest) -> OrderResult:
        """
        Validates the request and creates a Razorpay order.

        Validation errors are raised before the provider is contacted.
        Razorpay-reported failures come back as ProviderError.
        """
        self.validate_order(request)
        client = self._require_client()

        data = {
            "amount": request.amount,
            "currency": request.currency,
            "receipt": build_receipt(request.userId),
            "notes": {
                "planId": request.planId,
                "userId": request.userId,
            },
        }

        logger.info(
            f"Creating Razorpay order: amount={data['amount']} currency={data['currency']} "
            f"receipt={data['receipt']} planId={request.planId} userId={request.userId}"
        )

        try:
            order = await run_in_threadpool(client.order.create, data=data, timeout=self.timeout)
        except Exception as e:
            provider_error = provider_error_from(e)
            if provider_error is not None:
                logger.error(f"Razorpay rejected order: {provider_error.description} ({provider_error.code})")
                raise provider_error from e
            raise

        logger.info(
            f"Razorpay order created: orderId={order['id']} amount={order['amount']} currency={order['currency']}"
        )
        return OrderResult(orderId=order["id"], amount=order["amount"], currency=order["currency"])

    def verify_payment(self, request: PaymentVerificationRequest) -> PaymentVerificationResponse:
        """
        Checks the checkout signature Razorpay hands to the frontend
        (HMAC-SHA256 over "order_id|payment_id" keyed by the API secret).
        No provider call is made.
        """
        if not request.razorpay_payment_id or not request.razorpay_order_id or not request.razorpay_signature:
            raise RequestValidationFailed(ValidationKind.MISSING_FIELD, "Missing payment verification data")
        if not self.key_secret:
            raise ProviderNotConfigured("RAZORPAY_KEY_SECRET not set")

        message = f"{request.razorpay_order_id}|{request.razorpay_payment_id}"
        try:
            self.utility.verify_signature(message, request.razorpay_signature, self.key_secret)
        except SignatureVerificationError as e:
            logger.warning(f"Invalid signature for order {request.razorpay_order_id}: {e}")
            raise SignatureMismatch()

        logger.info(
            f"Payment verified: paymentId={request.razorpay_payment_id} orderId={request.razorpay_order_id} "
            f"planId={request.planId} userId={request.userId}"
        )
        return PaymentVerificationResponse(
            message="Payment verified successfully",
            paymentId=request.razorpay_payment_id,
            orderId=request.razorpay_order_id,
        )

    async def get_payment_status(self, payment_id: str) -> PaymentStatus:
        client = self._require_client()
        payment = await run_in_threadpool(client.payment.fetch, payment_id, timeout=self.timeout)
        return PaymentStatus(
            id=payment["id"],
            status=payment.get("status"),
            amount=payment.get("amount"),
            currency=payment.get("currency"),
            method=payment.get("method"),
            created_at=payment.get("created_at"),
        )
