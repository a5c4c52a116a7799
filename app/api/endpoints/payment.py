from fastapi import APIRouter, Depends, Header, Request
from typing import Optional
from app.core.exceptions import PaymentError, UnexpectedError
from app.schemas.payment import (
    OrderCreateRequest,
    OrderResponse,
    PaymentStatusResponse,
    PaymentVerificationRequest,
    PaymentVerificationResponse,
)
from app.schemas.webhook import WebhookAck
from app.services.payment_service import PaymentService
from app.services.webhook_service import WebhookService
from app.api.deps import get_payment_service, get_webhook_service
import logging

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/create-order", response_model=OrderResponse)
async def create_order(
    request: OrderCreateRequest,
    service: PaymentService = Depends(get_payment_service),
):
    """
    Create a Razorpay order for payment.

    Accepts: planId, userId, amount (paise), currency (INR only)
    Returns: orderId, amount, currency
    """
    try:
        order = await service.create_order(request)
        return OrderResponse(**order.model_dump())
    except PaymentError:
        raise
    except Exception as e:
        logger.error(f"Error creating order: {e}")
        raise UnexpectedError("Failed to create order. Please try again.")


@router.post("/verify-payment", response_model=PaymentVerificationResponse)
async def verify_payment(
    request: PaymentVerificationRequest,
    service: PaymentService = Depends(get_payment_service),
):
    """
    Verify the signature Razorpay Checkout hands back to the frontend.
    """
    try:
        return service.verify_payment(request)
    except PaymentError:
        raise
    except Exception as e:
        logger.error(f"Error verifying payment: {e}")
        raise UnexpectedError("Failed to verify payment")


@router.get("/payment-status/{paymentId}", response_model=PaymentStatusResponse)
async def payment_status(
    paymentId: str,
    service: PaymentService = Depends(get_payment_service),
):
    try:
        payment = await service.get_payment_status(paymentId)
        return PaymentStatusResponse(payment=payment)
    except Exception as e:
        logger.error(f"Error fetching payment status: {e}")
        raise UnexpectedError("Failed to fetch payment status")


@router.post("/webhook", response_model=WebhookAck)
async def razorpay_webhook(
    request: Request,
    x_razorpay_signature: Optional[str] = Header(None),
    service: WebhookService = Depends(get_webhook_service),
):
    """
    Handle Razorpay webhook events.

    - Verifies X-Razorpay-Signature against the raw body using RAZORPAY_WEBHOOK_SECRET
    - Dispatches on the event type (payment.captured, payment.failed,
      subscription.activated, subscription.cancelled, anything else is logged)
    - Returns {"received": true} so Razorpay does not retry
    """
    body = await request.body()
    return service.process(body, x_razorpay_signature)
