from typing import Optional
from pydantic import BaseModel

# Request fields are optional so that missing input is reported by the
# service with its own message instead of a framework 422.

class OrderCreateRequest(BaseModel):
    planId: Optional[str] = None
    userId: Optional[str] = None
    amount: Optional[int] = None  # Amount in smallest currency unit (paise)
    currency: str = "INR"

class OrderResult(BaseModel):
    orderId: str
    amount: int
    currency: str

class OrderResponse(OrderResult):
    success: bool = True

class PaymentVerificationRequest(BaseModel):
    razorpay_payment_id: Optional[str] = None
    razorpay_order_id: Optional[str] = None
    razorpay_signature: Optional[str] = None
    planId: Optional[str] = None
    userId: Optional[str] = None

class PaymentVerificationResponse(BaseModel):
    success: bool = True
    message: str
    paymentId: str
    orderId: str

class PaymentStatus(BaseModel):
    id: str
    status: Optional[str] = None
    amount: Optional[int] = None
    currency: Optional[str] = None
    method: Optional[str] = None
    created_at: Optional[int] = None

class PaymentStatusResponse(BaseModel):
    success: bool = True
    payment: PaymentStatus
