from datetime import datetime, timezone
from fastapi import APIRouter
from app.api.endpoints import payment
from app.schemas.common import HealthResponse

api_router = APIRouter()
api_router.include_router(payment.router, tags=["payment"])

@api_router.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return HealthResponse(status="OK", timestamp=timestamp)
