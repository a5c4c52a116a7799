import os
import json
from typing import Annotated, List, Union
from pydantic import validator
from pydantic_settings import BaseSettings, NoDecode
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    PROJECT_NAME: str = os.getenv("PROJECT_NAME", "ExamNest Payment Backend")
    API_PREFIX: str = os.getenv("API_PREFIX", "/api")

    RAZORPAY_KEY_ID: str = os.getenv("RAZORPAY_KEY_ID", "")
    RAZORPAY_KEY_SECRET: str = os.getenv("RAZORPAY_KEY_SECRET", "")
    RAZORPAY_WEBHOOK_SECRET: str = os.getenv("RAZORPAY_WEBHOOK_SECRET", "")

    # Seconds to wait on any single Razorpay API call
    PROVIDER_TIMEOUT_SECONDS: float = 10.0

    PORT: int = 5000
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    LOG_LEVEL: str = "INFO"

    # CORS
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:5173")
    # NoDecode: env values reach the validator as raw strings, not JSON
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "https://examnest.vercel.app",
    ]

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            return json.loads(v)
        elif isinstance(v, list):
            return v
        raise ValueError(v)

    @property
    def cors_origins(self) -> List[str]:
        """
        Static allow-list plus FRONTEND_URL as one de-duplicated list.
        Browsers send Origin without a trailing slash, so entries are normalised.
        """
        origins: List[str] = []
        for origin in [*self.BACKEND_CORS_ORIGINS, self.FRONTEND_URL]:
            origin = origin.strip().rstrip("/")
            if origin and origin not in origins:
                origins.append(origin)
        return origins

    class Config:
        case_sensitive = True
        frozen = True

settings = Settings()
