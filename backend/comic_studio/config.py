from typing import List, Optional
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "postgresql+asyncpg://user:password@db/comic_studio"

    CORS_ORIGIN: str = ""
    LOG_LEVEL: str = "INFO"

    JWT_SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7

    AWS_ENDPOINT_URL: Optional[str] = None
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_REGION_NAME: str = "us-east-1"
    S3_BUCKET_NAME: Optional[str] = None
    # Base URL the bucket is publicly served from; defaults to the endpoint/bucket path
    S3_PUBLIC_BASE_URL: Optional[str] = None

    GEMINI_API_KEY: Optional[str] = None
    GEMINI_TEXT_MODEL: str = "gemini-1.5-pro"
    GEMINI_IMAGE_MODEL: str = "gemini-3-pro-image-preview"

    STRIPE_SECRET: Optional[str] = None
    STRIPE_API_BASE: str = "https://api.stripe.com"
    STRIPE_TIMEOUT_SECONDS: float = 15.0

    class Config:
        env_file = ".env"

    @property
    def cors_origins(self) -> List[str]:
        origins = [o.strip() for o in self.CORS_ORIGIN.split(",") if o.strip()]
        return origins or ["*"]

settings = Settings()
