from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    # Database
    DATABASE_URL: Optional[str] = None
    PGHOST: Optional[str] = None
    PGDATABASE: Optional[str] = None
    PGUSER: Optional[str] = None
    PGPASSWORD: Optional[str] = None
    PGSSLMODE: str = "require"

    # Email
    EMAIL_USER: Optional[str] = None  # administrator notification address
    RESEND_API_KEY: Optional[str] = None
    EMAIL_FROM: str = "onboarding@resend.dev"
    EMAIL_SEND_TIMEOUT_SECONDS: float = 10.0

    # Payments
    RAZORPAY_KEY_ID: Optional[str] = None
    RAZORPAY_KEY_SECRET: Optional[str] = None

    # Expiration scan
    EXPIRATION_SCAN_ENABLED: bool = True
    EXPIRATION_SCAN_HOUR: int = 0
    EXPIRATION_SCAN_MINUTE: int = 0

    # Application
    PROJECT_NAME: str = "WeTreck Booking Service"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    PORT: int = 5002
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.PGHOST and self.PGDATABASE and self.PGUSER:
            return f"postgresql://{self.PGUSER}:{self.PGPASSWORD}@{self.PGHOST}/{self.PGDATABASE}?sslmode={self.PGSSLMODE}"
        return "sqlite:///./wetreck.db"

    @property
    def admin_email(self) -> Optional[str]:
        return self.EMAIL_USER or None

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

settings = Settings()
