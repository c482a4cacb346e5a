from pydantic import Field
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = "ProMart API"
    app_env: str = "development"
    app_port: int = 8000
    frontend_url: str = "http://localhost:5173"

    # Database (SQLite for local dev; ":memory:" runs the seeded demo store)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./promart_dev.db",
        alias="DATABASE_URL",
    )
    seed_demo_data: bool = Field(default=False, alias="SEED_DEMO_DATA")

    # Auth
    jwt_secret: str = Field(default="dev-secret-change-me", alias="JWT_SECRET")
    jwt_expires_days: int = Field(default=30, alias="JWT_EXPIRES_DAYS")
    allow_admin_registration: bool = Field(default=False, alias="ALLOW_ADMIN_REGISTRATION")
    otp_expires_minutes: int = Field(default=5, alias="OTP_EXPIRES_MINUTES")

    # Uploads
    upload_dir: str = Field(default="uploads", alias="UPLOAD_DIR")
    max_upload_size_mb: int = Field(default=10, alias="MAX_UPLOAD_SIZE_MB")
    max_files_per_field: int = Field(default=5, alias="MAX_FILES_PER_FIELD")

    # Email
    email_backend: str = Field(
        default="console", alias="EMAIL_BACKEND",
    )  # "console" | "smtp"
    smtp_host: str | None = Field(default=None, alias="SMTP_HOST")
    smtp_port: int = Field(default=587, alias="SMTP_PORT")
    smtp_user: str | None = Field(default=None, alias="SMTP_USER")
    smtp_pass: str | None = Field(default=None, alias="SMTP_PASS")
    smtp_from: str | None = Field(default=None, alias="SMTP_FROM")
    smtp_timeout: int = Field(default=15, alias="SMTP_TIMEOUT")
    admin_email: str | None = Field(default=None, alias="ADMIN_EMAIL")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    @property
    def is_memory_db(self) -> bool:
        return ":memory:" in self.database_url

settings = Settings()
