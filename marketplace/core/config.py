from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

HUST_EMAIL_PATTERN = r"^[A-Za-z0-9._%+-]+@(sis\.)?hust\.edu\.vn$"


class Settings(BaseSettings):
    database_url: str = Field(alias="DATABASE_URL")

    # JWT Configuration
    secret_key: str = Field(alias="SECRET_KEY")
    algorithm: str = Field(default="HS512", alias="ALGORITHM")
    access_token_expire_minutes: int = Field(default=60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    refreshable_duration_minutes: int = Field(
        default=600, alias="REFRESHABLE_DURATION_MINUTES"
    )

    # First Admin User
    first_admin_username: str = Field(default="admin", alias="FIRST_ADMIN_USERNAME")
    first_admin_password: str = Field(alias="FIRST_ADMIN_PASSWORD")

    # Password Reset
    password_reset_token_expire_minutes: int = Field(
        default=30, alias="PASSWORD_RESET_TOKEN_EXPIRE_MINUTES"
    )

    # SMTP Configuration (optional)
    smtp_host: str | None = Field(default=None, alias="SMTP_HOST")
    smtp_port: int | None = Field(default=None, alias="SMTP_PORT")
    smtp_user: str | None = Field(default=None, alias="SMTP_USER")
    smtp_password: str | None = Field(default=None, alias="SMTP_PASSWORD")
    smtp_use_tls: bool = Field(default=True, alias="SMTP_USE_TLS")
    smtp_from_email: str | None = Field(default=None, alias="SMTP_FROM_EMAIL")

    # Frontend URL for password reset links and CORS
    frontend_url: str | None = Field(default=None, alias="FRONTEND_URL")

    # Registration
    allowed_email_pattern: str = Field(
        default=HUST_EMAIL_PATTERN, alias="ALLOWED_EMAIL_PATTERN"
    )

    # Shipping (GHN)
    ghn_api_url: str = Field(
        default="https://online-gateway.ghn.vn/shiip/public-api/v2/shipping-order/fee",
        alias="GHN_API_URL",
    )
    ghn_token: str | None = Field(default=None, alias="GHN_TOKEN")
    ghn_shop_id: str | None = Field(default=None, alias="GHN_SHOP_ID")
    shipping_fallback_fee: float = Field(default=30000.0, alias="SHIPPING_FALLBACK_FEE")
    shipping_timeout_seconds: float = Field(default=10.0, alias="SHIPPING_TIMEOUT_SECONDS")

    # Payment simulation
    payment_success_rate: float = Field(default=0.9, alias="PAYMENT_SUCCESS_RATE")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    @field_validator(
        "smtp_host",
        "smtp_user",
        "smtp_password",
        "smtp_from_email",
        "frontend_url",
        "ghn_token",
        "ghn_shop_id",
        mode="before",
    )
    @classmethod
    def empty_str_to_none(cls, v: str | None) -> str | None:
        """Convert empty strings to None for optional string fields."""
        if v == "":
            return None
        return v

    @field_validator("smtp_port", mode="before")
    @classmethod
    def empty_str_to_none_int(cls, v: str | int | None) -> int | None:
        """Convert empty strings to None for optional integer fields."""
        if v == "":
            return None
        if isinstance(v, str):
            try:
                return int(v)
            except ValueError:
                return None
        return v

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
