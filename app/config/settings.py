from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List
from app.core.errors import ConfigurationError


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""  # anon key, used to resolve bearer tokens
    supabase_service_role_key: Optional[str] = None  # bypasses RLS; ownership is checked in app code

    # Resend (transactional email)
    resend_api_key: Optional[str] = None
    resend_api_url: str = "https://api.resend.com/emails"
    admin_email: Optional[str] = None
    order_email_sender: str = "Order Notifications <onboarding@resend.dev>"
    cart_email_sender: str = "Cart Notifications <onboarding@resend.dev>"
    customer_email_sender: str = "Luxury Perfumes <onboarding@resend.dev>"

    # Web push
    vapid_public_key: Optional[str] = None
    vapid_private_key: Optional[str] = None
    push_ttl_seconds: int = 86400
    prune_expired_subscriptions: bool = False

    # Legacy FCM
    fcm_server_key: Optional[str] = None
    fcm_api_url: str = "https://fcm.googleapis.com/fcm/send"

    # App
    app_name: str = "perfume-storefront"
    store_name: str = "Luxury Perfumes"
    store_timezone: str = "Asia/Kolkata"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "*"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    http_timeout_seconds: float = 10.0
    enable_legacy_endpoints: bool = False

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def require(self, *names: str) -> None:
        """Raise ConfigurationError naming the first unset setting."""
        for name in names:
            if not getattr(self, name, None):
                raise ConfigurationError(f"{name.upper()} is not configured")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


settings = Settings()


def get_settings() -> Settings:
    """Dependency form of the module-level settings, overridable in tests"""
    return settings
