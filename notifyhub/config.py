from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "NotifyHub"
    debug: bool = False
    admin_api_key: str = ""

    database_url: str = "sqlite+aiosqlite:///./notifyhub.db"

    # JSON file holding the system-wide channel: {"type": ..., ...params}
    system_notify_file: str = "config/notify.json"

    # Outbound transport
    http_timeout: float = 10
    http_retries: int = 1
    smtp_timeout: float = 20

    # Sender branding used in message bodies (email, aibotk, weWorkApp)
    brand_name: str = "NotifyHub"
    project_url: str = "https://github.com"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
