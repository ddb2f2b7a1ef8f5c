"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "Clavision"
    debug: bool = False
    app_url: str = "https://clavision.web.app"  # Where the client is served

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: str = ""  # Comma-separated origins, empty means app_url only

    # Database
    database_url: str = "sqlite:///./clavision.db"
    seed_data_path: str = ""  # JSON file with rooms and classes, loaded on startup

    # LINE Login
    line_client_id: str = ""
    line_channel_secret: str = ""
    line_redirect_uri: str = "http://localhost:8000/auth/line/callback"
    http_timeout_seconds: float = 10.0

    # Login states
    login_state_ttl_minutes: int = 10
    login_state_purge_interval_minutes: int = 15


settings = Settings()
