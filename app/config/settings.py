from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "moodbuilder"
    db_username: str = "moodbuilder"
    db_password: str = "secret"
    database_url: str = ""

    files_root: str = "storage/journal_documents"
    public_base_url: str = "http://localhost:8000/storage/journal_documents"

    ocr_provider: str = "upstage"
    analysis_provider: str = "upstage"
    upstage_api_key: str = ""
    upstage_document_parse_url: str = "https://api.upstage.ai/v1/document-digitization"
    upstage_base_url: str = "https://api.upstage.ai/v1"
    analysis_model_name: str = "solar-pro"
    provider_timeout_seconds: int = 60

    provider_max_attempts: int = 1
    provider_backoff_seconds: float = 1.0
    provider_backoff_multiplier: float = 2.0

    status_poll_interval_seconds: float = 2.0
    status_watch_timeout_seconds: float = 300.0

    demo_user_id: str = "00000000-0000-0000-0000-000000000000"
    demo_user_email: str = "demo@example.com"
    demo_user_name: str = "Demo User"
