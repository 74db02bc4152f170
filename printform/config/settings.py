from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "printform"
    db_username: str = "printform"
    db_password: str = "secret"
    db_pool_max_size: int = 10

    vision_provider_order: list[str] = ["openai", "gemini"]
    vision_temperature: float = 0.1

    openai_api_key: str = ""
    openai_model_names: list[str] = ["gpt-4o"]
    openai_max_tokens: int = 1000
    openai_timeout_seconds: float | None = None

    gemini_api_key: str = ""
    gemini_model_names: list[str] = ["gemini-2.0-flash-exp", "gemini-1.5-flash"]
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_max_output_tokens: int = 2048
    gemini_timeout_seconds: float | None = None

    ocr_api_key: str = ""
    ocr_api_url: str = "https://api.ocr.space/parse/image"
    ocr_engines: list[str] = ["2", "1"]
    ocr_language: str = "eng"
    ocr_timeout_seconds: float | None = None

    forbidden_characters: str = "#"
    staging_ttl_seconds: int = 3600
