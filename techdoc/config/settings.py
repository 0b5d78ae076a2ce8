from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "techdoc"
    db_username: str = "techdoc"
    db_password: str = "secret"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10

    upload_root: str = "/app/uploads"
    temp_dir: str = ""
    max_file_size_bytes: int = 50 * 1024 * 1024
    public_base_url: str = "http://localhost:8080"

    pdf_engine: str = "pdfplumber"
    pdf_render_dpi: int = 300
    ocr_languages: str = "eng+rus"
    tesseract_cmd: str = ""

    enrichment_provider: str = "gemini"
    enrichment_language: str = "Russian"
    enrichment_max_input_chars: int = 4000
    enrichment_timeout_seconds: int = 30

    gemini_api_key: str = ""
    gemini_model_name: str = "gemini-1.5-flash-latest"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    openai_api_key: str = ""
    openai_model_name: str = ""
    openai_compatible_base_url: str = ""
    openai_temperature: float = 0.2

    worker_count: int = 4
    processing_queue_size: int = 100
    queue_put_timeout_seconds: float = 1.0
    worker_shutdown_timeout_seconds: float = 30.0

    notification_send_timeout_seconds: float = 5.0

    api_host: str = "0.0.0.0"
    api_port: int = 8080
