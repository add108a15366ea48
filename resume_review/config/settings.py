from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    files_root: Path = Path("./files")

    pdf_engine: str = "pymupdf"
    raster_scale: float = 4.0
    raster_max_pixels: int = 100_000_000

    kv_backend: str = "memory"
    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "resume_review"
    db_username: str = "resume_review"
    db_password: str = "secret"

    inference_provider: str = "example"
    inference_api_key: str = ""
    inference_model_name: str = ""
    inference_base_url: str = ""
    inference_timeout_seconds: int = 60
    inference_temperature: float = 0.0

    verify_settle_seconds: float = 0.2
    navigation_delay_seconds: float = 0.5
    review_settle_seconds: float = 0.2

    authenticated: bool = True
