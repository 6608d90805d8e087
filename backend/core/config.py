from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    # Gemini API settings
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_temperature: float = 0.2
    max_retries: int = 2

    # Brand manual settings
    max_upload_size_mb: int = 50
    max_manual_chars: int = 30000  # Text sent to the model

    # Generated files
    temp_dir: Optional[str] = None
    temp_file_lifetime: int = 600  # seconds

    # Server settings
    host: str = "0.0.0.0"
    port: int = 5001
    debug: bool = False
    log_level: str = "INFO"
    allowed_origins: str = "*"

    class Config:
        env_file = ".env"
        case_sensitive = False  # Allow case-insensitive environment variables

settings = Settings()
