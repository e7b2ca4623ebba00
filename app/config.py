# app/config.py
from pydantic_settings import BaseSettings
from pydantic import field_validator

class Settings(BaseSettings):
    """Environment settings"""

    # API
    app_name: str = "Elite Memoriz API"
    debug: bool = False
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]
    max_request_size_mb: int = 200
    log_dir: str = "logs"

    # Database
    database_url: str = "sqlite:///./elite_memoriz.db"

    # Events
    event_lifetime_days: int = 30

    # Storage (AZURE | SUPABASE)
    storage_provider: str = "SUPABASE"
    azure_storage_connection_string: str = ""
    azure_container: str = "event-uploads"

    # Supabase (auth + storage)
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_bucket: str = "uploads"

    # OpenAI API
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    @field_validator('storage_provider')
    def validate_storage_provider(cls, v):
        v = v.upper()
        if v not in ("AZURE", "SUPABASE"):
            raise ValueError('STORAGE_PROVIDER must be AZURE or SUPABASE')
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False

# singleton
settings = Settings()
