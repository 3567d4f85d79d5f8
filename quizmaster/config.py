from pydantic_settings import BaseSettings
from pydantic import SecretStr
from typing import List, Optional
import os
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    app_name: str = "Quizmaster API"
    debug: bool = os.getenv("DEBUG", "false").lower() == "true"
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Storage backend: 'memory' keeps everything in-process, 'supabase' uses the REST API
    storage_backend: str = os.getenv("STORAGE_BACKEND", "memory")

    # Supabase Configuration
    supabase_url: Optional[str] = os.getenv("SUPABASE_URL")
    supabase_anon_key: SecretStr = SecretStr(os.getenv("SUPABASE_ANON_KEY", ""))
    supabase_service_role_key: SecretStr = SecretStr(os.getenv("SUPABASE_SERVICE_ROLE_KEY", ""))

    # Quiz rules
    timezone: str = os.getenv("TIMEZONE", "UTC")
    max_questions: int = int(os.getenv("MAX_QUESTIONS", 50))
    session_max_age_minutes: int = int(os.getenv("SESSION_MAX_AGE_MINUTES", 240))

    cors_origins: List[str] = ["*"]

    @property
    def uses_supabase(self) -> bool:
        return self.storage_backend.lower() == "supabase"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

settings = Settings()
