from pydantic_settings import BaseSettings
from typing import List, Any
import json


def parse_cors_origins(v: Any) -> List[str]:
    """Parse CORS origins from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        # Try JSON parsing first
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        # Fall back to comma-separated
        return [origin.strip() for origin in v.split(',') if origin.strip()]
    return []


def parse_extensions(v: Any) -> List[str]:
    """Parse allowed extensions from string or list"""
    if isinstance(v, list):
        return v
    if isinstance(v, str):
        if v.startswith('['):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                pass
        return [ext.strip().lower().lstrip('.') for ext in v.split(',') if ext.strip()]
    return []


class Settings(BaseSettings):
    """Application settings - all configurable via environment variables"""

    # ==========================================
    # Application
    # ==========================================
    APP_NAME: str = "Stride"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    API_VERSION: str = "v1"

    # Server Configuration
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000

    # ==========================================
    # Database
    # ==========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./stride.db"
    DB_ECHO: bool = False

    # ==========================================
    # Redis / Cache
    # ==========================================
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_CACHE_DB: int = 1
    CACHE_ENABLED: bool = True
    CACHE_TTL_SUBJECTS: int = 900  # 15 minutes
    CACHE_TTL_HOLIDAYS: int = 3600  # 1 hour

    # ==========================================
    # Authentication
    # ==========================================
    JWT_SECRET_KEY: str = "CHANGE_ME"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 24 hours
    ADMIN_EMAIL: str = "parthsavaliya1111@gmail.com"
    STUDENT_EMAIL_DOMAINS_STR: str = "nirmauni.ac.in,nirma.ac.in"

    # ==========================================
    # Uploads
    # ==========================================
    MAX_UPLOAD_SIZE: int = 10485760  # 10MB
    ALLOWED_REPORT_EXTENSIONS_STR: str = "pdf,html,htm"

    @property
    def ALLOWED_REPORT_EXTENSIONS(self) -> List[str]:
        """Parse allowed report extensions from comma-separated string"""
        return parse_extensions(self.ALLOWED_REPORT_EXTENSIONS_STR)

    @property
    def STUDENT_EMAIL_DOMAINS(self) -> List[str]:
        return parse_extensions(self.STUDENT_EMAIL_DOMAINS_STR)

    # ==========================================
    # Attendance
    # ==========================================
    DEFAULT_TARGET_PERCENTAGE: int = 75

    # ==========================================
    # Rate Limiting
    # ==========================================
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_MINUTE: int = 60
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    REPORT_IMPORT_RATE_LIMIT: str = "10/minute"

    # ==========================================
    # CORS (stored as comma-separated string, parsed to list)
    # ==========================================
    CORS_ORIGINS_STR: str = "http://localhost:3000,http://127.0.0.1:3000"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return parse_cors_origins(self.CORS_ORIGINS_STR)

    # ==========================================
    # Logging
    # ==========================================
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""  # Empty disables the file handler

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings

    def is_dev_mode(self) -> bool:
        return self.ENVIRONMENT != "production"


# Create settings instance
settings = Settings()
