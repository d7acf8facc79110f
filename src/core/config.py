"""Application settings and configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, PostgresDsn, field_validator
from typing import Any, ClassVar, Dict, Optional, List


class Settings(BaseSettings):
    """Application settings with environment variable loading."""

    # API settings
    PROJECT_NAME: str
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    API_V1_STR: str = "/api/v1"

    # CORS
    CORS_ORIGINS: str = "*"
    CORS_HEADERS: str = "*"
    CORS_METHODS: str = "*"

    # Database
    POSTGRES_SERVER: str
    POSTGRES_USER: str
    POSTGRES_PASSWORD: str
    POSTGRES_DB: str
    POSTGRES_PORT: str = "5432"
    DATABASE_URI: Optional[PostgresDsn] = Field(default=None, validate_default=True)
    SQL_ECHO: bool = False

    # Database connection pool settings
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20

    # JWT Settings (tokens are issued by the sign-in provider)
    JWT_SECRET_KEY: str
    ALGORITHM: str = "HS256"

    # Logging
    LOG_DIRECTORY: str = "logs"
    LOG_MAX_BYTES: int = 10 * 1024 * 1024  # 10MB
    LOG_BACKUP_COUNT: int = 5
    LOG_LEVEL: str = "INFO"
    SERVICE_NAME: str

    # Summative evaluation rules
    SUMMATIVE_PASS_THRESHOLD: int = 12  # 80% of 15
    SUMMATIVE_MAX_STUDENTS: int = 6

    # Configure bleach for sanitizing grader notes and feedback
    ALLOWED_TAGS: ClassVar[list[str]] = [
        "b", "br", "em", "i", "li", "ol", "p", "strong", "ul",
    ]

    ALLOWED_ATTRIBUTES: ClassVar[dict[str, list[str]]] = {
        "p": ["style"],
        "li": ["style"],
    }

    ALLOWED_CSS_PROPERTIES: ClassVar[list[str]] = [
        "text-align", "text-decoration", "font-weight", "font-style",
    ]

    @field_validator("DATABASE_URI", mode="before")
    def assemble_db_connection(cls, v: Optional[str], info: Dict[str, Any]) -> Any:
        """Build PostgreSQL connection string from components."""
        if isinstance(v, str):
            return v

        values = info.data
        user = values.get("POSTGRES_USER", "")
        password = values.get("POSTGRES_PASSWORD", "")
        host = values.get("POSTGRES_SERVER", "")
        port = values.get("POSTGRES_PORT", "5432")
        db = values.get("POSTGRES_DB", "")

        auth = f"{user}:{password}" if password else user
        return f"postgresql://{auth}@{host}:{port}/{db}"

    @field_validator("SUMMATIVE_PASS_THRESHOLD")
    def threshold_within_rubric(cls, v: int) -> int:
        """Pass mark must be reachable on the 15 point rubric."""
        if not 0 < v <= 15:
            raise ValueError("SUMMATIVE_PASS_THRESHOLD must be between 1 and 15")
        return v

    @field_validator("SUMMATIVE_MAX_STUDENTS")
    def max_students_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("SUMMATIVE_MAX_STUDENTS must be at least 1")
        return v

    @field_validator("LOG_LEVEL")
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("API_V1_STR")
    def ensure_api_prefix_has_slash(cls, v: str) -> str:
        """Ensure API prefix starts with a slash."""
        if not v.startswith("/"):
            return f"/{v}"
        return v

    @property
    def ASYNC_DATABASE_URI(self) -> str:
        """Database URI using the asyncpg driver."""
        return str(self.DATABASE_URI).replace("postgresql://", "postgresql+asyncpg://", 1)

    @staticmethod
    def _split_csv(value: str) -> List[str]:
        """Split a comma separated setting; "*" stays a single wildcard."""
        if value.strip() == "*":
            return ["*"]
        return [item.strip() for item in value.split(",") if item.strip()]

    @property
    def CORS_ORIGINS_LIST(self) -> List[str]:
        return self._split_csv(self.CORS_ORIGINS)

    @property
    def CORS_METHODS_LIST(self) -> List[str]:
        return self._split_csv(self.CORS_METHODS)

    @property
    def CORS_HEADERS_LIST(self) -> List[str]:
        return self._split_csv(self.CORS_HEADERS)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )


# Create global settings instance
settings = Settings()
