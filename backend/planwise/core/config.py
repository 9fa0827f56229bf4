"""Configuration settings for the Planwise backend.

Wraps environment variables and provides defaults.
"""

from typing import Optional

from pydantic import Field, PostgresDsn, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Pydantic settings class.

    Attributes:
    ----------
        PROJECT_NAME (str): The name of the project.
        LOCAL_DEVELOPMENT (bool): Whether the application is running locally.
        ENVIRONMENT (str): The deployment environment (local, dev, test, prod).
        DEBUG (bool): Whether debug mode is enabled.
        LOG_LEVEL (str): The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        FIRST_SUPERUSER (str): The email address of the bootstrap admin user.
        FIRST_SUPERUSER_NAME (str): Display name of the bootstrap admin user.
        AUTH_ENABLED (bool): Whether callers are identified from the X-User-ID header.
            When disabled, every request runs as the bootstrap admin user.
        POSTGRES_HOST (str): The PostgreSQL server hostname.
        POSTGRES_DB (str): The PostgreSQL database name.
        POSTGRES_USER (str): The PostgreSQL username.
        POSTGRES_PASSWORD (str): The PostgreSQL password.
        SQLALCHEMY_ASYNC_DATABASE_URI (Optional[str]): The SQLAlchemy async database URI.
        RUN_DB_INIT (bool): Whether to create tables and the bootstrap user on startup.
        PRORATION_DAYS_PER_MONTH (int): Divisor used to derive a plan's daily price.
        MONTH_ACTIVATION_DAYS (int): Length in days of a MONTH activation period.
        ADDITIONAL_CORS_ORIGINS (Optional[str]): Additional CORS origins separated by commas.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    PROJECT_NAME: str = "Planwise"
    LOCAL_DEVELOPMENT: bool = False
    ENVIRONMENT: str = "local"

    # Debug configuration
    DEBUG: bool = False

    # Logging configuration
    LOG_LEVEL: str = "INFO"

    FIRST_SUPERUSER: str = "admin@example.com"
    FIRST_SUPERUSER_NAME: str = "Superuser"

    AUTH_ENABLED: bool = False

    POSTGRES_HOST: str = "localhost"
    POSTGRES_DB: str = "planwise"
    POSTGRES_USER: str = "planwise"
    POSTGRES_PASSWORD: str = "planwise"
    SQLALCHEMY_ASYNC_DATABASE_URI: Optional[str] = Field(default=None, validate_default=True)

    RUN_DB_INIT: bool = True

    # Billing configuration
    PRORATION_DAYS_PER_MONTH: int = 30
    MONTH_ACTIVATION_DAYS: int = 31

    ADDITIONAL_CORS_ORIGINS: Optional[str] = None  # Separated by commas or semicolons

    @field_validator("SQLALCHEMY_ASYNC_DATABASE_URI", mode="before")
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> str:
        """Build the SQLAlchemy database URI.

        Args:
        ----
            v (Optional[str]): The value of the SQLALCHEMY_ASYNC_DATABASE_URI setting.
            info (ValidationInfo): The validation context containing all field values.

        Returns:
        -------
            str: The assembled SQLAlchemy async database URI.

        """
        if isinstance(v, str):
            return v

        return str(
            PostgresDsn.build(
                scheme="postgresql+asyncpg",
                username=info.data.get("POSTGRES_USER"),
                password=info.data.get("POSTGRES_PASSWORD"),
                host=info.data.get("POSTGRES_HOST", "localhost"),
                path=f"{info.data.get('POSTGRES_DB') or ''}",
            )
        )

    @field_validator("PRORATION_DAYS_PER_MONTH", "MONTH_ACTIVATION_DAYS")
    def validate_positive_days(cls, v: int, info: ValidationInfo) -> int:
        """Day counts feed divisions and date offsets, so they must be positive."""
        if v < 1:
            raise ValueError(f"{info.field_name} must be at least 1")
        return v

    @property
    def cors_origins(self) -> list[str]:
        """Additional CORS origins parsed from the comma or semicolon separated setting."""
        if not self.ADDITIONAL_CORS_ORIGINS:
            return []
        separator = ";" if ";" in self.ADDITIONAL_CORS_ORIGINS else ","
        return [
            origin.strip()
            for origin in self.ADDITIONAL_CORS_ORIGINS.split(separator)
            if origin.strip()
        ]


settings = Settings()
