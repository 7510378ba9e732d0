"""Configuration settings for the vaultsync backend.

Wraps environment variables and provides defaults.
"""

from typing import Optional

from pydantic import PostgresDsn, ValidationInfo, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Pydantic settings class.

    Attributes:
    ----------
        PROJECT_NAME (str): The name of the project.
        LOCAL_DEVELOPMENT (bool): Whether the application is running locally.
        ENVIRONMENT (str): The deployment environment (local, dev, test, prod).
        DEBUG (bool): Whether debug mode is enabled.
        LOG_LEVEL (str): The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        POSTGRES_HOST (str): The PostgreSQL server hostname.
        POSTGRES_DB (str): The PostgreSQL database name.
        POSTGRES_USER (str): The PostgreSQL username.
        POSTGRES_PASSWORD (str): The PostgreSQL password.
        SQLALCHEMY_ASYNC_DATABASE_URI (Optional[PostgresDsn]): The SQLAlchemy async database URI.
        TEMPORAL_HOST (str): The host of the Temporal server.
        TEMPORAL_PORT (int): The Temporal server port.
        TEMPORAL_NAMESPACE (str): The namespace of the Temporal server.
        TEMPORAL_TASK_QUEUE (str): The task queue the integration sync worker polls.
        TEMPORAL_ENABLED (bool): Whether sync passes are enqueued through Temporal.
        TEMPORAL_DISABLE_SANDBOX (bool): Run workflows unsandboxed (debugging only).
        INTEGRATION_SYNC_TIMEOUT_SECONDS (int): Start-to-close timeout of one sync pass.
        INTEGRATION_SYNC_MAX_ATTEMPTS (int): Attempts Temporal makes for one sync pass.
    """

    PROJECT_NAME: str = "vaultsync"
    LOCAL_DEVELOPMENT: bool = False
    ENVIRONMENT: str = "local"

    DEBUG: bool = False

    LOG_LEVEL: str = "INFO"

    POSTGRES_HOST: str = "localhost"
    POSTGRES_DB: str = "vaultsync"
    POSTGRES_USER: str = "vaultsync"
    POSTGRES_PASSWORD: str = ""
    SQLALCHEMY_ASYNC_DATABASE_URI: Optional[PostgresDsn] = None

    TEMPORAL_HOST: str = "localhost"
    TEMPORAL_PORT: int = 7233
    TEMPORAL_NAMESPACE: str = "default"
    TEMPORAL_TASK_QUEUE: str = "vaultsync-integration-sync"
    TEMPORAL_ENABLED: bool = False
    TEMPORAL_DISABLE_SANDBOX: bool = False

    INTEGRATION_SYNC_TIMEOUT_SECONDS: int = 600
    INTEGRATION_SYNC_MAX_ATTEMPTS: int = 3

    @field_validator("SQLALCHEMY_ASYNC_DATABASE_URI", mode="before")
    def assemble_db_connection(cls, v: Optional[str], info: ValidationInfo) -> PostgresDsn:
        """Build the SQLAlchemy database URI.

        Args:
        ----
            v (Optional[str]): The value of the SQLALCHEMY_ASYNC_DATABASE_URI setting.
            info (ValidationInfo): The validation context containing all field values.

        Returns:
        -------
            PostgresDsn: The assembled SQLAlchemy async database URI.

        """
        if isinstance(v, str):
            return v

        return PostgresDsn.build(
            scheme="postgresql+asyncpg",
            username=info.data.get("POSTGRES_USER"),
            password=info.data.get("POSTGRES_PASSWORD") or None,
            host=info.data.get("POSTGRES_HOST", "localhost"),
            path=f"{info.data.get('POSTGRES_DB') or ''}",
        )

    @property
    def temporal_address(self) -> str:
        """The Temporal server address.

        Returns:
            str: The Temporal server address in host:port format.
        """
        return f"{self.TEMPORAL_HOST}:{self.TEMPORAL_PORT}"


settings = Settings()
