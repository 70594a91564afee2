"""Configuration models."""

from pydantic import BaseModel, Field

DEFAULT_SERVER = "http://localhost:8080"
DEFAULT_TIMEOUT = 30.0
HEALTH_TIMEOUT = 5.0


class Settings(BaseModel):
    """Defaults persisted in the settings file."""

    server: str | None = None
    timeout: float | None = Field(None, gt=0)


class ClientConfig(BaseModel):
    """Process-wide options handed to the client and the command handlers."""

    server: str = DEFAULT_SERVER
    verbose: bool = False
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)
    health_timeout: float = Field(HEALTH_TIMEOUT, gt=0)

    @property
    def base_url(self) -> str:
        """Server URL without a trailing slash."""
        return self.server.rstrip("/")
