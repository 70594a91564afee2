"""Configuration manager for fc-vps."""

import os
from pathlib import Path

import yaml
from pydantic import ValidationError as PydanticValidationError

from ..api.exceptions import ConfigError
from ..models.config import DEFAULT_SERVER, DEFAULT_TIMEOUT, ClientConfig, Settings


class ConfigManager:
    """Manage the fc-vps settings file."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize config manager.

        Args:
            config_dir: Custom config directory (defaults to ~/.config/fc-vps)
        """
        if config_dir is None:
            config_dir = Path.home() / ".config" / "fc-vps"
        self.config_dir = config_dir
        self.config_file = self.config_dir / "config.yaml"
        self._settings: Settings | None = None

    def _ensure_config_dir(self) -> None:
        """Create config directory if it doesn't exist."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        os.chmod(self.config_dir, 0o700)

    def exists(self) -> bool:
        """Check if config file exists.

        Returns:
            True if config file exists
        """
        return self.config_file.exists()

    def load(self) -> Settings:
        """Load settings from file.

        A missing file yields empty settings.

        Returns:
            Loaded settings

        Raises:
            ConfigError: If the file is unreadable or invalid
        """
        if not self.exists():
            self._settings = Settings()
            return self._settings

        try:
            with open(self.config_file) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {e}")
        except OSError as e:
            raise ConfigError(f"Failed to read config file {self.config_file}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {self.config_file} must contain a mapping")

        try:
            self._settings = Settings(**data)
        except PydanticValidationError as e:
            raise ConfigError(f"Invalid config file {self.config_file}: {e}")
        return self._settings

    def save(self, settings: Settings) -> None:
        """Save settings to file.

        Args:
            settings: Settings to save

        Raises:
            ConfigError: If save fails
        """
        self._ensure_config_dir()
        try:
            data = settings.model_dump(exclude_none=True)
            with open(self.config_file, "w") as f:
                yaml.safe_dump(data, f, default_flow_style=False)
            os.chmod(self.config_file, 0o600)
            self._settings = settings
        except OSError as e:
            raise ConfigError(f"Failed to save config: {e}")

    def get(self) -> Settings:
        """Get current settings, loading if necessary.

        Returns:
            Current settings
        """
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def set_server(self, server: str) -> None:
        """Persist the default server URL.

        Args:
            server: Base URL of the VPS service

        Raises:
            ConfigError: If the URL has no http(s) scheme
        """
        if not server.startswith(("http://", "https://")):
            raise ConfigError(f"Server URL must start with http:// or https://: '{server}'")
        settings = self.get().model_copy(update={"server": server.rstrip("/")})
        self.save(settings)

    def set_timeout(self, timeout: float) -> None:
        """Persist the default request timeout.

        Args:
            timeout: Timeout in seconds

        Raises:
            ConfigError: If timeout is not positive
        """
        if timeout <= 0:
            raise ConfigError("Timeout must be greater than 0 seconds")
        settings = self.get().model_copy(update={"timeout": timeout})
        self.save(settings)

    def client_config(self, server: str | None = None, verbose: bool = False) -> ClientConfig:
        """Build the effective client configuration.

        The explicit server (flag or environment) wins over the settings
        file, which wins over the built-in default.

        Args:
            server: Server URL from --server / FC_VPS_SERVER
            verbose: Verbose output flag

        Returns:
            Effective configuration
        """
        settings = self.get()
        return ClientConfig(
            server=server or settings.server or DEFAULT_SERVER,
            verbose=verbose,
            timeout=settings.timeout or DEFAULT_TIMEOUT,
        )
