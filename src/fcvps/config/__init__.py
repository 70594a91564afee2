"""Configuration management."""

from .manager import ConfigManager
from ..models.config import ClientConfig, Settings

__all__ = ["ClientConfig", "ConfigManager", "Settings"]
