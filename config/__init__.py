"""Configuration management for the YouTube138 MCP server."""

from .settings import Settings, SettingsError, get_settings, load_credentials

__all__ = ["Settings", "SettingsError", "get_settings", "load_credentials"]
