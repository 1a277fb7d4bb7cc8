"""
Settings and configuration management for the YouTube138 MCP server.
The RapidAPI credential is read once at startup and handed to the dispatcher.
"""

import os
import yaml
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
from dataclasses import dataclass


RAPIDAPI_KEY_ENV = "RAPIDAPI_KEY"
RAPIDAPI_HOST_ENV = "RAPIDAPI_HOST"
TIMEOUT_ENV = "YOUTUBE138_TIMEOUT"

DEFAULT_RAPIDAPI_HOST = "youtube138.p.rapidapi.com"
DEFAULT_CREDENTIALS_FILE = "credentials.yml"


class SettingsError(ValueError):
    """Custom exception for configuration related errors."""
    pass


@dataclass(frozen=True)
class Settings:
    """Configuration settings for the YouTube138 MCP server."""

    # API Keys
    rapidapi_key: Optional[str] = None

    # Upstream Configuration
    rapidapi_host: str = DEFAULT_RAPIDAPI_HOST
    request_timeout: float = 30.0

    def __post_init__(self):
        """Validate settings after initialization."""
        if not self.rapidapi_host:
            raise SettingsError("RapidAPI host is required")
        if self.request_timeout <= 0:
            raise SettingsError(f"Request timeout must be positive, got {self.request_timeout}")

    @property
    def base_url(self) -> str:
        """HTTPS base URL of the upstream API."""
        return f"https://{self.rapidapi_host}"

    @property
    def has_credentials(self) -> bool:
        """Whether a non-empty RapidAPI key is configured."""
        return bool(self.rapidapi_key)


def load_credentials(credentials_path: str = DEFAULT_CREDENTIALS_FILE) -> Dict[str, Any]:
    """
    Load credentials from YAML file.

    Args:
        credentials_path: Path to credentials file

    Returns:
        Dictionary containing the 'rapidapi' key

    Raises:
        FileNotFoundError: If credentials file doesn't exist
        SettingsError: If credentials file is invalid
    """
    try:
        with open(credentials_path, 'r') as f:
            credentials = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(
            f"Credentials file '{credentials_path}' not found. "
            "Please create a credentials.yml file with a 'rapidapi' key."
        )
    except yaml.YAMLError as e:
        raise SettingsError(f"Invalid YAML in credentials file: {e}") from e

    if not credentials or not isinstance(credentials, dict):
        raise SettingsError("Credentials file is empty or invalid")

    rapidapi_key = credentials.get('rapidapi')
    if not rapidapi_key:
        raise SettingsError("Missing required key in credentials: 'rapidapi'")
    if not isinstance(rapidapi_key, str):
        raise SettingsError("RapidAPI key must be a string")

    return credentials


def _resolve_credentials_path(credentials_path: Optional[str]) -> Optional[Path]:
    """Explicit path wins; otherwise use credentials.yml from the cwd if present."""
    if credentials_path:
        return Path(credentials_path)
    default_path = Path(DEFAULT_CREDENTIALS_FILE)
    if default_path.is_file():
        return default_path
    return None


def get_settings(
    credentials_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None
) -> Settings:
    """
    Get application settings with the credential loaded.

    The RAPIDAPI_KEY environment variable takes precedence. A missing key is
    not an error here; the dispatcher refuses to call upstream without one.

    Args:
        credentials_path: Optional path to a YAML credentials file
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Settings instance with loaded configuration
    """
    env = os.environ if environ is None else environ

    rapidapi_key = env.get(RAPIDAPI_KEY_ENV, "").strip() or None
    if rapidapi_key is None:
        path = _resolve_credentials_path(credentials_path)
        if path is not None:
            rapidapi_key = load_credentials(str(path))['rapidapi'].strip()

    overrides: Dict[str, Any] = {}
    if env.get(RAPIDAPI_HOST_ENV):
        overrides['rapidapi_host'] = env[RAPIDAPI_HOST_ENV]
    if env.get(TIMEOUT_ENV):
        try:
            overrides['request_timeout'] = float(env[TIMEOUT_ENV])
        except ValueError as e:
            raise SettingsError(f"{TIMEOUT_ENV} must be a number, got {env[TIMEOUT_ENV]!r}") from e

    return Settings(rapidapi_key=rapidapi_key, **overrides)
