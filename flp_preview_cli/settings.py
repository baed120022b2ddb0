"""Settings for the preview dependency resolver.

Reads the ``preview`` section from three settings.yaml scopes and the environment:
- User global (~/.flp-preview/settings.yaml)
- Project (.flp-preview/settings.yaml)
- Local (.flp-preview/settings.local.yaml)
- Environment (FLP_PREVIEW_SERVER_URL, FLP_PREVIEW_TIMEOUT, FLP_PREVIEW_SAP_CLIENT)
"""

import logging
import os
from pathlib import Path
from typing import Any

import httpx
import yaml
from pydantic import BaseModel
from pydantic import Field

logger = logging.getLogger(__name__)

ENV_PREFIX = "FLP_PREVIEW_"


class PreviewSettings(BaseModel):
    """Effective preview settings."""

    server_url: str = Field("http://localhost:8080", description="Preview server / backend base URL")
    timeout: float = Field(10.0, description="HTTP timeout in seconds")
    sap_client: str | None = Field(None, description="SAP client forwarded to the app index")


class SettingsManager:
    """Merges preview settings across user/project/local scopes and the environment."""

    def __init__(self, settings_dir: Path | None = None, user_dir: Path | None = None):
        """Initialize settings manager with standard paths.

        Args:
            settings_dir: Base directory for project/local settings (for testing).
                          If None, uses .flp-preview in current directory.
            user_dir: Base directory for user settings (for testing).
                      If None, uses ~/.flp-preview.
        """
        if settings_dir is None:
            settings_dir = Path(".flp-preview")
        if user_dir is None:
            user_dir = Path.home() / ".flp-preview"

        self.user_settings_file = user_dir / "settings.yaml"
        self.project_settings_file = settings_dir / "settings.yaml"
        self.local_settings_file = settings_dir / "settings.local.yaml"

    def get_settings(self) -> PreviewSettings:
        """Get effective settings.

        Resolution order (later overrides earlier):
        1. Defaults
        2. User settings
        3. Project settings
        4. Local settings
        5. Environment variables

        Returns:
            PreviewSettings
        """
        values: dict[str, Any] = {}

        for path in (self.user_settings_file, self.project_settings_file, self.local_settings_file):
            data = self._read_settings(path)
            if data and isinstance(data.get("preview"), dict):
                values.update(data["preview"])

        values.update(self._read_env())
        return PreviewSettings.model_validate(values)

    def _read_env(self) -> dict[str, Any]:
        env = {}
        for key in ("server_url", "timeout", "sap_client"):
            if value := os.getenv(f"{ENV_PREFIX}{key.upper()}"):
                env[key] = value
        return env

    def _read_settings(self, path: Path) -> dict[str, Any] | None:
        """Read settings from YAML file.

        Args:
            path: Path to settings file

        Returns:
            Settings dict or None if file doesn't exist or is unreadable
        """
        if not path.exists():
            return None

        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read settings from {path}: {e}")
            return None

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring settings in {path}: expected a mapping, got {type(data).__name__}")
            return None
        return data


def get_settings() -> PreviewSettings:
    """Get effective settings from the standard locations."""
    return SettingsManager().get_settings()


def create_http_client(settings: PreviewSettings | None = None) -> httpx.AsyncClient:
    """Create the async HTTP client shared by manifest and app index requests.

    Relative application URLs and the app index path resolve against ``server_url``.
    """
    settings = settings or get_settings()
    return httpx.AsyncClient(base_url=settings.server_url, timeout=settings.timeout, follow_redirects=True)
