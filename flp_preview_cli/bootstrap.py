"""Sandbox bootstrap configuration.

Parses the attributes the preview server puts on the UI5 bootstrap tag and
runs custom library registration:
- data-open-ux-preview-libs-manifests: JSON string array of application URLs
- data-open-ux-preview-flex-settings: JSON object with adaptation settings
"""

import json
import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import parse_qs

import httpx

from .app_index import AppIndexError
from .dependencies.registrar import RegistrationResult
from .dependencies.registrar import register_component_dependency_paths
from .loader_paths import LoaderPathTable

logger = logging.getLogger(__name__)

APP_URLS_ATTRIBUTE = "data-open-ux-preview-libs-manifests"
FLEX_ATTRIBUTE = "data-open-ux-preview-flex-settings"


class BootstrapError(ValueError):
    """A bootstrap attribute could not be parsed."""


@dataclass
class BootstrapResult:
    """Result of configuring the sandbox."""

    flex_settings: dict[str, Any] | None = None
    registration: RegistrationResult | None = None


def sap_client_from_query(query: str) -> str | None:
    """Read ``sap-client`` from a URL query string (leading ``?`` optional)."""
    values = parse_qs(query.lstrip("?")).get("sap-client")
    return values[0] if values else None


def parse_app_urls(raw: str | None) -> list[str]:
    """Parse the application URL list attribute.

    Raises:
        BootstrapError: If the value is not a JSON array of strings
    """
    if not raw:
        return []
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise BootstrapError(f"{APP_URLS_ATTRIBUTE} is not valid JSON: {e}") from e
    if not isinstance(value, list) or not all(isinstance(url, str) for url in value):
        raise BootstrapError(f"{APP_URLS_ATTRIBUTE} must be a JSON array of strings")
    return value


def parse_flex_settings(raw: str | None) -> dict[str, Any] | None:
    """Parse the flex settings attribute.

    Raises:
        BootstrapError: If the value is not a JSON object
    """
    if not raw:
        return None
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise BootstrapError(f"{FLEX_ATTRIBUTE} is not valid JSON: {e}") from e
    if not isinstance(value, dict):
        raise BootstrapError(f"{FLEX_ATTRIBUTE} must be a JSON object")
    return value


async def configure(
    app_urls: str | None,
    flex: str | None = None,
    *,
    table: LoaderPathTable,
    query: str = "",
    client: httpx.AsyncClient | None = None,
) -> BootstrapResult:
    """Apply bootstrap configuration.

    Args:
        app_urls: Raw application URL attribute (JSON array)
        flex: Raw flex settings attribute (JSON object)
        table: Loader path table to register custom libraries in
        query: Query string of the sandbox page, used for ``sap-client``
        client: HTTP client to use. If None, one is created from settings.

    Returns:
        BootstrapResult

    Raises:
        BootstrapError: If an attribute is malformed
        AppIndexError: If custom library lookup fails
    """
    result = BootstrapResult(flex_settings=parse_flex_settings(flex))

    urls = parse_app_urls(app_urls)
    if urls:
        result.registration = await register_component_dependency_paths(
            urls, table, sap_client=sap_client_from_query(query), client=client
        )
    return result


async def initialize(
    app_urls: str | None,
    flex: str | None = None,
    *,
    table: LoaderPathTable,
    query: str = "",
    client: httpx.AsyncClient | None = None,
) -> BootstrapResult | None:
    """Configure the sandbox, logging failures instead of raising.

    The sandbox stays usable without custom libraries, so a failed
    configuration is reported and None is returned.
    """
    try:
        return await configure(app_urls, flex, table=table, query=query, client=client)
    except (BootstrapError, AppIndexError) as e:
        logger.error(f"Sandbox initialization failed. {e}")
        return None
    except Exception as e:
        logger.error(f"Sandbox initialization failed. {type(e).__name__}: {e}", exc_info=True)
        return None
