"""App index client for looking up where custom UI5 libraries are served from."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError

from .models import ModuleDefinition

logger = logging.getLogger(__name__)

APP_INDEX_PATH = "/sap/bc/ui2/app_index/ui5_app_info"

# SAP client numbers are always three characters (e.g., "001")
SAP_CLIENT_LENGTH = 3

_response_adapter = TypeAdapter(dict[str, ModuleDefinition | None])


class AppIndexError(RuntimeError):
    """The app index could not be queried or returned unusable data."""

    def __init__(self, message: str, url: str | None = None):
        super().__init__(message)
        self.url = url


def build_params(ids: Iterable[str], sap_client: str | None = None) -> dict[str, str]:
    """Build query parameters for an app info request.

    Args:
        ids: Library/component ids to look up
        sap_client: SAP client, forwarded only if it is exactly three characters

    Returns:
        Query parameters with comma-joined ids (sorted) and optional sap-client
    """
    params = {"id": ",".join(sorted(ids))}
    if sap_client and len(sap_client) == SAP_CLIENT_LENGTH:
        params["sap-client"] = sap_client
    return params


class AppIndexClient:
    """Client for the SAP app index ``ui5_app_info`` service.

    Issues a single request per lookup - no retries, no caching.
    """

    def __init__(self, http_client: httpx.AsyncClient):
        """Initialize app index client.

        Args:
            http_client: Async client whose base_url points at the backend serving the app index
        """
        self.http_client = http_client

    async def fetch_app_info(
        self, ids: Iterable[str], sap_client: str | None = None
    ) -> dict[str, ModuleDefinition | None]:
        """Fetch module definitions for the given ids.

        Args:
            ids: Library/component ids to look up
            sap_client: Optional SAP client

        Returns:
            Module definition key -> ModuleDefinition, in response order

        Raises:
            AppIndexError: If the request fails or the response cannot be parsed
        """
        params = build_params(ids, sap_client)
        logger.info(f"Fetching app info for {params['id']}")

        try:
            response = await self.http_client.get(APP_INDEX_PATH, params=params)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"App index request failed: {e}")
            raise AppIndexError(f"App index request failed: {e}", url=APP_INDEX_PATH) from e

        url = str(response.request.url)
        try:
            return _response_adapter.validate_python(response.json())
        except ValidationError as e:
            logger.error(f"App index returned unexpected data from {url}: {e}")
            raise AppIndexError(f"App index returned unexpected data: {e}", url=url) from e
        except ValueError as e:
            # json.JSONDecodeError and undecodable bodies
            logger.error(f"App index returned invalid JSON from {url}: {e}")
            raise AppIndexError(f"App index returned invalid JSON: {e}", url=url) from e
