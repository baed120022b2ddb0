"""Manifest dependency collection.

Fetches ``manifest.json`` for each previewed application and collects the
library/component ids that are not delivered by the UI5 platform.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

import httpx

from ..namespaces import is_custom_dependency
from ..settings import create_http_client
from .models import CustomDependencySet
from .models import SkippedApplication

logger = logging.getLogger(__name__)

MANIFEST_FILE = "manifest.json"


def manifest_url(app_url: str) -> str:
    """URL of an application's descriptor, e.g. ``/apps/travel/manifest.json``."""
    return f"{app_url.rstrip('/')}/{MANIFEST_FILE}"


def extract_custom_dependencies(manifest: dict[str, Any]) -> set[str]:
    """Collect custom dependency ids declared in a manifest.

    Looks at ``sap.ui5`` -> ``dependencies.libs``, ``dependencies.components``
    and ``componentUsages``. Missing or non-mapping sections are ignored.

    Args:
        manifest: Parsed manifest.json

    Returns:
        Ids that are not in a platform namespace
    """
    ui5 = manifest.get("sap.ui5")
    if not isinstance(ui5, dict):
        return set()

    sections = []
    dependencies = ui5.get("dependencies")
    if isinstance(dependencies, dict):
        sections.append(dependencies.get("libs"))
        sections.append(dependencies.get("components"))
    sections.append(ui5.get("componentUsages"))

    custom = set()
    for section in sections:
        if not isinstance(section, dict):
            continue
        custom.update(key for key in section if is_custom_dependency(key))
    return custom


async def _fetch_manifest(client: httpx.AsyncClient, app_url: str) -> dict[str, Any]:
    response = await client.get(manifest_url(app_url))
    response.raise_for_status()
    manifest = response.json()
    if not isinstance(manifest, dict):
        raise ValueError(f"expected a JSON object, got {type(manifest).__name__}")
    return manifest


async def collect_custom_dependencies(
    app_urls: Sequence[str], client: httpx.AsyncClient | None = None
) -> CustomDependencySet:
    """Collect custom dependencies of all applications.

    Manifests are fetched concurrently. An application whose manifest cannot
    be fetched or parsed is recorded in ``skipped`` and does not affect the
    others.

    Args:
        app_urls: Application base URLs
        client: HTTP client to use. If None, one is created from settings.

    Returns:
        CustomDependencySet (possibly empty)
    """
    if client is None:
        async with create_http_client() as own_client:
            return await collect_custom_dependencies(app_urls, own_client)

    result = CustomDependencySet()
    outcomes = await asyncio.gather(
        *(_fetch_manifest(client, url) for url in app_urls),
        return_exceptions=True,
    )

    for url, outcome in zip(app_urls, outcomes, strict=True):
        if isinstance(outcome, httpx.HTTPError | httpx.InvalidURL | ValueError):
            # ValueError covers json.JSONDecodeError and non-object bodies
            logger.warning(f"Skipping {url}: could not load {MANIFEST_FILE}: {outcome}")
            result.skipped.append(SkippedApplication(url=url, reason=str(outcome)))
            continue
        if isinstance(outcome, BaseException):
            raise outcome

        found = extract_custom_dependencies(outcome)
        logger.debug(f"{url}: {len(found)} custom dependencies")
        result.ids.update(found)

    logger.info(f"Found {len(result)} custom dependencies in {len(app_urls) - len(result.skipped)} applications")
    return result
