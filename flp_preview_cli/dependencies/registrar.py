"""Module path registration.

Looks up where custom libraries are served from via the app index and
installs those locations into a LoaderPathTable.
"""

import logging
from collections.abc import Collection
from collections.abc import Sequence
from dataclasses import dataclass
from dataclasses import field

import httpx

from ..app_index import AppIndexClient
from ..app_index import ModuleDefinition
from ..loader_paths import LoaderPathTable
from ..settings import create_http_client
from .collector import collect_custom_dependencies
from .models import CustomDependencySet

logger = logging.getLogger(__name__)


@dataclass
class RegistrationResult:
    """Outcome of a full resolution run."""

    dependencies: CustomDependencySet
    registered: dict[str, str] = field(default_factory=dict)


def loader_paths_from_app_info(
    app_info: dict[str, ModuleDefinition | None], requested_ids: Collection[str]
) -> dict[str, str]:
    """Extract loader paths from an app index response.

    Only UI5 libraries with a non-empty URL that were part of the request
    qualify; everything else is skipped. When the same library appears
    twice, the later entry wins.

    Args:
        app_info: Module definition key -> ModuleDefinition
        requested_ids: Custom dependency ids the lookup was made for

    Returns:
        Module path prefix -> servable URL
    """
    paths: dict[str, str] = {}
    for definition in app_info.values():
        if definition is None or not definition.dependencies:
            continue
        for dependency in definition.dependencies:
            if not dependency.is_registrable():
                continue
            if dependency.identifier not in requested_ids:
                logger.debug(f"Ignoring library {dependency.identifier}: not a requested dependency")
                continue
            logger.info(f"Registering library {dependency.identifier} from server {dependency.servable_url}")
            paths[dependency.path_key] = dependency.servable_url
    return paths


async def register_paths(
    custom_ids: Collection[str],
    table: LoaderPathTable,
    *,
    sap_client: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> dict[str, str]:
    """Register loader paths for custom dependencies.

    Args:
        custom_ids: Custom dependency ids. Nothing is requested if empty.
        table: Loader path table to install paths into
        sap_client: SAP client forwarded to the app index (only if 3 characters)
        client: HTTP client to use. If None, one is created from settings.

    Returns:
        The paths installed into ``table``

    Raises:
        AppIndexError: If the app index request or its response fails.
            ``table`` is not modified in that case.
    """
    if not custom_ids:
        logger.debug("No custom dependencies - skipping app index lookup")
        return {}

    if client is None:
        async with create_http_client() as own_client:
            return await register_paths(custom_ids, table, sap_client=sap_client, client=own_client)

    app_info = await AppIndexClient(client).fetch_app_info(custom_ids, sap_client=sap_client)
    paths = loader_paths_from_app_info(app_info, custom_ids)
    if paths:
        table.configure(paths=paths)
    return paths


async def register_component_dependency_paths(
    app_urls: Sequence[str],
    table: LoaderPathTable,
    *,
    sap_client: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> RegistrationResult:
    """Collect custom dependencies of the applications and register their paths.

    Args:
        app_urls: Application base URLs
        table: Loader path table to install paths into
        sap_client: SAP client forwarded to the app index
        client: HTTP client to use. If None, one is created from settings.

    Returns:
        RegistrationResult with the collected dependencies and installed paths

    Raises:
        AppIndexError: If the app index lookup fails
    """
    if client is None:
        async with create_http_client() as own_client:
            return await register_component_dependency_paths(
                app_urls, table, sap_client=sap_client, client=own_client
            )

    dependencies = await collect_custom_dependencies(app_urls, client)
    registered = await register_paths(dependencies, table, sap_client=sap_client, client=client)
    return RegistrationResult(dependencies=dependencies, registered=registered)
