"""Loader path table for the preview session.

Holds the module path prefixes the UI5 loader resolves against, e.g.
``my/custom/lib -> https://host/sap/bc/ui5_ui5/sap/mylib``. Owned by the host
process and handed to the registrar explicitly.
"""

import logging
from collections.abc import Iterator
from collections.abc import Mapping

logger = logging.getLogger(__name__)


class LoaderPathTable(Mapping[str, str]):
    """Module path prefix -> servable URL.

    Writes are insert-or-overwrite merges; entries are never removed for
    the lifetime of the table.
    """

    def __init__(self, paths: Mapping[str, str] | None = None):
        self._paths: dict[str, str] = dict(paths or {})

    def configure(self, paths: Mapping[str, str]) -> None:
        """Merge path mappings into the table, like ``sap.ui.loader.config({paths})``.

        Args:
            paths: Module path prefix -> URL. Existing prefixes are overwritten.
        """
        for prefix, url in paths.items():
            previous = self._paths.get(prefix)
            if previous is not None and previous != url:
                logger.debug(f"Loader path {prefix} changed from {previous} to {url}")
            self._paths[prefix] = url

    def to_loader_config(self) -> dict[str, dict[str, str]]:
        """Loader configuration in the shape ``sap.ui.loader.config`` accepts."""
        return {"paths": dict(self._paths)}

    def __getitem__(self, prefix: str) -> str:
        return self._paths[prefix]

    def __iter__(self) -> Iterator[str]:
        return iter(self._paths)

    def __len__(self) -> int:
        return len(self._paths)

    def __repr__(self) -> str:
        return f"LoaderPathTable({self._paths!r})"
