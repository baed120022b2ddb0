"""SAP app index access."""

from .client import APP_INDEX_PATH
from .client import AppIndexClient
from .client import AppIndexError
from .client import build_params
from .models import UI5_LIBRARY_TYPE
from .models import LibraryLocation
from .models import ModuleDefinition

__all__ = [
    "APP_INDEX_PATH",
    "UI5_LIBRARY_TYPE",
    "AppIndexClient",
    "AppIndexError",
    "LibraryLocation",
    "ModuleDefinition",
    "build_params",
]
