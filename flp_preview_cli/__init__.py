"""Custom UI5 library resolution for Fiori launchpad sandbox previews."""

from .app_index import AppIndexError
from .dependencies import CustomDependencySet
from .dependencies import collect_custom_dependencies
from .dependencies import register_component_dependency_paths
from .dependencies import register_paths
from .loader_paths import LoaderPathTable
from .namespaces import UI5_NAMESPACES
from .namespaces import is_platform_namespace

__all__ = [
    "UI5_NAMESPACES",
    "AppIndexError",
    "CustomDependencySet",
    "LoaderPathTable",
    "collect_custom_dependencies",
    "is_platform_namespace",
    "register_component_dependency_paths",
    "register_paths",
]
