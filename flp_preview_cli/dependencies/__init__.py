"""Custom dependency resolution for previewed applications.

Collects the custom (non-platform) libraries that applications declare in
their manifests and registers where they are served from.
"""

from .collector import collect_custom_dependencies
from .collector import extract_custom_dependencies
from .models import CustomDependencySet
from .models import SkippedApplication
from .registrar import RegistrationResult
from .registrar import register_component_dependency_paths
from .registrar import register_paths

__all__ = [
    "CustomDependencySet",
    "RegistrationResult",
    "SkippedApplication",
    "collect_custom_dependencies",
    "extract_custom_dependencies",
    "register_component_dependency_paths",
    "register_paths",
]
