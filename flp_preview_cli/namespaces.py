"""Platform namespace classification.

SAPUI5 delivered namespaces from https://ui5.sap.com/#/api/sap. Anything
declared under one of these is served by the platform and never needs a
loader path.
"""

from collections.abc import Iterable

UI5_NAMESPACES: tuple[str, ...] = (
    "sap.apf",
    "sap.base",
    "sap.chart",
    "sap.collaboration",
    "sap.f",
    "sap.fe",
    "sap.fileviewer",
    "sap.gantt",
    "sap.landvisz",
    "sap.m",
    "sap.ndc",
    "sap.ovp",
    "sap.rules",
    "sap.suite",
    "sap.tnt",
    "sap.ui",
    "sap.uiext",
    "sap.ushell",
    "sap.uxap",
    "sap.viz",
    "sap.webanalytics",
    "sap.zen",
)


def is_platform_namespace(identifier: str, namespaces: Iterable[str] = UI5_NAMESPACES) -> bool:
    """Check whether an identifier belongs to a platform namespace.

    Matches whole segments only, so ``sap.m`` covers ``sap.m.table`` but not ``sap.mx``.

    Args:
        identifier: Library or component id (e.g., "sap.m", "my.custom.lib")
        namespaces: Platform namespaces to check against

    Returns:
        True if identifier equals a namespace or lives below one
    """
    return any(identifier == ns or identifier.startswith(ns + ".") for ns in namespaces)


def is_custom_dependency(identifier: str) -> bool:
    """Inverse of is_platform_namespace() for the delivered UI5 namespaces."""
    return not is_platform_namespace(identifier)
