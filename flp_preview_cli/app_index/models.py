"""Pydantic models for app index responses."""

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

# Dependency type the app index reports for servable UI5 libraries
UI5_LIBRARY_TYPE = "UI5LIB"


class LibraryLocation(BaseModel):
    """Servable location of one dependency as reported by the app index."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    identifier: str | None = Field(None, alias="componentId", description="Dot-delimited library id")
    servable_url: str | None = Field(None, alias="url", description="URL the library is served from")
    kind: str | None = Field(None, alias="type", description="Dependency type (e.g., 'UI5LIB')")

    @property
    def path_key(self) -> str:
        """Loader path prefix, e.g. ``my/custom/lib`` for ``my.custom.lib``.

        Raises:
            ValueError: If the entry has no identifier
        """
        if not self.identifier:
            raise ValueError(f"App index entry without componentId has no loader path: {self!r}")
        return self.identifier.replace(".", "/")

    def is_registrable(self) -> bool:
        """True if this entry names a UI5 library with a non-empty URL."""
        return bool(self.identifier) and bool(self.servable_url) and self.kind == UI5_LIBRARY_TYPE


class ModuleDefinition(BaseModel):
    """One module definition from the app index response."""

    dependencies: list[LibraryLocation] | None = Field(None, description="Dependencies with their locations")
