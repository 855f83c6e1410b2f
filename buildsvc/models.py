"""Pydantic models for build records.

Build is the stored record. BuildPatch is the payload of a partial update,
where every field is optional and an empty value means "not specified".
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Build(BaseModel):
    """A single build record.

    Attributes:
        id: Globally unique build ID. Immutable once stored.
        name: Optional display label; empty string means unset.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1, description="Unique build ID")
    name: str = Field(default="", description="Display label")

    def to_dict(self) -> dict[str, Any]:
        """Convert to the wire representation.

        The name key is omitted while the name is unset.
        """
        return self.model_dump(exclude_defaults=True)


class BuildPatch(BaseModel):
    """Fields to change on an existing build.

    Attributes:
        id: Optional ID; when given it must match the target build.
        name: New display label, or None/empty to leave it unchanged.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str | None = Field(default=None, description="Build ID (must match)")
    name: str | None = Field(default=None, description="New display label")

    def apply(self, build: Build) -> Build:
        """Return a copy of a build with the specified fields overwritten.

        The ID is never changed. Empty values are treated the same as
        absent ones, so a name cannot be cleared through a patch.

        Args:
            build: Existing build record.

        Returns:
            Updated build record.
        """
        updates: dict[str, Any] = {}
        if self.name:
            updates["name"] = self.name
        if not updates:
            return build
        return build.model_copy(update=updates)


__all__ = ["Build", "BuildPatch"]
