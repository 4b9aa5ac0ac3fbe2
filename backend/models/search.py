"""Pydantic models for game search."""

from pydantic import BaseModel, Field, field_validator


class SearchFilters(BaseModel):
    platforms: str | None = Field(default=None, pattern=r"^\d+(,\d+)*$")
    genres: str | None = Field(default=None, pattern=r"^\d+(,\d+)*$")
    ordering: str | None = Field(default=None, pattern=r"^-?[a-z_]+(,-?[a-z_]+)*$")

    @field_validator("platforms", "genres", "ordering", mode="before")
    @classmethod
    def blank_as_unset(cls, v):
        # Forms submit untouched facets as empty strings
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def has_filters(self) -> bool:
        return bool(self.platforms or self.genres or self.ordering)

    def facet_params(self) -> dict:
        """Platform/genre params for an upstream request (ordering excluded)."""
        params = {}
        if self.platforms:
            params["platforms"] = self.platforms
        if self.genres:
            params["genres"] = self.genres
        return params


class RankedPage(BaseModel):
    count: int
    next: str | None = None
    previous: str | None = None
    results: list[dict] = Field(default_factory=list)
