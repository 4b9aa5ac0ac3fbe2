"""Pydantic models for catalog game records."""

from pydantic import BaseModel, ConfigDict


class GameRecord(BaseModel):
    """A game as returned by the catalog API.

    Only the fields read by the ranker are typed; everything else the
    upstream sends (background_image, platforms, genres, ...) rides along
    as extra fields and is handed back untouched.
    """

    model_config = ConfigDict(extra="allow")

    id: int
    name: str | None = ""
    rating: float | None = None
    ratings_count: int | None = None
    released: str | None = None

    def to_payload(self) -> dict:
        """Serialize back to the upstream shape, without injected defaults."""
        return self.model_dump(exclude_unset=True)
