from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Artwork(BaseModel):
    """Artwork record as returned by the marketplace API.

    Wire names are camelCase (``imageUrl``, ``artistID``, ``createdAt``);
    they are accepted as aliases and restored on ``model_dump(by_alias=True)``.
    """

    id: str = Field(min_length=1)
    title: str
    description: str | None = None
    image_url: str = Field(alias="imageUrl")
    artist_id: str = Field(alias="artistID")
    created_at: Any = Field(default=None, alias="createdAt")
    blurhash: str | None = None
    price: float | None = Field(default=None, ge=0)

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("id", "artist_id", mode="before")
    @classmethod
    def coerce_identifier(cls, v: Any) -> Any:
        """Identifiers are opaque; numeric ids from the backend become strings."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("blurhash", "description", mode="before")
    @classmethod
    def empty_to_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def to_store(self) -> dict[str, Any]:
        """Serialize for a dcc.Store (JSON, wire field names)."""
        return self.model_dump(mode="json", by_alias=True)


class UploadedArtwork(BaseModel):
    """Response of ``POST /artworks/upload``."""

    url: str


class ImageRecord(BaseModel):
    """Document written to the Firestore ``images`` collection after an upload."""

    id: str
    url: str
    created_at: str = Field(description="RFC 3339 timestamp")

    def to_firestore_fields(self) -> dict[str, Any]:
        return {
            "fields": {
                "id": {"stringValue": self.id},
                "url": {"stringValue": self.url},
                "createdAt": {"timestampValue": self.created_at},
            }
        }
