"""Search-related Pydantic schemas."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class SearchSource(StrEnum):
    """Upstream site a result was found on."""

    PRINTABLES = "Printables"
    THINGIVERSE = "Thingiverse"
    MAKERWORLD = "Makerworld"


class SearchResult(BaseModel):
    """One model found by a source adapter, normalized to the common record shape.

    Serializes with ``imageUrl`` (camelCase) to match the public JSON contract.
    ``title``, ``url`` and ``image_url`` must be non-empty; hits that do not
    provide them are rejected at construction time.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)

    title: str = Field(..., min_length=1, description="Model name")
    url: str = Field(..., min_length=1, description="Absolute link to the model page")
    image_url: str = Field(
        ...,
        min_length=1,
        alias="imageUrl",
        description="Preview image URL",
    )
    source: SearchSource = Field(..., description="Site the result came from")
    author: str = Field(default="", description="Display name of the model's creator")
