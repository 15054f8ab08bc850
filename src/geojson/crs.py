"""
Coordinate Reference System members

GeoJSON (2008) 'crs' member in its two forms:

    {"type": "name", "properties": {"name": "urn:ogc:def:crs:OGC:1.3:CRS84"}}
    {"type": "link", "properties": {"href": "http://...", "type": "proj4"}}

An object without a 'crs' member uses the default CRS (WGS 84); the models
keep that as None and never emit a 'crs' member for it.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMS
# =============================================================================


class CRSType(str, Enum):
    """Kind of CRS member"""

    NAME = "name"
    LINK = "link"


# =============================================================================
# CRS MODELS
# =============================================================================


class NamedCRS(BaseModel):
    """
    CRS identified by name (e.g. 'EPSG:4326' or an OGC URN).
    """

    type: Literal["name"] = Field("name", description="CRS member type")
    properties: dict[str, Any] = Field(..., description="Must hold a non-empty 'name'")

    model_config = {"frozen": True}

    @field_validator("properties")
    @classmethod
    def validate_name(cls, v: dict[str, Any]) -> dict[str, Any]:
        """Name must be a non-empty string"""
        name = v.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError("named CRS requires a non-empty 'name' property")
        return v

    @classmethod
    def from_name(cls, name: str) -> "NamedCRS":
        return cls(properties={"name": name})

    @property
    def name(self) -> str:
        return self.properties["name"]


class LinkedCRS(BaseModel):
    """
    CRS given by a link to a definition document.

    'href' is required; the optional link 'type' names the format
    (proj4, ogcwkt, esriwkt).
    """

    type: Literal["link"] = Field("link", description="CRS member type")
    properties: dict[str, Any] = Field(..., description="Must hold a non-empty 'href'")

    model_config = {"frozen": True}

    @field_validator("properties")
    @classmethod
    def validate_href(cls, v: dict[str, Any]) -> dict[str, Any]:
        href = v.get("href")
        if not isinstance(href, str) or not href:
            raise ValueError("linked CRS requires a non-empty 'href' property")
        return v

    @classmethod
    def from_href(cls, href: str, link_type: str | None = None) -> "LinkedCRS":
        properties: dict[str, Any] = {"href": href}
        if link_type is not None:
            properties["type"] = link_type
        return cls(properties=properties)

    @property
    def href(self) -> str:
        return self.properties["href"]

    @property
    def link_type(self) -> str | None:
        return self.properties.get("type")


CRS = Annotated[Union[NamedCRS, LinkedCRS], Field(discriminator="type")]
