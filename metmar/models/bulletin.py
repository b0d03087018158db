"""Upstream Meteo-France marine bulletin JSON shapes.

Field names follow the upstream French keys through aliases. Every text
field is optional upstream; missing and null values decode to "".
"""

from enum import StrEnum

from pydantic import BaseModel, Field, field_validator


class BulletinVariant(StrEnum):
    SINGLE_AREA = "single-area"  # one report per area, first element used
    COASTAL = "coastal"  # offshore + coastal pair, second element used
    HTML = "html"  # zones embedded in an HTML page


_LIST_FIELDS = ("horizons", "regions")


class _UpstreamModel(BaseModel):
    model_config = {"populate_by_name": True, "extra": "ignore"}

    @field_validator("*", mode="before")
    @classmethod
    def _normalize_scalars(cls, value, info):
        if value is None:
            return [] if info.field_name in _LIST_FIELDS else ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class Region(_UpstreamModel):
    title: str = Field(default="", alias="titreRegion")
    situation: str = ""
    observation: str = ""
    wind_and_sea: str = Field(default="", alias="ventEtMer")
    swell: str = Field(default="", alias="houle")
    visibility: str = Field(default="", alias="visi")
    confidence: str = Field(default="", alias="indice")
    weather: str = Field(default="", alias="ts")


class Echeance(_UpstreamModel):
    title: str = Field(default="", alias="titreEcheance")
    kind: str = Field(default="", alias="nomEcheance")
    regions: list[Region] = Field(default_factory=list, alias="region")


class Bulletin(_UpstreamModel):
    title: str = Field(default="", alias="titreBulletin")
    special: str = Field(default="", alias="bulletinSpecial")
    header: str = Field(default="", alias="chapeauBulletin")
    footer: str = Field(default="", alias="piedBulletin")
    units: str = Field(default="", alias="uniteBulletin")
    horizons: list[Echeance] = Field(default_factory=list, alias="echeance")
