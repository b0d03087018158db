"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from metmar.ingest.meteo_client import DEFAULT_USER_AGENT
from metmar.models.bulletin import BulletinVariant

COASTAL_URL_TEMPLATE = (
    "http://www.meteofrance.com/mf3-rpc-portlet/rest/bulletins/cote/"
    "{area_id}/bulletinsMarineMetropole"
)


class SourceConfig(BaseModel):
    model_config = {"extra": "forbid"}

    variant: BulletinVariant = BulletinVariant.COASTAL
    # {area_id} is substituted per area; HTML pages are fetched once
    url_template: str = COASTAL_URL_TEMPLATE
    area_ids: list[str] = []
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = Field(default=30.0, gt=0.0)


class ServerConfig(BaseModel):
    model_config = {"extra": "forbid"}

    host: str = "0.0.0.0"
    port: int = Field(default=5000, ge=1, le=65535)
    # public URL prefix, e.g. "/marine"; empty to serve from the root
    prefix: str = Field(default="", pattern=r"^(/[^/]+)*$")


class GaleConfig(BaseModel):
    model_config = {"extra": "forbid"}

    forecast_dir: str = "data/forecasts"
    template_path: str = "static/gale.html"
    static_dir: str = "static"


class MetmarConfig(BaseModel):
    model_config = {"extra": "forbid"}

    source: SourceConfig = SourceConfig()
    server: ServerConfig = ServerConfig()
    gale: GaleConfig = GaleConfig()
