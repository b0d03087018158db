"""Forecast fetcher: retrieves and normalizes the bulletins of every area.

Every call goes back to the upstream service; nothing is cached between
requests.
"""

import logging

from metmar.config.schema import SourceConfig
from metmar.ingest.decoders import decode
from metmar.ingest.meteo_client import MeteoClient
from metmar.models.bulletin import BulletinVariant
from metmar.models.errors import DecodeFailure, NotFound
from metmar.models.forecast import Forecast

logger = logging.getLogger(__name__)


class ForecastFetcher:
    def __init__(self, client: MeteoClient, source: SourceConfig):
        self.client = client
        self.source = source

    @property
    def per_area(self) -> bool:
        """Whether each area is a separate upstream document."""
        return self.source.variant != BulletinVariant.HTML

    def fetch_all(self) -> list[Forecast]:
        """Fetch and decode the forecasts of every configured area.

        Raises FetchFailure or DecodeFailure; no partial batch is returned.
        """
        if self.per_area:
            forecasts: list[Forecast] = []
            for area_id in self.source.area_ids:
                forecasts.extend(self._fetch_area(area_id))
        else:
            raw = self.client.fetch(self.source.url_template)
            forecasts = decode(raw, self.source.variant)

        if not forecasts:
            raise DecodeFailure("no forecast retrieved")
        ids = [f.id for f in forecasts]
        if len(set(ids)) != len(ids):
            raise DecodeFailure(f"duplicate forecast ids in batch: {ids}")
        logger.info("Fetched %d forecasts", len(forecasts))
        return forecasts

    def fetch_one(self, forecast_id: str) -> Forecast:
        """Fetch the forecast of a single area, raising NotFound if unknown."""
        if self.per_area:
            if forecast_id not in self.source.area_ids:
                raise NotFound(f"cannot find forecast: {forecast_id}")
            candidates = self._fetch_area(forecast_id)
        else:
            candidates = self.fetch_all()

        for forecast in candidates:
            if forecast.id == forecast_id:
                return forecast
        raise NotFound(f"cannot find forecast: {forecast_id}")

    def _fetch_area(self, area_id: str) -> list[Forecast]:
        url = self.source.url_template.format(area_id=area_id)
        raw = self.client.fetch(url)
        return decode(raw, self.source.variant, area_id)
