"""Decoders turning upstream bulletin documents into canonical forecasts.

Each upstream schema is handled by one decoder, picked by the caller with an
explicit BulletinVariant tag. All JSON variants share the same report layout
so the served text keeps a stable shape whatever the source endpoint.
"""

import logging
from typing import Protocol

from bs4 import BeautifulSoup
from pydantic import TypeAdapter, ValidationError

from metmar.ingest.html_extractor import extract_forecasts
from metmar.ingest.text import html_to_text
from metmar.models.bulletin import Bulletin, BulletinVariant, Echeance, Region
from metmar.models.errors import DecodeFailure
from metmar.models.forecast import Forecast

logger = logging.getLogger(__name__)

# Introduces the sea state sub-section of a combined wind and sea field
WIND_SEA_MARKER = "MER :"

# Region fields in output order; the closing field depends on the variant
REGION_FIELDS = ("situation", "observation", "wind_and_sea", "swell", "visibility")

_BULLETINS = TypeAdapter(list[Bulletin])


class Decoder(Protocol):
    def decode(self, raw: bytes, forecast_id: str = "") -> list[Forecast]:
        ...


def split_wind_and_sea(text: str) -> list[str]:
    """Split a wind and sea field on the sea state marker.

    Returns the normalized non-empty paragraphs: the text before the marker,
    then the marker and everything after it. Without a marker the whole
    field is a single paragraph.
    """
    head, marker, tail = text.partition(WIND_SEA_MARKER)
    parts = [head, marker + tail] if marker else [text]
    return [p for p in map(html_to_text, parts) if p]


def region_paragraphs(region: Region, closing_field: str) -> list[str]:
    paragraphs: list[str] = []
    for name in (*REGION_FIELDS, closing_field):
        value = getattr(region, name)
        if name == "wind_and_sea":
            paragraphs.extend(split_wind_and_sea(value))
            continue
        text = html_to_text(value)
        if text:
            paragraphs.append(text)
    return paragraphs


def format_report(
    title: str,
    preamble: list[str],
    horizons: list[Echeance],
    closing_field: str,
) -> str:
    """Lay out a bulletin as blank-line separated blocks.

    Title first, then the non-empty preamble paragraphs, then one block per
    horizon headed by "# <horizon title>".
    """
    blocks = [[title]]
    if preamble:
        blocks.append(preamble)
    for horizon in horizons:
        lines = [f"# {html_to_text(horizon.title)}"]
        for region in horizon.regions:
            lines.extend(region_paragraphs(region, closing_field))
        blocks.append(lines)
    return "\n\n".join("\n".join(block) for block in blocks) + "\n"


class _JsonBulletinDecoder:
    closing_field: str

    def decode(self, raw: bytes, forecast_id: str = "") -> list[Forecast]:
        try:
            reports = _BULLETINS.validate_json(raw)
        except ValidationError as e:
            raise DecodeFailure(f"could not decode json response: {e}") from e

        report = self._select(reports)
        title = html_to_text(report.title)
        content = format_report(
            title, self._preamble(report), report.horizons, self.closing_field
        )
        logger.debug(
            "Decoded %s bulletin %r with %d horizons",
            forecast_id or "unnamed", title, len(report.horizons),
        )
        return [Forecast(id=forecast_id, title=title, content=content)]

    def _select(self, reports: list[Bulletin]) -> Bulletin:
        raise NotImplementedError

    def _preamble(self, report: Bulletin) -> list[str]:
        raise NotImplementedError


class SingleAreaDecoder(_JsonBulletinDecoder):
    """One area per document; the first report object is used."""

    closing_field = "confidence"

    def _select(self, reports: list[Bulletin]) -> Bulletin:
        if not reports:
            raise DecodeFailure("no report retrieved")
        return reports[0]

    def _preamble(self, report: Bulletin) -> list[str]:
        special = html_to_text(report.special)
        return [f"Bulletin spécial: {special}"] if special else []


class CoastalDecoder(_JsonBulletinDecoder):
    """Offshore and coastal reports; the second (coastal) one is used."""

    closing_field = "weather"

    def _select(self, reports: list[Bulletin]) -> Bulletin:
        if len(reports) != 2:
            raise DecodeFailure(f"2 reports expected, got {len(reports)}")
        return reports[1]

    def _preamble(self, report: Bulletin) -> list[str]:
        parts = (report.header, report.footer, report.special)
        return [p for p in map(html_to_text, parts) if p]


class HtmlDecoder:
    """Zones embedded in a scraped HTML page, one forecast per zone."""

    def decode(self, raw: bytes, forecast_id: str = "") -> list[Forecast]:
        tree = BeautifulSoup(raw, "html.parser")
        return extract_forecasts(tree)


_DECODERS: dict[BulletinVariant, Decoder] = {
    BulletinVariant.SINGLE_AREA: SingleAreaDecoder(),
    BulletinVariant.COASTAL: CoastalDecoder(),
    BulletinVariant.HTML: HtmlDecoder(),
}


def get_decoder(variant: BulletinVariant | str) -> Decoder:
    return _DECODERS[BulletinVariant(variant)]


def decode(
    raw: bytes, variant: BulletinVariant | str, forecast_id: str = ""
) -> list[Forecast]:
    """Decode an upstream document into its canonical forecasts.

    Raises DecodeFailure when the document does not have the shape expected
    for the variant. Nothing is returned partially.
    """
    return get_decoder(variant).decode(raw, forecast_id)
