"""Extract forecasts from report zones embedded in a scraped HTML page."""

import re

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from metmar.ingest.text import html_to_text
from metmar.models.errors import DecodeFailure
from metmar.models.forecast import Forecast

ZONE_CLASS = "bulletin-zone"
ZONE_ID_ATTR = "data-zone-id"
SECTION_TITLE_CLASS = "section-title"

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
TEXT_TAGS = ["p", "span", "li"]

_SPACES_RE = re.compile(r"\s+")
_LINE_EDGES_RE = re.compile(r" *\n *")


def extract_forecasts(tree: BeautifulSoup | Tag) -> list[Forecast]:
    """Build one forecast per report zone found in the tree.

    Raises DecodeFailure when no zone is found, when a zone has no
    identifier, or when two zones share one.
    """
    zones = tree.find_all(class_=ZONE_CLASS)
    if not zones:
        raise DecodeFailure("no forecast zone found in page")

    forecasts: list[Forecast] = []
    seen: set[str] = set()
    for zone in zones:
        forecast = _zone_forecast(zone)
        if forecast.id in seen:
            raise DecodeFailure(f"duplicate forecast zone: {forecast.id}")
        seen.add(forecast.id)
        forecasts.append(forecast)
    return forecasts


def _zone_forecast(zone: Tag) -> Forecast:
    zone_id = (zone.get(ZONE_ID_ATTR) or "").strip()
    if not zone_id:
        raise DecodeFailure("forecast zone without identifier")

    heading = zone.find(HEADING_TAGS)
    title = html_to_text(_fragment_text(heading)) if heading else zone_id

    lines: list[str] = []
    for el in zone.find_all(_is_fragment):
        if el is heading or _inside_fragment(el, zone):
            continue
        text = html_to_text(_fragment_text(el))
        if not text:
            continue
        if lines and _is_section_title(el):
            lines.append("")
        lines.append(text)

    return Forecast(id=zone_id, title=title, content="\n".join(lines) + "\n")


def _is_section_title(el: Tag) -> bool:
    return SECTION_TITLE_CLASS in (el.get("class") or [])


def _is_fragment(el: Tag) -> bool:
    """Text-bearing elements and section titles, whatever their tag."""
    return el.name in TEXT_TAGS or _is_section_title(el)


def _inside_fragment(el: Tag, zone: Tag) -> bool:
    """Whether el is already covered by an enclosing fragment of the zone."""
    for parent in el.parents:
        if parent is zone:
            return False
        if _is_fragment(parent):
            return True
    return False


def _fragment_text(el: Tag) -> str:
    """Flatten an element to text, keeping <br> as line breaks."""
    parts: list[str] = []
    for node in el.descendants:
        if isinstance(node, PreformattedString):
            continue
        if isinstance(node, NavigableString):
            parts.append(_SPACES_RE.sub(" ", str(node)))
        elif node.name == "br":
            parts.append("\n")
    return _LINE_EDGES_RE.sub("\n", "".join(parts))
