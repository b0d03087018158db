"""Chart series for the gale warning plot page."""

import json
from dataclasses import asdict, replace
from datetime import UTC, datetime

from metmar.models.gale import GalePoint, GaleWarning

PLOT_EPOCH = datetime(2016, 1, 1, tzinfo=UTC)
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

DATA_PLACEHOLDER = "$DATA"
REF_PLACEHOLDER = "$REF"


def augment_timeline(
    warnings: list[GaleWarning], now: datetime | None = None
) -> list[GaleWarning]:
    """Add the virtual beginning-of-year and current-time points.

    The January 1st anchor carries a literal 0: it is added after gap
    filling. The final point repeats the last known number at ``now``.
    """
    if now is None:
        now = datetime.now(UTC)
    jan1 = datetime(now.year, 1, 1, tzinfo=UTC)

    augmented = list(warnings)
    if not augmented or augmented[0].timestamp > jan1:
        augmented.insert(0, GaleWarning(number=0, timestamp=jan1))
    augmented.append(GaleWarning(number=augmented[-1].number, timestamp=now))
    return augmented


def to_point(warning: GaleWarning) -> GalePoint:
    ts = warning.timestamp
    return GalePoint(
        x=(ts - PLOT_EPOCH).total_seconds() / 86400,
        y=warning.number,
        date=ts.strftime(DATE_FORMAT),
        yearday=ts.timetuple().tm_yday,
    )


def build_series(
    warnings: list[GaleWarning],
) -> tuple[list[GalePoint], list[GalePoint]]:
    """Return the warning series and the day-of-year reference series.

    The reference series has the same points with y replaced by yearday, so
    the client can draw a "day equals day" line on the same chart.
    """
    data = [to_point(w) for w in warnings]
    ref = [replace(p, y=p.yearday) for p in data]
    return data, ref


def _points_json(points: list[GalePoint]) -> str:
    return json.dumps([asdict(p) for p in points])


def render_gale_page(
    template: str, warnings: list[GaleWarning], now: datetime | None = None
) -> str:
    """Substitute both series into the page template placeholders."""
    data, ref = build_series(augment_timeline(warnings, now))
    page = template.replace(DATA_PLACEHOLDER, _points_json(data))
    return page.replace(REF_PLACEHOLDER, _points_json(ref))
