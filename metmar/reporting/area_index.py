"""HTML index page linking every available area report."""

from html import escape

from metmar.models.forecast import Forecast

PAGE_TITLE = "Marine weather forecasts in Brest area"


def format_area_index(forecasts: list[Forecast]) -> str:
    """One link per forecast, pointing at areas/<id> relative to the index."""
    links = [
        f'\t<a href="areas/{escape(f.id)}">{escape(f.title or f.id)}</a><br/>'
        for f in forecasts
    ]
    lines = [
        "<html>",
        "<head>",
        '\t<meta charset="utf-8">',
        f"\t<title>{PAGE_TITLE}</title>",
        "</head>",
        "<body>",
        *links,
        "</body>",
        "</html>",
    ]
    return "\n".join(lines) + "\n"
