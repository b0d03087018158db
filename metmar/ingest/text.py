"""Reflow upstream markup-laden text fragments into plain text."""

import re

_BREAK_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_NEWLINES_RE = re.compile(r"\n{2,}")


def html_to_text(text: str) -> str:
    """Turn line-break tags into newlines, trim, and collapse blank lines.

    An empty result means the field is absent from the bulletin; callers
    skip it instead of emitting a blank line.
    """
    s = _BREAK_RE.sub("\n", text)
    s = s.strip()
    return _NEWLINES_RE.sub("\n", s)
