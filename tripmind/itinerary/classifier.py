"""Classify free-form itinerary text into typed segments.

Each line is matched against an ordered tuple of rules and the first rule
that accepts the line decides its segment. A line that no rule accepts
becomes plain text, so classification never fails.
"""

from __future__ import annotations

import html
import re
from typing import Iterable, Optional, Union

from .models import IconHint, Segment, SegmentKind

EMPHASIS_OPEN = "<strong>"
EMPHASIS_CLOSE = "</strong>"

DAY_HEADER_RE = re.compile(r"^(\*\*)?Day \d+", re.IGNORECASE)
TIME_SLOT_RE = re.compile(
    r"^(Morning|Afternoon|Evening|Night|Breakfast|Lunch|Dinner):", re.IGNORECASE
)
SECTION_RE = re.compile(
    r"^(Budget|Tips|Recommendations|Accommodation|Transportation|Notes|Important):",
    re.IGNORECASE,
)
BULLET_MARKERS = ("-", "*", "•")
EMPHASIS_RE = re.compile(r"\*\*.*\*\*|__.*__")
BOLD_STAR_RE = re.compile(r"\*\*(.*?)\*\*")
BOLD_UNDERSCORE_RE = re.compile(r"__(.*?)__")

# Checked top to bottom, first keyword hit wins
SECTION_ICONS = (
    (("accommodation", "hotel"), IconHint.PLACE),
    (("tip",), IconHint.INFO),
    (("budget",), IconHint.MONEY),
)
BULLET_ICONS = (
    (("food", "restaurant", "eat"), IconHint.FOOD),
    (("photo", "camera", "view"), IconHint.PHOTO),
)


def _pick_icon(text: str, table, default: IconHint) -> IconHint:
    lowered = text.lower()
    for keywords, hint in table:
        if any(keyword in lowered for keyword in keywords):
            return hint
    return default


def _split_label(line: str) -> tuple[str, str]:
    """Split ``Label: content`` on the first colon."""
    label, _, rest = line.partition(":")
    return label, rest.strip()


def _day_header(line: str) -> Optional[Segment]:
    if not DAY_HEADER_RE.match(line):
        return None
    heading = line.replace("*", "").replace(":", "").strip()
    return Segment(SegmentKind.DAY_HEADER, heading=heading)


def _time_slot(line: str) -> Optional[Segment]:
    if not TIME_SLOT_RE.match(line):
        return None
    label, body = _split_label(line)
    return Segment(SegmentKind.TIME_SLOT, heading=label, body=body)


def _labeled_section(line: str) -> Optional[Segment]:
    if not SECTION_RE.match(line):
        return None
    label, body = _split_label(line)
    return Segment(
        SegmentKind.LABELED_SECTION,
        heading=label,
        body=body,
        icon_hint=_pick_icon(label, SECTION_ICONS, IconHint.NONE),
    )


def _bullet(line: str) -> Optional[Segment]:
    if not line.startswith(BULLET_MARKERS):
        return None
    body = line[1:].strip()
    return Segment(
        SegmentKind.BULLET,
        body=body,
        icon_hint=_pick_icon(body, BULLET_ICONS, IconHint.PLACE),
    )


def emphasize(line: str) -> str:
    """Escape a line, then turn ``**x**`` and ``__x__`` spans into bold markup."""
    escaped = html.escape(line)
    escaped = BOLD_STAR_RE.sub(EMPHASIS_OPEN + r"\1" + EMPHASIS_CLOSE, escaped)
    return BOLD_UNDERSCORE_RE.sub(EMPHASIS_OPEN + r"\1" + EMPHASIS_CLOSE, escaped)


def _emphasized(line: str) -> Optional[Segment]:
    if not EMPHASIS_RE.search(line):
        return None
    return Segment(SegmentKind.EMPHASIZED, body=emphasize(line))


RULES = (
    _day_header,
    _time_slot,
    _labeled_section,
    _bullet,
    _emphasized,
)


def classify_line(line: str) -> Segment:
    """Classify a single line of itinerary text."""
    trimmed = line.strip()
    if not trimmed:
        return Segment(SegmentKind.BLANK)

    for rule in RULES:
        segment = rule(trimmed)
        if segment is not None:
            return segment

    return Segment(SegmentKind.PLAIN_TEXT, body=trimmed)


def classify(text: Union[str, Iterable[str]]) -> list[Segment]:
    """Classify itinerary text into one segment per line, in order.

    Args:
        text: Either the raw text (split on newlines) or a sequence of lines.
    """
    lines = text.split("\n") if isinstance(text, str) else text
    return [classify_line(line) for line in lines]
