"""Turn classified itinerary segments into display blocks."""

from __future__ import annotations

from typing import Iterable, Union

from .classifier import classify
from .models import BlockKind, DisplayBlock, IconHint, Segment, SegmentKind

DAY_ICON = "calendar"


def _icon_name(hint: IconHint):
    return None if hint is IconHint.NONE else hint.value


def render_segment(segment: Segment) -> list[DisplayBlock]:
    """Render one segment into its group of display blocks."""
    kind = segment.kind

    if kind is SegmentKind.BLANK:
        return [DisplayBlock(BlockKind.SPACER)]

    if kind is SegmentKind.DAY_HEADER:
        return [DisplayBlock(BlockKind.HEADING, icon=DAY_ICON, text=segment.heading)]

    if kind is SegmentKind.TIME_SLOT:
        # Label and content stay on one line
        return [
            DisplayBlock(
                BlockKind.LABEL,
                heading=segment.heading,
                text=segment.body or None,
            )
        ]

    if kind is SegmentKind.LABELED_SECTION:
        blocks = [
            DisplayBlock(
                BlockKind.LABEL,
                icon=_icon_name(segment.icon_hint),
                heading=segment.heading,
            )
        ]
        if segment.body:
            blocks.append(DisplayBlock(BlockKind.TEXT, text=segment.body, nested=True))
        return blocks

    if kind is SegmentKind.BULLET:
        return [
            DisplayBlock(
                BlockKind.BULLET_ROW,
                icon=_icon_name(segment.icon_hint),
                text=segment.body,
            )
        ]

    if kind is SegmentKind.EMPHASIZED:
        return [DisplayBlock(BlockKind.RICH_TEXT, text=segment.body)]

    return [DisplayBlock(BlockKind.TEXT, text=segment.body)]


def render(segments: Iterable[Segment]) -> list[DisplayBlock]:
    """Render segments into display blocks, preserving order."""
    blocks: list[DisplayBlock] = []
    for segment in segments:
        blocks.extend(render_segment(segment))
    return blocks


def render_itinerary(text: Union[str, Iterable[str]]) -> list[DisplayBlock]:
    """Classify and render itinerary text in one step."""
    return render(classify(text))
