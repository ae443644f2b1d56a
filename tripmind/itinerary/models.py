"""Data models for itinerary classification and rendering."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SegmentKind(str, Enum):
    """Kind of a classified itinerary line, in rule priority order."""

    BLANK = "blank"
    DAY_HEADER = "day_header"
    TIME_SLOT = "time_slot"
    LABELED_SECTION = "labeled_section"
    BULLET = "bullet"
    EMPHASIZED = "emphasized"
    PLAIN_TEXT = "plain_text"


class IconHint(str, Enum):
    """Pictographic category guessed from keywords."""

    FOOD = "food"
    PHOTO = "photo"
    PLACE = "place"
    MONEY = "money"
    INFO = "info"
    NONE = "none"


class BlockKind(str, Enum):
    SPACER = "spacer"
    HEADING = "heading"
    LABEL = "label"
    BULLET_ROW = "bullet_row"
    RICH_TEXT = "rich_text"
    TEXT = "text"


@dataclass(frozen=True)
class Segment:
    """One classified line of itinerary text."""

    kind: SegmentKind
    heading: Optional[str] = None
    body: Optional[str] = None
    icon_hint: IconHint = IconHint.NONE

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "heading": self.heading,
            "body": self.body,
            "icon_hint": self.icon_hint.value,
        }


@dataclass(frozen=True)
class DisplayBlock:
    """A renderable unit derived from a segment.

    Only RICH_TEXT blocks carry markup in ``text`` (escaped text plus
    ``<strong>`` spans). Every other field is plain text.
    """

    kind: BlockKind
    icon: Optional[str] = None  # calendar, food, photo, place, money, info
    heading: Optional[str] = None
    text: Optional[str] = None
    nested: bool = False  # body indented under a labeled section

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "icon": self.icon,
            "heading": self.heading,
            "text": self.text,
            "nested": self.nested,
        }
