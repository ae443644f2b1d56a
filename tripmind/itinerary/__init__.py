"""Itinerary - Classify, render and display free-form travel itineraries."""

from .classifier import classify, classify_line
from .models import BlockKind, DisplayBlock, IconHint, Segment, SegmentKind
from .renderer import render, render_itinerary
from .web_view import ItineraryWebView

__all__ = [
    "classify",
    "classify_line",
    "render",
    "render_itinerary",
    "Segment",
    "SegmentKind",
    "IconHint",
    "DisplayBlock",
    "BlockKind",
    "ItineraryWebView",
]
