"""Planner - Generate itineraries and extract their locations with Claude."""

from .generator import TripGenerator
from .locations import LocationExtractor
from .models import Location, TripRequest

__all__ = [
    "TripGenerator",
    "LocationExtractor",
    "Location",
    "TripRequest",
]
