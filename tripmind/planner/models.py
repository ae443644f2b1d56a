"""Data models for trip generation and location extraction."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TripRequest:
    """A validated request to generate an itinerary."""

    destination: str
    duration: int  # days
    budget: str
    interests: str = ""

    def to_dict(self) -> dict:
        return {
            "destination": self.destination,
            "duration": self.duration,
            "budget": self.budget,
            "interests": self.interests,
        }


@dataclass
class Location:
    """A place mentioned in an itinerary."""

    name: str
    longitude: float
    latitude: float
    location_type: Optional[str] = None  # city, attraction, landmark, neighborhood
    description: Optional[str] = None
    recommendations: list[str] = field(default_factory=list)

    @property
    def coordinates(self) -> tuple[float, float]:
        """Coordinates as (lng, lat), the order map widgets expect."""
        return (self.longitude, self.latitude)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "coordinates": list(self.coordinates),
            "type": self.location_type,
            "description": self.description,
            "recommendations": self.recommendations,
        }
