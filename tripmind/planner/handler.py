"""API handlers for the AI planner: trip generation, locations and saved trips."""

from typing import Any, Dict, Optional

import database as db
from tripmind.common.errors import NotFoundError, ValidationError, handles_errors
from tripmind.common.validation import validate_itinerary_input, validate_trip_input
from tripmind.itinerary.renderer import render_itinerary
from tripmind.itinerary.web_view import ItineraryWebView
from .generator import TripGenerator
from .locations import LocationExtractor


def _rendered(itinerary: str) -> Dict[str, Any]:
    blocks = render_itinerary(itinerary)
    return {
        "blocks": [block.to_dict() for block in blocks],
        "html": ItineraryWebView().render_html(blocks),
    }


@handles_errors("GENERATE TRIP")
def generate_trip_handler(user_id: int, data: Dict[str, Any],
                          generator: Optional[TripGenerator] = None):
    """Generate an itinerary for the requested destination.

    Args:
        user_id: The user's ID
        data: Request data containing destination, duration, budget, interests

    Returns:
        The itinerary text with its rendered blocks and HTML, or an error
    """
    request = validate_trip_input(data)
    print(f"[GENERATE TRIP] Trip generation request from user: {user_id}")

    generator = generator or TripGenerator()
    itinerary = generator.generate(request)

    return {"itinerary": itinerary, **_rendered(itinerary)}, 200


@handles_errors("EXTRACT LOCATIONS")
def extract_locations_handler(user_id: int, data: Dict[str, Any],
                              extractor: Optional[LocationExtractor] = None):
    """Extract map locations from an itinerary."""
    itinerary = validate_itinerary_input(data)
    print(f"[EXTRACT LOCATIONS] Location extraction request from user: {user_id}")

    extractor = extractor or LocationExtractor()
    locations = extractor.extract(itinerary)

    return {"locations": [loc.to_dict() for loc in locations]}, 200


@handles_errors("RENDER ITINERARY")
def render_itinerary_handler(user_id: int, data: Dict[str, Any]):
    """Classify and render itinerary text without calling the AI."""
    itinerary = validate_itinerary_input(data)
    return _rendered(itinerary), 200


@handles_errors("SAVE TRIP")
def save_trip_handler(user_id: int, data: Dict[str, Any]):
    """Save a generated itinerary to the user's trips."""
    request = validate_trip_input(data)
    itinerary = validate_itinerary_input(data)

    trip_id = db.add_trip(user_id, {**request.to_dict(), "itinerary": itinerary})
    if not trip_id:
        return {"error": "Failed to save trip"}, 500
    return {"success": True, "id": trip_id}, 200


@handles_errors("LIST TRIPS")
def list_trips_handler(user_id: int):
    return {"trips": db.get_user_trips(user_id)}, 200


@handles_errors("GET TRIP")
def get_trip_handler(user_id: int, trip_id: int):
    """Return one saved trip with its rendered itinerary."""
    trip = db.get_trip(user_id, trip_id)
    if not trip:
        raise NotFoundError("Trip not found")
    return {"trip": trip, **_rendered(trip["itinerary"])}, 200


@handles_errors("DELETE TRIP")
def delete_trip_handler(user_id: int, data: Dict[str, Any]):
    trip_id = data.get("id") if isinstance(data, dict) else None
    if isinstance(trip_id, bool) or not isinstance(trip_id, int):
        raise ValidationError("Invalid input", [{"field": "id", "message": "id must be a trip ID"}])

    if not db.delete_trip(user_id, trip_id):
        raise NotFoundError("Trip not found")
    return {"success": True}, 200
