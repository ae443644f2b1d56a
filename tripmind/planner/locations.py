"""Extract mappable locations from itinerary text with Claude tool use."""

from typing import Optional

import anthropic

from tripmind.common.errors import GatewayError
from .gateway import MODEL, create_client, translate_api_error
from .models import Location


SYSTEM_PROMPT = (
    "You are a travel location extraction assistant. Extract all significant locations "
    "(cities, landmarks, attractions, neighborhoods) from the itinerary with their details, "
    "coordinates, descriptions, and top recommendations."
)

LOCATION_TYPES = ["city", "attraction", "landmark", "neighborhood"]

EXTRACT_TOOL = {
    "name": "extract_locations",
    "description": "Extract locations with their coordinates, descriptions, and recommendations from a travel itinerary",
    "input_schema": {
        "type": "object",
        "properties": {
            "locations": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "name": {
                            "type": "string",
                            "description": "The name of the location (e.g., 'Tokyo Tower', 'Paris, France')"
                        },
                        "coordinates": {
                            "type": "array",
                            "items": {"type": "number"},
                            "minItems": 2,
                            "maxItems": 2,
                            "description": "Longitude and latitude [lng, lat] in decimal degrees"
                        },
                        "type": {
                            "type": "string",
                            "enum": LOCATION_TYPES,
                            "description": "Type of location"
                        },
                        "description": {
                            "type": "string",
                            "description": "A brief 1-2 sentence description of the location highlighting what makes it special"
                        },
                        "recommendations": {
                            "type": "array",
                            "items": {"type": "string"},
                            "description": "Top 3-5 things to do, see, or experience at this location",
                            "minItems": 3,
                            "maxItems": 5
                        }
                    },
                    "required": ["name", "coordinates", "type", "description", "recommendations"],
                    "additionalProperties": False
                }
            }
        },
        "required": ["locations"],
        "additionalProperties": False
    }
}


class LocationExtractor:
    """Pull locations, coordinates and recommendations out of an itinerary."""

    def __init__(self, api_key: Optional[str] = None, client=None):
        self.client = client or create_client(api_key)

    def extract(self, itinerary: str) -> list[Location]:
        print("[PLANNER] Extracting locations from itinerary...")
        try:
            message = self.client.messages.create(
                model=MODEL,
                max_tokens=4096,
                system=SYSTEM_PROMPT,
                messages=[{
                    "role": "user",
                    "content": f"Extract all locations from this itinerary with detailed information:\n\n{itinerary}",
                }],
                tools=[EXTRACT_TOOL],
                tool_choice={"type": "tool", "name": EXTRACT_TOOL["name"]},
            )
        except anthropic.APIError as e:
            raise translate_api_error(e) from e

        tool_input = None
        for block in message.content:
            if block.type == "tool_use" and block.name == EXTRACT_TOOL["name"]:
                tool_input = block.input
                break

        if tool_input is None:
            raise GatewayError("No tool call in AI response")

        locations = []
        for entry in tool_input.get("locations", []):
            location = self._build_location(entry)
            if location:
                locations.append(location)

        print(f"[PLANNER] Successfully extracted {len(locations)} locations")
        return locations

    def _build_location(self, entry: dict) -> Optional[Location]:
        """Build a Location from one tool entry, or None if it is unusable."""
        name = (entry.get("name") or "").strip()
        coords = entry.get("coordinates")
        if (
            not name
            or not isinstance(coords, (list, tuple))
            or len(coords) != 2
            or not all(isinstance(c, (int, float)) and not isinstance(c, bool) for c in coords)
        ):
            print(f"[PLANNER] Skipping malformed location: {entry!r}")
            return None

        return Location(
            name=name,
            longitude=float(coords[0]),
            latitude=float(coords[1]),
            location_type=entry.get("type"),
            description=entry.get("description"),
            recommendations=list(entry.get("recommendations") or []),
        )
