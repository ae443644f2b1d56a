"""Generate day-by-day itineraries using Claude."""

from typing import Optional

import anthropic

from tripmind.common.errors import GatewayError
from .gateway import MODEL, create_client, translate_api_error
from .models import TripRequest


SYSTEM_PROMPT = """You are an expert travel planner. Generate a detailed, personalized travel itinerary based on the user's preferences.

Format the response as a well-structured itinerary with:
- Day-by-day breakdown
- Activities and attractions for each day
- Estimated costs
- Travel tips specific to the destination
- Restaurant and accommodation recommendations

Use plain lines such as "Day 1: Arrival", "Morning: ...", "Budget: ...", "Tips: ..." and "- " bullet points.

Be specific, practical, and ensure the itinerary fits within the given budget and duration."""

USER_PROMPT = """Create a {duration}-day travel itinerary for {destination}.

Budget: {budget}
Interests: {interests}
Duration: {duration} days

Please provide a comprehensive day-by-day plan that maximizes the experience while staying within budget."""


class TripGenerator:
    """Generate itinerary text for a trip request."""

    def __init__(self, api_key: Optional[str] = None, client=None):
        self.client = client or create_client(api_key)

    def build_prompt(self, request: TripRequest) -> str:
        return USER_PROMPT.format(
            destination=request.destination,
            duration=request.duration,
            budget=request.budget,
            interests=request.interests or "General sightseeing",
        )

    def generate(self, request: TripRequest) -> str:
        """Return the generated itinerary as free-form text."""
        print(f"[PLANNER] Generating {request.duration}-day itinerary for {request.destination}")
        try:
            message = self.client.messages.create(
                model=MODEL,
                max_tokens=4096,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": self.build_prompt(request)}],
            )
        except anthropic.APIError as e:
            raise translate_api_error(e) from e

        for block in message.content:
            if block.type == "text" and block.text.strip():
                return block.text

        raise GatewayError("AI response contained no itinerary")
