"""Tests for trip generation and location extraction with a fake Claude client."""

from types import SimpleNamespace

import anthropic
import httpx
import pytest

from tripmind.common.errors import GatewayError
from tripmind.planner import LocationExtractor, TripGenerator
from tripmind.planner import handler
from tripmind.planner.gateway import (
    PAYMENT_REQUIRED_MESSAGE,
    RATE_LIMIT_MESSAGE,
    create_client,
    translate_api_error,
)
from tripmind.planner.models import Location, TripRequest


class FakeMessages:
    """Records calls and returns a canned response or raises an error."""

    def __init__(self, content=None, error=None):
        self.content = content or []
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(content=self.content)


def fake_client(content=None, error=None):
    return SimpleNamespace(messages=FakeMessages(content, error))


def text_block(text):
    return SimpleNamespace(type="text", text=text)


def tool_block(locations, name="extract_locations"):
    return SimpleNamespace(type="tool_use", name=name, input={"locations": locations})


def status_error(status):
    request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
    response = httpx.Response(status, request=request)
    return anthropic.APIStatusError(f"status {status}", response=response, body=None)


REQUEST = TripRequest(destination="Lisbon", duration=3, budget="$900", interests="food")
ITINERARY = "Day 1: Arrival\nMorning: Alfama walk\n- Eat pastel de nata"


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------

def test_generate_returns_text_and_sends_prompt():
    client = fake_client([text_block(ITINERARY)])
    text = TripGenerator(client=client).generate(REQUEST)

    assert text == ITINERARY
    (call,) = client.messages.calls
    prompt = call["messages"][0]["content"]
    assert "3-day travel itinerary for Lisbon" in prompt
    assert "Budget: $900" in prompt
    assert "Interests: food" in prompt


def test_prompt_defaults_interests():
    generator = TripGenerator(client=fake_client())
    prompt = generator.build_prompt(TripRequest("Oslo", 2, "$500"))
    assert "Interests: General sightseeing" in prompt


def test_generate_without_text_is_gateway_error():
    client = fake_client([text_block("   ")])
    with pytest.raises(GatewayError):
        TripGenerator(client=client).generate(REQUEST)


@pytest.mark.parametrize("status, expected_status, message", [
    (429, 429, RATE_LIMIT_MESSAGE),
    (402, 402, PAYMENT_REQUIRED_MESSAGE),
    (503, 500, "AI gateway error"),
])
def test_api_errors_are_translated(status, expected_status, message):
    client = fake_client(error=status_error(status))
    with pytest.raises(GatewayError) as excinfo:
        TripGenerator(client=client).generate(REQUEST)
    assert excinfo.value.status == expected_status
    assert excinfo.value.message == message


def test_translate_error_without_status():
    error = translate_api_error(SimpleNamespace())
    assert error.status == 500


def test_create_client_requires_key(monkeypatch):
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
    with pytest.raises(ValueError):
        create_client()


# ---------------------------------------------------------------------------
# Location extraction
# ---------------------------------------------------------------------------

def test_extract_locations_from_tool_call():
    client = fake_client([
        text_block("Here you go"),
        tool_block([
            {
                "name": "Belém Tower",
                "coordinates": [-9.2160, 38.6916],
                "type": "landmark",
                "description": "A fortified tower on the Tagus.",
                "recommendations": ["Climb the tower", "Walk the riverside", "Visit at sunset"],
            },
        ]),
    ])
    locations = LocationExtractor(client=client).extract(ITINERARY)

    assert locations == [
        Location(
            name="Belém Tower",
            longitude=-9.2160,
            latitude=38.6916,
            location_type="landmark",
            description="A fortified tower on the Tagus.",
            recommendations=["Climb the tower", "Walk the riverside", "Visit at sunset"],
        )
    ]
    (call,) = client.messages.calls
    assert call["tool_choice"] == {"type": "tool", "name": "extract_locations"}
    assert ITINERARY in call["messages"][0]["content"]


def test_malformed_locations_are_skipped():
    client = fake_client([tool_block([
        {"name": "", "coordinates": [1, 2]},
        {"name": "No coords"},
        {"name": "Three coords", "coordinates": [1, 2, 3]},
        {"name": "Strings", "coordinates": ["1", "2"]},
        {"name": "Bools", "coordinates": [True, False]},
        {"name": "Lisbon", "coordinates": [-9, 38]},
    ])])
    locations = LocationExtractor(client=client).extract(ITINERARY)
    assert [loc.name for loc in locations] == ["Lisbon"]
    assert locations[0].coordinates == (-9.0, 38.0)


def test_missing_tool_call_is_gateway_error():
    client = fake_client([text_block("no tools today")])
    with pytest.raises(GatewayError) as excinfo:
        LocationExtractor(client=client).extract(ITINERARY)
    assert excinfo.value.message == "No tool call in AI response"


def test_location_to_dict_uses_lng_lat_order():
    location = Location("Porto", longitude=-8.61, latitude=41.15, location_type="city")
    assert location.to_dict() == {
        "name": "Porto",
        "coordinates": [-8.61, 41.15],
        "type": "city",
        "description": None,
        "recommendations": [],
    }


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------

def test_generate_trip_handler_renders_result():
    generator = TripGenerator(client=fake_client([text_block(ITINERARY)]))
    payload, status = handler.generate_trip_handler(
        1,
        {"destination": "Lisbon", "duration": 3, "budget": "$900", "interests": ""},
        generator=generator,
    )
    assert status == 200
    assert payload["itinerary"] == ITINERARY
    assert [b["kind"] for b in payload["blocks"]] == ["heading", "label", "bullet_row"]
    assert "<h3>Day 1 Arrival</h3>" in payload["html"]


def test_generate_trip_handler_validation_error():
    payload, status = handler.generate_trip_handler(1, {"destination": "Lisbon"})
    assert status == 400
    assert payload["error"] == "Invalid input"
    assert payload["details"]


def test_generate_trip_handler_rate_limited():
    generator = TripGenerator(client=fake_client(error=status_error(429)))
    payload, status = handler.generate_trip_handler(
        1,
        {"destination": "Lisbon", "duration": 3, "budget": "$900", "interests": ""},
        generator=generator,
    )
    assert status == 429
    assert payload == {"error": RATE_LIMIT_MESSAGE}


def test_extract_locations_handler():
    extractor = LocationExtractor(client=fake_client([
        tool_block([{"name": "Sintra", "coordinates": [-9.39, 38.8]}]),
    ]))
    payload, status = handler.extract_locations_handler(
        1, {"itinerary": ITINERARY}, extractor=extractor
    )
    assert status == 200
    assert payload["locations"][0]["name"] == "Sintra"
    assert payload["locations"][0]["coordinates"] == [-9.39, 38.8]


def test_unexpected_errors_get_safe_message():
    class BrokenGenerator:
        def generate(self, request):
            raise RuntimeError("connection reset by peer")

    payload, status = handler.generate_trip_handler(
        1,
        {"destination": "Lisbon", "duration": 3, "budget": "$900", "interests": ""},
        generator=BrokenGenerator(),
    )
    assert status == 500
    assert payload == {"error": "Unable to connect. Please check your internet connection."}
