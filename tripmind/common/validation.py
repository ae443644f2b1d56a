"""Validation of JSON request bodies."""

import re
from typing import Any, Dict

from tripmind.common import templates
from tripmind.common.errors import ValidationError
from tripmind.planner.models import TripRequest

MAX_DESTINATION = 100
MAX_DURATION_DAYS = 30
MAX_BUDGET = 50
MAX_INTERESTS = 500
MAX_ITINERARY = 50000
MAX_FULL_NAME = 100
MIN_USERNAME = 3
MAX_USERNAME = 50
MAX_EMAIL = 254
MIN_PASSWORD = 6

TRAVELER_TYPES = tuple(value for value, _label, _desc in templates.TRAVELER_TYPES)

COUNTRY_CODE_RE = re.compile(r"^[A-Za-z]{2}$")
CURRENCY_RE = re.compile(r"^[A-Za-z]{3}$")
LANGUAGE_RE = re.compile(r"^[A-Za-z]{2}$")
EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")


def _string(data: Dict[str, Any], field: str, errors: list, required: bool = True,
            max_length: int = 0, default: str = "", allow_empty: bool = False) -> str:
    """Fetch a trimmed string field, recording problems in ``errors``.

    With ``allow_empty`` a required field must be present but may be blank.
    """
    value = data.get(field)
    if value is None:
        if required:
            errors.append({"field": field, "message": f"{field} is required"})
        return default
    if not isinstance(value, str):
        errors.append({"field": field, "message": f"{field} must be a string"})
        return default

    value = value.strip()
    if required and not value and not allow_empty:
        errors.append({"field": field, "message": f"{field} is required"})
    elif max_length and len(value) > max_length:
        errors.append({"field": field, "message": f"{field} must be at most {max_length} characters"})
    return value


def _check(data: Any, message: str) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError(message, [{"field": None, "message": "Request body must be a JSON object"}])
    return data


def validate_trip_input(data: Any) -> TripRequest:
    """Validate a trip generation request."""
    data = _check(data, "Invalid input")
    errors: list = []

    destination = _string(data, "destination", errors, max_length=MAX_DESTINATION)
    budget = _string(data, "budget", errors, max_length=MAX_BUDGET)
    interests = _string(data, "interests", errors, max_length=MAX_INTERESTS, allow_empty=True)

    duration = data.get("duration")
    if isinstance(duration, bool) or not isinstance(duration, int):
        errors.append({"field": "duration", "message": "duration must be a whole number of days"})
    elif duration < 1:
        errors.append({"field": "duration", "message": "Duration must be at least 1 day"})
    elif duration > MAX_DURATION_DAYS:
        errors.append({"field": "duration", "message": f"Duration cannot exceed {MAX_DURATION_DAYS} days"})

    if errors:
        raise ValidationError("Invalid input", errors)

    return TripRequest(
        destination=destination,
        duration=duration,
        budget=budget,
        interests=interests,
    )


def validate_itinerary_input(data: Any) -> str:
    """Validate a request carrying itinerary text and return the trimmed text."""
    data = _check(data, "Invalid input")
    errors: list = []
    itinerary = _string(data, "itinerary", errors, max_length=MAX_ITINERARY)
    if errors:
        raise ValidationError("Invalid input", errors)
    return itinerary


def validate_country_code(data: Any) -> str:
    """Validate a safety lookup request and return the uppercased code."""
    data = _check(data, "Invalid country code")
    errors: list = []
    code = _string(data, "countryCode", errors)
    if not errors and not COUNTRY_CODE_RE.match(code):
        errors.append({"field": "countryCode", "message": "Country code must be 2 letters"})
    if errors:
        raise ValidationError("Invalid country code", errors)
    return code.upper()


def validate_profile_input(data: Any) -> Dict[str, Any]:
    """Validate a profile update. Returns the normalized profile fields."""
    data = _check(data, "Invalid profile")
    errors: list = []

    full_name = _string(data, "full_name", errors, max_length=MAX_FULL_NAME)
    traveler_type = _string(data, "traveler_type", errors, required=False)
    currency = _string(data, "preferred_currency", errors, required=False, default="USD") or "USD"
    language = _string(data, "preferred_language", errors, required=False, default="en") or "en"

    if traveler_type and traveler_type not in TRAVELER_TYPES:
        errors.append({"field": "traveler_type", "message": "Unknown traveler type"})
    if not CURRENCY_RE.match(currency):
        errors.append({"field": "preferred_currency", "message": "Currency must be a 3-letter code"})
    if not LANGUAGE_RE.match(language):
        errors.append({"field": "preferred_language", "message": "Language must be a 2-letter code"})

    if errors:
        raise ValidationError("Invalid profile", errors)

    return {
        "full_name": full_name,
        "traveler_type": traveler_type or None,
        "preferred_currency": currency.upper(),
        "preferred_language": language.lower(),
    }


def validate_registration_input(data: Any) -> Dict[str, str]:
    """Validate a sign-up body. Returns the trimmed username, email and password."""
    data = _check(data, "Invalid registration")
    errors: list = []

    username = _string(data, "username", errors, max_length=MAX_USERNAME)
    email = _string(data, "email", errors, max_length=MAX_EMAIL)
    password = _string(data, "password", errors)
    invalid = {error["field"] for error in errors}

    if "username" not in invalid and len(username) < MIN_USERNAME:
        errors.append({"field": "username", "message": f"Username must be at least {MIN_USERNAME} characters"})
    if "email" not in invalid and not EMAIL_RE.match(email):
        errors.append({"field": "email", "message": "Invalid email address"})
    if "password" not in invalid and len(password) < MIN_PASSWORD:
        errors.append({"field": "password", "message": f"Password must be at least {MIN_PASSWORD} characters"})

    if errors:
        raise ValidationError("Invalid registration", errors)
    return {"username": username, "email": email, "password": password}
