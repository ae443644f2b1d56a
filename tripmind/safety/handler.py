"""API handler for the safety center."""

from typing import Any, Dict

from tripmind.common.errors import handles_errors
from tripmind.common.validation import validate_country_code
from .advisory import fetch_safety


@handles_errors("TRAVEL SAFETY")
def travel_safety_handler(user_id: int, data: Dict[str, Any]):
    """Look up the travel advisory for ``data["countryCode"]``."""
    country_code = validate_country_code(data)
    print(f"[TRAVEL SAFETY] Safety data request from user: {user_id}")
    return fetch_safety(country_code).to_dict(), 200
