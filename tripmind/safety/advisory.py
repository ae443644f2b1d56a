"""Fetch country travel advisories from the travel-advisory.info API."""

import os
from dataclasses import dataclass
from typing import Optional

import requests

from tripmind.common.errors import GatewayError, NotFoundError

ADVISORY_API_URL = os.environ.get("ADVISORY_API_URL", "https://www.travel-advisory.info/api")

# (upper score bound, risk level, color), checked in order
RISK_LEVELS = [
    (2.0, "Very Safe", "green"),
    (3.0, "Safe", "blue"),
    (3.5, "Moderate Risk", "yellow"),
    (4.0, "High Risk", "orange"),
]
EXTREME_RISK = ("Extreme Risk", "red")


def get_risk_level(score: float) -> str:
    for bound, level, _color in RISK_LEVELS:
        if score <= bound:
            return level
    return EXTREME_RISK[0]


def get_risk_color(score: float) -> str:
    for bound, _level, color in RISK_LEVELS:
        if score <= bound:
            return color
    return EXTREME_RISK[1]


@dataclass
class SafetyReport:
    """Advisory summary for one country."""

    name: str
    score: float
    message: str
    sources_active: int
    updated: Optional[str] = None

    @property
    def risk_level(self) -> str:
        return get_risk_level(self.score)

    @property
    def color(self) -> str:
        return get_risk_color(self.score)

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "score": self.score,
            "message": self.message,
            "sources_active": self.sources_active,
            "updated": self.updated,
            "riskLevel": self.risk_level,
            "color": self.color,
        }


def fetch_safety(country_code: str, timeout: float = 10) -> SafetyReport:
    """Look up the advisory for a two-letter country code."""
    country_code = country_code.upper()
    print(f"[SAFETY] Fetching safety data for country: {country_code}")

    try:
        response = requests.get(
            ADVISORY_API_URL,
            params={"countrycode": country_code},
            headers={"User-Agent": "TripMind/1.0"},
            timeout=timeout,
        )
    except requests.RequestException as e:
        print(f"[SAFETY] Request failed: {e}")
        raise GatewayError("Advisory service connection failed") from e

    if not response.ok:
        print(f"[SAFETY] API error: Status {response.status_code}")
        raise GatewayError(f"API returned status {response.status_code}")

    try:
        report = _parse_report(country_code, response.json())
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        print(f"[SAFETY] Malformed response: {e}")
        raise GatewayError("Malformed advisory response") from e

    print(f"[SAFETY] Successfully fetched safety data for {report.name}")
    return report


def _parse_report(country_code: str, payload: dict) -> SafetyReport:
    data = payload.get("data") or {}
    if not data:
        raise NotFoundError("Country not found")

    # Keyed by country code; a single-country query returns one entry
    country = data.get(country_code) or next(iter(data.values()))
    advisory = country.get("advisory") or {}

    return SafetyReport(
        name=country.get("name") or country_code,
        score=float(advisory["score"]),
        message=advisory.get("message") or "",
        sources_active=int(advisory.get("sources_active") or 0),
        updated=advisory.get("updated"),
    )
