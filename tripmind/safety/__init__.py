"""Safety - Country travel advisories."""

from .advisory import SafetyReport, fetch_safety, get_risk_color, get_risk_level

__all__ = ["SafetyReport", "fetch_safety", "get_risk_level", "get_risk_color"]
