"""Itinerary-specific HTML templates for TripMind."""

from pathlib import Path

# Import shared components from common
from tripmind.common.templates import get_static_css, get_nav_html

# Icon names used by display blocks, mapped to Font Awesome classes
ICON_CLASSES = {
    "calendar": "fa-calendar-day",
    "food": "fa-utensils",
    "photo": "fa-camera",
    "place": "fa-map-marker-alt",
    "money": "fa-dollar-sign",
    "info": "fa-info-circle",
}

# Path to itinerary-specific templates
TEMPLATES_DIR = Path(__file__).parent / "templates"


def get_template(filename: str) -> str:
    """Read an HTML template file from itinerary templates directory."""
    template_path = TEMPLATES_DIR / filename
    if template_path.exists():
        return template_path.read_text()
    return ""


def icon_html(icon) -> str:
    """Font Awesome <i> tag for a block icon name, or '' for no icon."""
    css_class = ICON_CLASSES.get(icon or "")
    if not css_class:
        return ""
    return f'<i class="fas {css_class}"></i>'


def generate_itinerary_page(title: str, itinerary_html: str) -> str:
    """Wrap a rendered itinerary fragment in a full page.

    ``title`` must already be escaped.
    """
    template = get_template("itinerary.html")
    return template.format(
        title=title,
        main_css=get_static_css("main.css"),
        nav_html=get_nav_html("app"),
        itinerary_html=itinerary_html,
    )
