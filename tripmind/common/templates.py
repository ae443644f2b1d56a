"""Common HTML templates and components shared across all TripMind pages."""

import html
from pathlib import Path

# Path to static files and templates
STATIC_DIR = Path(__file__).parent / "static"
TEMPLATES_DIR = Path(__file__).parent / "templates"

TRAVELER_TYPES = [
    ("nomad", "Digital Nomad", "Work remotely while traveling"),
    ("solo", "Solo Traveler", "Independent adventures with safety first"),
    ("flyer", "Frequent Flyer", "Efficient travel for busy professionals"),
    ("backpacker", "Backpacker", "Budget-friendly adventures"),
    ("influencer", "Influencer", "Content creators on the move"),
]


def get_static_css(filename: str) -> str:
    """Read a CSS file from the common static directory."""
    css_path = STATIC_DIR / "css" / filename
    if css_path.exists():
        return css_path.read_text()
    return ""


def get_static_js(filename: str) -> str:
    """Read a JS file from the common static directory."""
    js_path = STATIC_DIR / "js" / filename
    if js_path.exists():
        return js_path.read_text()
    return ""


def get_template(filename: str) -> str:
    """Read an HTML template file."""
    template_path = TEMPLATES_DIR / filename
    if template_path.exists():
        return template_path.read_text()
    return ""


def get_nav_html(active_page: str = "") -> str:
    """Get navigation HTML with the specified page marked as active."""
    return NAV_HTML.format(
        home_active="active" if active_page == "home" else "",
        app_active="active" if active_page == "app" else "",
        profile_active="active" if active_page == "profile" else "",
    )


NAV_HTML = """
<nav class="tripmind-nav">
    <a href="/" class="brand">
        <i class="fas fa-globe brand-icon"></i>
        <div class="brand-name">TripMind</div>
    </a>
    <div class="nav-links">
        <a href="/" class="nav-link {home_active}"><i class="fas fa-home"></i> Home</a>
        <a href="/app" class="nav-link {app_active}"><i class="fas fa-compass"></i> Dashboard</a>
        <a href="/profile" class="nav-link {profile_active}"><i class="fas fa-user"></i> Profile</a>
        <a href="#" class="nav-link logout-link" onclick="logout(); return false;"><i class="fas fa-sign-out-alt"></i> Logout</a>
    </div>
</nav>
<script>
function logout() {{
    fetch('/api/logout', {{ method: 'POST' }})
        .then(function() {{ window.location.href = '/login'; }})
        .catch(function() {{ window.location.href = '/login'; }});
}}
</script>
"""


def _traveler_options(selected: str = "") -> str:
    options = ['<option value="">Choose a traveler type</option>']
    for value, label, desc in TRAVELER_TYPES:
        is_selected = " selected" if value == selected else ""
        options.append(f'<option value="{value}" title="{desc}"{is_selected}>{label}</option>')
    return "\n".join(options)


def generate_home_page() -> str:
    """Generate the landing page HTML."""
    template = get_template("home.html")
    return template.format(
        main_css=get_static_css("main.css"),
        nav_html=get_nav_html("home"),
    )


def generate_login_page() -> str:
    """Generate the Login page HTML."""
    template = get_template("login.html")
    return template.format(
        main_css=get_static_css("main.css"),
        auth_js=get_static_js("auth.js"),
    )


def generate_register_page() -> str:
    """Generate the Register page HTML."""
    template = get_template("register.html")
    return template.format(
        main_css=get_static_css("main.css"),
        auth_js=get_static_js("auth.js"),
    )


def generate_app_page(username: str = "") -> str:
    """Generate the dashboard page with planner, map, safety and trips tabs."""
    template = get_template("app.html")
    return template.format(
        main_css=get_static_css("main.css"),
        nav_html=get_nav_html("app"),
        username=html.escape(username),
        app_js=get_static_js("app.js"),
    )


def generate_profile_page() -> str:
    """Generate the profile editor page."""
    template = get_template("profile.html")
    return template.format(
        main_css=get_static_css("main.css"),
        nav_html=get_nav_html("profile"),
        traveler_options=_traveler_options(),
        profile_js=get_static_js("profile.js"),
    )
