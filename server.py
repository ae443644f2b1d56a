"""TripMind Web Server - Serves the app pages and the JSON API."""

import json
import os
import re
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

# Add project root to path
import sys
sys.path.insert(0, str(Path(__file__).parent))

from tripmind.common.templates import (
    generate_app_page,
    generate_home_page,
    generate_login_page,
    generate_profile_page,
    generate_register_page,
)
from tripmind.planner import handler as planner_handler
from tripmind.profile import handler as profile_handler
from tripmind.safety import handler as safety_handler

# Import authentication and database
import auth
import database as db

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
}

TRIP_PATH_RE = re.compile(r"^/api/trips/(\d+)$")


class TripMindHandler(BaseHTTPRequestHandler):
    """HTTP request handler for pages and API endpoints."""

    server_version = "TripMind/1.0"

    def log_message(self, format, *args):
        print(f"[SERVER] {self.address_string()} - {format % args}")

    def get_session_token(self) -> Optional[str]:
        return auth.get_request_token(self.headers)

    def is_authenticated(self) -> bool:
        """Check if the current request is authenticated."""
        if not auth.is_auth_enabled():
            return True
        return auth.sessions.get(self.get_session_token()) is not None

    def get_current_user_id(self) -> int:
        """Get the current user's ID from session. Returns 1 (default) if auth is disabled."""
        if not auth.is_auth_enabled():
            return 1  # Default user
        user_id = auth.session_user_id(self.get_session_token())
        return user_id if user_id else 1

    def require_auth(self) -> bool:
        """Check authentication and redirect to login if needed. Returns True if authenticated."""
        if self.is_authenticated():
            return True

        self.send_response(302)
        self.send_header('Location', f'/login?redirect={urlparse(self.path).path}')
        self.end_headers()
        return False

    def do_OPTIONS(self):
        """Answer CORS preflight requests."""
        self.send_response(204)
        for key, value in CORS_HEADERS.items():
            self.send_header(key, value)
        self.end_headers()

    def do_GET(self):
        path = urlparse(self.path).path

        # Public routes (no auth required)
        if path in ("/", "/index.html"):
            self.send_html(generate_home_page())
            return

        if path in ("/login", "/login.html"):
            self.send_html(generate_login_page())
            return

        if path in ("/register", "/register.html"):
            self.send_html(generate_register_page())
            return

        if path == "/api/health":
            self.send_json_response({"status": "ok", "service": "tripmind"})
            return

        # API routes answer 401, pages redirect to the login page
        if path.startswith("/api/"):
            if not self.is_authenticated():
                self.send_json_error("Authentication required", status=401)
                return

            user_id = self.get_current_user_id()
            trip_match = TRIP_PATH_RE.match(path)
            if path == "/api/profile":
                self.send_handler_result(profile_handler.get_profile_handler(user_id))
            elif path == "/api/trips":
                self.send_handler_result(planner_handler.list_trips_handler(user_id))
            elif trip_match:
                self.send_handler_result(
                    planner_handler.get_trip_handler(user_id, int(trip_match.group(1)))
                )
            else:
                self.send_json_error("Not Found", status=404)
            return

        if not self.require_auth():
            return

        if path in ("/app", "/app.html"):
            user = db.get_user_by_id(self.get_current_user_id())
            self.send_html(generate_app_page(user["username"] if user else "traveler"))
        elif path in ("/profile", "/profile.html"):
            self.send_html(generate_profile_page())
        else:
            self.send_error(404, "Not Found")

    def do_POST(self):
        path = urlparse(self.path).path

        # Auth endpoints (no auth required)
        if path == "/api/login":
            self.handle_login()
            return
        if path == "/api/register":
            self.handle_register()
            return
        if path == "/api/logout":
            self.handle_logout()
            return

        # Check authentication for all other POST endpoints
        if not self.is_authenticated():
            self.send_json_error("Authentication required", status=401)
            return

        routes = {
            "/api/generate-trip": planner_handler.generate_trip_handler,
            "/api/extract-itinerary-locations": planner_handler.extract_locations_handler,
            "/api/render-itinerary": planner_handler.render_itinerary_handler,
            "/api/trips/save": planner_handler.save_trip_handler,
            "/api/trips/delete": planner_handler.delete_trip_handler,
            "/api/travel-safety": safety_handler.travel_safety_handler,
            "/api/profile": profile_handler.update_profile_handler,
        }
        handler = routes.get(path)
        if handler is None:
            self.send_json_error("Not Found", status=404)
            return

        data = self.read_json_body()
        if data is None:
            return
        self.send_handler_result(handler(self.get_current_user_id(), data))

    def handle_login(self):
        """Handle login request, setting the session cookie on success."""
        data = self.read_json_body()
        if data is None:
            return

        payload, status = auth.login_handler(data)
        headers = {}
        if status == 200:
            # Secure cookie only behind HTTPS
            is_secure = self.headers.get('X-Forwarded-Proto') == 'https'
            headers['Set-Cookie'] = auth.session_cookie(payload["token"], secure=is_secure)
        self.send_json_response(payload, status=status, headers=headers)

    def handle_register(self):
        """Handle user registration."""
        data = self.read_json_body()
        if data is None:
            return
        self.send_handler_result(auth.register_handler(data))

    def handle_logout(self):
        """Handle logout request."""
        auth.sessions.destroy(self.get_session_token())
        self.send_json_response(
            {"success": True},
            headers={'Set-Cookie': auth.logout_cookie()},
        )

    def read_json_body(self) -> Optional[dict]:
        """Read the JSON request body. Sends a 400 and returns None if it is invalid."""
        try:
            content_length = int(self.headers.get('Content-Length', 0))
            body = self.rfile.read(content_length) if content_length else b"{}"
            data = json.loads(body.decode('utf-8'))
        except (ValueError, UnicodeDecodeError):
            self.send_json_error("Invalid JSON in request body")
            return None

        if not isinstance(data, dict):
            self.send_json_error("Request body must be a JSON object")
            return None
        return data

    def send_html(self, html: str, status: int = 200):
        body = html.encode()
        self.send_response(status)
        self.send_header('Content-Type', 'text/html; charset=utf-8')
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def send_handler_result(self, result: tuple):
        payload, status = result
        self.send_json_response(payload, status=status)

    def send_json_response(self, data: dict, status: int = 200, headers: Optional[dict] = None):
        """Send JSON response."""
        body = json.dumps(data, default=str).encode()
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(body)))
        for key, value in CORS_HEADERS.items():
            self.send_header(key, value)
        for key, value in (headers or {}).items():
            self.send_header(key, value)
        self.end_headers()
        self.wfile.write(body)

    def send_json_error(self, message: str, status: int = 400):
        """Send JSON error response."""
        self.send_json_response({"success": False, "error": message}, status=status)


def initialize_server():
    """Initialize the database and the default user."""
    db.init_db()
    auth.ensure_default_user()


def create_server(port: int = 8000, host: str = '0.0.0.0') -> ThreadingHTTPServer:
    initialize_server()
    return ThreadingHTTPServer((host, port), TripMindHandler)


def run_server(port: int = 8000):
    """Run the TripMind web server."""
    server = create_server(port)

    if auth.is_auth_enabled():
        auth_info = "Authentication: ENABLED (default user from AUTH_USERNAME/AUTH_PASSWORD)"
    else:
        auth_info = "Authentication: DISABLED (set AUTH_DISABLED=false to enable)"

    print(f"[SERVER] TripMind running at http://localhost:{port}")
    print(f"[SERVER] {auth_info}")
    print("[SERVER] Press Ctrl+C to stop")

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\n[SERVER] Server stopped.")
        server.server_close()


if __name__ == "__main__":
    import argparse
    parser = argparse.ArgumentParser(description="Run the TripMind web server")
    parser.add_argument("-p", "--port", type=int, default=None, help="Port to run on (default: 8000)")
    args = parser.parse_args()

    # PORT env var, then --port arg, then default 8000
    port = args.port or int(os.environ.get("PORT", 8000))
    run_server(port)
