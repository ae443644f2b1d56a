"""SQLite database module for users, profiles and saved trips."""

import os
import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import bcrypt

DEFAULT_DB_PATH = os.path.join(os.path.dirname(__file__), "tripmind.db")

PROFILE_FIELDS = ("full_name", "traveler_type", "preferred_currency", "preferred_language")


def get_db_path() -> str:
    return os.environ.get("DATABASE_PATH", DEFAULT_DB_PATH)


def get_connection():
    """Get a database connection."""
    conn = sqlite3.connect(get_db_path())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_db():
    """Context manager for database connections."""
    conn = get_connection()
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db():
    """Initialize database tables."""
    with get_db() as conn:
        cursor = conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS users (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                username TEXT UNIQUE NOT NULL,
                email TEXT UNIQUE NOT NULL,
                password_hash TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS profiles (
                user_id INTEGER PRIMARY KEY REFERENCES users(id) ON DELETE CASCADE,
                full_name TEXT,
                email TEXT,
                traveler_type TEXT,
                preferred_currency TEXT DEFAULT 'USD',
                preferred_language TEXT DEFAULT 'en',
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS trips (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id INTEGER REFERENCES users(id) ON DELETE CASCADE,
                destination TEXT NOT NULL,
                duration INTEGER NOT NULL,
                budget TEXT,
                interests TEXT,
                itinerary TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_trips_user_id ON trips(user_id)
        """)

    print(f"[DB] Initialized SQLite database at {get_db_path()}")


# ============ User Functions ============

def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash."""
    return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))


def create_user(username: str, email: str, password: str) -> Optional[int]:
    """Create a new user and an empty profile. Returns user ID or None if failed."""
    password_hash = hash_password(password)

    with get_db() as conn:
        cursor = conn.cursor()
        try:
            cursor.execute(
                "INSERT INTO users (username, email, password_hash) VALUES (?, ?, ?)",
                (username, email, password_hash)
            )
            user_id = cursor.lastrowid
            cursor.execute(
                "INSERT INTO profiles (user_id, email) VALUES (?, ?)",
                (user_id, email)
            )
            return user_id
        except sqlite3.IntegrityError as e:
            print(f"[DB] Error creating user: {e}")
            return None


def get_user_by_username(username: str) -> Optional[Dict[str, Any]]:
    """Get user by username."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT id, username, email, password_hash FROM users WHERE username = ?", (username,))
        row = cursor.fetchone()
        return dict(row) if row else None


def get_user_by_id(user_id: int) -> Optional[Dict[str, Any]]:
    """Get user by ID."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT id, username, email FROM users WHERE id = ?", (user_id,))
        row = cursor.fetchone()
        return dict(row) if row else None


def authenticate_user(username: str, password: str) -> Optional[Dict[str, Any]]:
    """Authenticate user and return user dict if successful."""
    user = get_user_by_username(username)
    if user and verify_password(password, user["password_hash"]):
        del user["password_hash"]  # Don't return the hash
        return user
    return None


def username_exists(username: str) -> bool:
    """Check if username already exists."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT 1 FROM users WHERE username = ?", (username,))
        return cursor.fetchone() is not None


def email_exists(email: str) -> bool:
    """Check if email already exists."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT 1 FROM users WHERE email = ?", (email,))
        return cursor.fetchone() is not None


# ============ Profile Functions ============

def get_profile(user_id: int) -> Optional[Dict[str, Any]]:
    """Get a user's profile, falling back to the account email."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("""
            SELECT p.full_name, COALESCE(p.email, u.email) AS email, p.traveler_type,
                   p.preferred_currency, p.preferred_language, p.updated_at
            FROM users u LEFT JOIN profiles p ON p.user_id = u.id
            WHERE u.id = ?
        """, (user_id,))
        row = cursor.fetchone()
        if not row:
            return None

        profile = dict(row)
        profile["preferred_currency"] = profile["preferred_currency"] or "USD"
        profile["preferred_language"] = profile["preferred_language"] or "en"
        return profile


def update_profile(user_id: int, updates: Dict[str, Any]) -> bool:
    """Create or update a user's profile. Unknown keys are ignored."""
    fields = {k: v for k, v in updates.items() if k in PROFILE_FIELDS}
    if not fields:
        return False

    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("SELECT 1 FROM users WHERE id = ?", (user_id,))
        if cursor.fetchone() is None:
            return False

        cursor.execute("INSERT OR IGNORE INTO profiles (user_id) VALUES (?)", (user_id,))
        assignments = ", ".join(f"{key} = ?" for key in fields)
        cursor.execute(
            f"UPDATE profiles SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE user_id = ?",
            (*fields.values(), user_id)
        )
        return cursor.rowcount > 0


# ============ Trip Functions ============

def add_trip(user_id: int, trip_data: Dict[str, Any]) -> Optional[int]:
    """Save a generated itinerary. Returns trip ID or None if failed."""
    with get_db() as conn:
        cursor = conn.cursor()
        try:
            cursor.execute("""
                INSERT INTO trips (user_id, destination, duration, budget, interests, itinerary)
                VALUES (?, ?, ?, ?, ?, ?)
            """, (
                user_id,
                trip_data["destination"],
                trip_data["duration"],
                trip_data.get("budget"),
                trip_data.get("interests"),
                trip_data["itinerary"],
            ))
            return cursor.lastrowid
        except sqlite3.IntegrityError as e:
            print(f"[DB] Error adding trip: {e}")
            return None


def get_user_trips(user_id: int) -> List[Dict[str, Any]]:
    """Get all trips for a user, newest first (without the itinerary text)."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("""
            SELECT id, destination, duration, budget, interests, created_at
            FROM trips WHERE user_id = ? ORDER BY created_at DESC, id DESC
        """, (user_id,))
        return [dict(row) for row in cursor.fetchall()]


def get_trip(user_id: int, trip_id: int) -> Optional[Dict[str, Any]]:
    """Get one trip owned by a user, including its itinerary text."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("""
            SELECT id, destination, duration, budget, interests, itinerary, created_at
            FROM trips WHERE user_id = ? AND id = ?
        """, (user_id, trip_id))
        row = cursor.fetchone()
        return dict(row) if row else None


def delete_trip(user_id: int, trip_id: int) -> bool:
    """Delete a trip owned by a user."""
    with get_db() as conn:
        cursor = conn.cursor()
        cursor.execute("DELETE FROM trips WHERE user_id = ? AND id = ?", (user_id, trip_id))
        return cursor.rowcount > 0
