"""API handlers for the profile editor."""

from typing import Any, Dict

import database as db
from tripmind.common.errors import NotFoundError, handles_errors
from tripmind.common.validation import validate_profile_input


@handles_errors("PROFILE")
def get_profile_handler(user_id: int):
    profile = db.get_profile(user_id)
    if profile is None:
        raise NotFoundError("Profile not found")
    return {"profile": profile}, 200


@handles_errors("PROFILE")
def update_profile_handler(user_id: int, data: Dict[str, Any]):
    """Validate and save profile settings, returning the stored profile."""
    updates = validate_profile_input(data)
    if not db.update_profile(user_id, updates):
        raise NotFoundError("Profile not found")
    return {"success": True, "profile": db.get_profile(user_id)}, 200
