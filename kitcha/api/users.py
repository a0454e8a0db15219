from typing import Optional

from fastapi import Header

from kitcha.utilities.config import DEFAULT_USER_ID


def current_user(x_user_id: Optional[str] = Header(default=None)) -> str:
    """User id from the X-User-Id header; authentication happens upstream."""
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    return DEFAULT_USER_ID
