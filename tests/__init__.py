"""
Test utilities shared by the test modules.
"""

from app.core.auth import create_access_token


def auth_header(email: str) -> dict:
    """Bearer header carrying a freshly signed token for `email`."""
    return {"Authorization": f"Bearer {create_access_token({'sub': email})}"}
