"""HTTP helper utilities for tests."""

from __future__ import annotations

AUTH_PREFIX = "/api/v1/auth"


def json_headers(auth_token: str | None = None) -> dict[str, str]:
    """Return standard JSON headers.

    Parameters
    ----------
    auth_token:
        Optional bearer token to include.

    Returns
    -------
    dict[str, str]
        HTTP headers dictionary.
    """

    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if auth_token:
        headers["Authorization"] = f"Bearer {auth_token}"
    return headers


def auth_url(action: str) -> str:
    """Return the URL of an auth endpoint, e.g. ``auth_url("login")``."""

    return f"{AUTH_PREFIX}/{action.strip('/')}"
