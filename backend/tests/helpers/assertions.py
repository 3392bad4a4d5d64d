"""Assertion helper utilities for tests."""

from __future__ import annotations


def assert_json_keys(data: dict, required: set[str]) -> None:
    """Ensure that all required keys are present in ``data``.

    Raises
    ------
    AssertionError
        If any required key is missing.
    """

    missing = required - data.keys()
    assert not missing, f"Missing keys: {', '.join(sorted(missing))}"


def assert_problem(response, status: int, code: str) -> dict:
    """Assert ``response`` is an RFC 7807 problem and return its body.

    Parameters
    ----------
    response:
        Flask test response.
    status:
        Expected HTTP status.
    code:
        Expected machine-readable ``code``.
    """

    assert response.status_code == status
    assert response.mimetype == "application/problem+json"
    body = response.get_json()
    assert_json_keys(body, {"title", "status", "detail", "code", "request_id"})
    assert body["status"] == status
    assert body["code"] == code
    return body
