from typing import Any, Dict, Optional

from flask import jsonify

from .errors import APIError


def _build_success_payload(data: Optional[Any], message: str) -> Dict[str, Any]:
    return {
        "status": "ok",
        "message": message,
        "data": data,
    }


def _build_error_payload(error: Any, message: str) -> Dict[str, Any]:
    return {
        "status": "error",
        "message": message,
        "error": error,
    }


def make_ok(data: Optional[Any] = None, message: str = "success", status_code: int = 200):
    """Return a standardized success response."""
    payload = _build_success_payload(data, message)
    response = jsonify(payload)
    return response, status_code


def make_error(error: Any, message: str = "An error occurred", status_code: int = 400):
    """Return a standardized error response."""
    if isinstance(error, APIError):
        error = error.to_dict()

    payload = _build_error_payload(error, message)
    response = jsonify(payload)
    return response, status_code


def upstream_status(error: APIError) -> int:
    """HTTP status to answer with when the proxy call behind a view failed."""
    if error.code == "UNAUTHENTICATED" or error.status_code == 401:
        return 401
    if error.status_code == 404:
        return 404
    return 502
