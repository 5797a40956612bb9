"""
Standardized API response utilities.
All API endpoints should use these functions for consistent response format.
"""

from quart import jsonify, Response
from typing import Any, Dict, Tuple


def success_response(data: Dict[str, Any] = None, message: str = None) -> Response:
    """
    Create a standardized success response.

    Args:
        data: Additional data to include in response
        message: Optional success message

    Returns:
        Quart jsonify response with 200 status

    Example:
        return success_response({"rating": rating})
        # Returns: {"success": True, "rating": {...}}
    """
    response = {"success": True}
    if message:
        response["message"] = message
    if data:
        response.update(data)
    return jsonify(response)


def error_response(error: str, status_code: int = 400, data: Dict[str, Any] = None) -> Tuple[Response, int]:
    """
    Create a standardized error response.

    Args:
        error: Error message
        status_code: HTTP status code (default 400)
        data: Additional data to include

    Returns:
        Quart jsonify response with specified status code
    """
    response = {"success": False, "error": str(error)}
    if data:
        response.update(data)
    return jsonify(response), status_code


def not_found_response(message: str = "Resource not found") -> Tuple[Response, int]:
    """Create a 404 response."""
    return error_response(message, 404)
