"""
Decorators for API endpoints and service functions.

This module provides decorators for consistent error handling
and async/sync function wrapping.
"""

from functools import wraps
from quart import jsonify
from typing import Callable, Any
import asyncio

from utils.logging_config import get_logger

logger = get_logger('API')


def api_handler(log_errors: bool = True):
    """
    Decorator for API endpoints that handles:
    - Exception catching with proper logging
    - Consistent response format

    Error mapping:
        ValueError  -> 400 (bad title id, malformed histogram)
        LookupError -> 404 (title without votes)
        FetchError  -> 502 (ratings page unavailable)
        anything else -> 500

    Args:
        log_errors: If True, logs tracebacks of unexpected errors

    Usage:
        @api_blueprint.route('/endpoint')
        @api_handler()
        async def my_endpoint():
            # Just the logic, no try/except needed
            return {"data": "value"}  # Auto-wrapped with success=True
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> Any:
            from services.rating.errors import FetchError

            try:
                result = await func(*args, **kwargs)

                # Auto-wrap dict responses
                if isinstance(result, dict):
                    if 'success' not in result:
                        result = {"success": True, **result}
                    return jsonify(result)

                return result

            except ValueError as e:
                if log_errors:
                    logger.warning(f"{func.__name__}: {e}")
                return jsonify({"success": False, "error": str(e)}), 400
            except LookupError as e:
                return jsonify({"success": False, "error": str(e)}), 404
            except FetchError as e:
                if log_errors:
                    logger.error(f"{func.__name__}: {e}")
                return jsonify({"success": False, "error": str(e)}), 502
            except Exception as e:
                if log_errors:
                    logger.exception(f"{func.__name__} failed")
                return jsonify({"success": False, "error": str(e)}), 500

        return wrapper
    return decorator


def sync_to_async(func: Callable) -> Callable:
    """
    Decorator to run synchronous functions in a thread pool.
    Also adapts synchronous producers for TTLCache.get_or_compute.

    Usage:
        @sync_to_async
        def my_sync_function():
            # sync code
            return result
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        return await asyncio.to_thread(func, *args, **kwargs)
    return wrapper
