from .api_responses import (
    success_response,
    error_response,
    not_found_response
)
from .decorators import api_handler, sync_to_async
from .logging_config import setup_logging, get_logger
from .validation import validate_string, validate_integer

__all__ = [
    'success_response',
    'error_response',
    'not_found_response',
    'api_handler',
    'sync_to_async',
    'setup_logging',
    'get_logger',
    'validate_string',
    'validate_integer',
]
