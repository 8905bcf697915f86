"""
Shared request helpers and error-to-status mapping for tool routes.
"""

import logging

from flask import jsonify, request

from ..bridge.exceptions import BridgeError, BridgeTimeoutError, RateLimitExceeded

logger = logging.getLogger(__name__)


def request_data():
    """JSON body of the request, or None when it is missing or not JSON."""
    return request.get_json(silent=True)


def flag(data, key: str, default: bool = False) -> bool:
    """Boolean option from a JSON body; accepts true/false, 1/0 and their string forms."""
    value = data.get(key, default)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ('true', '1', 'yes', 'on'):
            return True
        if lowered in ('false', '0', 'no', 'off', ''):
            return False
        raise ValueError(f"{key} must be true or false")
    return bool(value)


def text_value(data, key: str, default: str = '') -> str:
    """Stripped string field from a JSON body; None reads as the default."""
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value.strip()


def no_data():
    return jsonify({'success': False, 'error': 'No data provided'}), 400


def bad_request(message: str):
    return jsonify({'success': False, 'error': message}), 400


def error_response(e: Exception):
    """Map a tool exception to a JSON error with a matching status code."""
    if isinstance(e, RateLimitExceeded):
        return jsonify({'success': False, 'error': str(e)}), 429
    if isinstance(e, BridgeTimeoutError):
        return jsonify({'success': False, 'error': str(e)}), 504
    if isinstance(e, ValueError):
        # Also covers BridgeValidationError
        return jsonify({'success': False, 'error': str(e)}), 400
    if isinstance(e, BridgeError):
        return jsonify({'success': False, 'error': str(e)}), 502

    logger.exception("Unhandled error in %s", request.path)
    return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500
