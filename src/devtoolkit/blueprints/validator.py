from flask import Blueprint, jsonify

from ..api.validator import validate_code, format_code, VALIDATION_MODES
from .errors import request_data, no_data, bad_request, error_response

validator_bp = Blueprint('validator', __name__)


@validator_bp.route('/api/validator/check', methods=['POST'])
def api_check():
    """Validate HTML or CSS and list issues with line numbers"""
    try:
        data = request_data()
        if not data:
            return no_data()

        result = validate_code(data.get('code', ''), data.get('mode', 'html'))
        return jsonify({'success': True, **result})

    except Exception as e:
        return error_response(e)


@validator_bp.route('/api/validator/format', methods=['POST'])
def api_format():
    try:
        data = request_data()
        if not data:
            return no_data()

        code = data.get('code', '')
        mode = data.get('mode', 'html')
        if mode not in VALIDATION_MODES:
            return bad_request(f"Unsupported validation mode: {mode}")
        if not isinstance(code, str) or not code.strip():
            return bad_request("No input data provided")

        return jsonify({'success': True, 'result': format_code(code, mode)})

    except Exception as e:
        return error_response(e)
