from flask import Blueprint, jsonify

from ..api.timestamps import convert_timestamp, current_timestamp
from .errors import request_data, no_data, error_response

timestamps_bp = Blueprint('timestamps', __name__)


@timestamps_bp.route('/api/timestamp/convert', methods=['POST'])
def api_convert_timestamp():
    """Convert a Unix timestamp or date string to every representation"""
    try:
        data = request_data()
        if not data:
            return no_data()
        return jsonify({'success': True, 'result': convert_timestamp(str(data.get('input', '')))})

    except Exception as e:
        return error_response(e)


@timestamps_bp.route('/api/timestamp/now', methods=['GET'])
def api_now():
    return jsonify({'success': True, 'result': current_timestamp()})
