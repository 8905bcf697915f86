from flask import Blueprint, jsonify

from ..api.lists import process_list
from .errors import request_data, flag, no_data, error_response

lists_bp = Blueprint('lists', __name__)


@lists_bp.route('/api/lists/process', methods=['POST'])
def api_process_list():
    """Sort and optionally dedupe newline-separated items"""
    try:
        data = request_data()
        if not data:
            return no_data()

        result = process_list(
            data.get('text', ''),
            sort_type=data.get('sort_type', 'alphabetical'),
            direction=data.get('direction', 'asc'),
            case_sensitive=flag(data, 'case_sensitive', False),
            dedupe=flag(data, 'remove_duplicates', False),
        )
        return jsonify({'success': True, **result})

    except Exception as e:
        return error_response(e)
