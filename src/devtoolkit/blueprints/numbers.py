from flask import Blueprint, jsonify

from ..api.numbers import convert_bases, convert_byte_size
from .errors import request_data, flag, no_data, error_response

numbers_bp = Blueprint('numbers', __name__)


@numbers_bp.route('/api/numbers/base', methods=['POST'])
def api_number_base():
    try:
        data = request_data()
        if not data:
            return no_data()

        result = convert_bases(str(data.get('value', '')), flag(data, 'grouped', True))
        return jsonify({'success': True, 'result': result})

    except Exception as e:
        return error_response(e)


@numbers_bp.route('/api/numbers/bytes', methods=['POST'])
def api_byte_size():
    try:
        data = request_data()
        if not data:
            return no_data()

        result = convert_byte_size(
            data.get('value', ''),
            data.get('unit', 'B'),
            int(data.get('precision', 4)),
        )
        return jsonify({'success': True, 'result': result})

    except Exception as e:
        return error_response(e)
