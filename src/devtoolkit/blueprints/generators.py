from flask import Blueprint, jsonify

from ..api.generators import generate_uuids, generate_passwords, DEFAULT_PASSWORD_OPTIONS
from .errors import request_data, error_response

generators_bp = Blueprint('generators', __name__)


@generators_bp.route('/api/generate/uuid', methods=['POST'])
def api_uuid():
    try:
        data = request_data() or {}
        uuids = generate_uuids(int(data.get('count', 1)), data.get('format', 'default'))
        return jsonify({'success': True, 'uuids': uuids})

    except Exception as e:
        return error_response(e)


@generators_bp.route('/api/generate/password', methods=['POST'])
def api_password():
    """Generate passwords from the requested character sets"""
    try:
        data = request_data() or {}
        options = {key: data[key] for key in DEFAULT_PASSWORD_OPTIONS if key in data}
        result = generate_passwords(int(data.get('count', 5)), options)
        return jsonify({'success': True, **result})

    except Exception as e:
        return error_response(e)
