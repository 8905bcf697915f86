from flask import Blueprint, jsonify

from ..api.security import generate_hashes, generate_hmac, decode_jwt, verify_jwt
from .errors import request_data, no_data, error_response

security_bp = Blueprint('security', __name__)


@security_bp.route('/api/security/hash', methods=['POST'])
def api_hash():
    try:
        data = request_data()
        if not data:
            return no_data()
        return jsonify({'success': True, 'hashes': generate_hashes(data.get('text', ''))})

    except Exception as e:
        return error_response(e)


@security_bp.route('/api/security/hmac', methods=['POST'])
def api_hmac():
    try:
        data = request_data()
        if not data:
            return no_data()

        algorithm = data.get('algorithm', 'SHA-256')
        signature = generate_hmac(data.get('message', ''), data.get('key', ''), algorithm)
        return jsonify({'success': True, 'hmac': signature, 'algorithm': algorithm})

    except Exception as e:
        return error_response(e)


@security_bp.route('/api/security/jwt/decode', methods=['POST'])
def api_jwt_decode():
    """Decode a JWT without checking its signature"""
    try:
        data = request_data()
        if not data:
            return no_data()
        return jsonify({'success': True, **decode_jwt(data.get('token', ''))})

    except Exception as e:
        return error_response(e)


@security_bp.route('/api/security/jwt/verify', methods=['POST'])
def api_jwt_verify():
    try:
        data = request_data()
        if not data:
            return no_data()

        result = verify_jwt(data.get('token', ''), data.get('secret', ''), data.get('algorithms'))
        return jsonify({'success': True, **result})

    except Exception as e:
        return error_response(e)
