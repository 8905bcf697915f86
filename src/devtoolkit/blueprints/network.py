from flask import Blueprint, jsonify, request

from ..api.network import parse_url, http_status, search_http_statuses, parse_user_agent, analyze_ip
from .errors import request_data, no_data, error_response

network_bp = Blueprint('network', __name__)


@network_bp.route('/api/network/url', methods=['POST'])
def api_parse_url():
    try:
        data = request_data()
        if not data:
            return no_data()
        return jsonify({'success': True, 'result': parse_url(data.get('url', ''))})

    except Exception as e:
        return error_response(e)


@network_bp.route('/api/network/http-status', methods=['GET'])
def api_http_statuses():
    """Search the status code reference by code, name or description"""
    try:
        query = request.args.get('q', '')
        return jsonify({'success': True, 'statuses': search_http_statuses(query)})

    except Exception as e:
        return error_response(e)


@network_bp.route('/api/network/http-status/<int:code>', methods=['GET'])
def api_http_status(code):
    entry = http_status(code)
    if entry is None:
        return jsonify({'success': False, 'error': f'Unknown status code: {code}'}), 404
    return jsonify({'success': True, 'status': entry})


@network_bp.route('/api/network/user-agent', methods=['POST'])
def api_user_agent():
    try:
        data = request_data()
        if not data:
            return no_data()
        return jsonify({'success': True, 'result': parse_user_agent(data.get('user_agent', ''))})

    except Exception as e:
        return error_response(e)


@network_bp.route('/api/network/ip', methods=['POST'])
def api_ip():
    try:
        data = request_data()
        if not data:
            return no_data()
        return jsonify({'success': True, 'result': analyze_ip(data.get('ip', ''))})

    except Exception as e:
        return error_response(e)
