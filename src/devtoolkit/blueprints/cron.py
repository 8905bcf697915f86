from flask import Blueprint, jsonify

from ..api.cron import parse_cron, CRON_PRESETS
from .errors import request_data, no_data, error_response

cron_bp = Blueprint('cron', __name__)


@cron_bp.route('/api/cron/parse', methods=['POST'])
def api_parse_cron():
    """Describe a cron expression and list its next run times"""
    try:
        data = request_data()
        if not data:
            return no_data()

        count = max(1, min(20, int(data.get('count', 5))))
        result = parse_cron(data.get('expression', ''), count)
        return jsonify({'success': True, **result})

    except Exception as e:
        return error_response(e)


@cron_bp.route('/api/cron/presets', methods=['GET'])
def api_cron_presets():
    return jsonify({'presets': CRON_PRESETS})
