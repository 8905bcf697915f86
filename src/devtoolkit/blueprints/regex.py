from flask import Blueprint, jsonify

from ..api.regex import explain_regex, run_regex, highlight_matches, FLAG_OPTIONS
from .errors import request_data, bad_request, error_response

regex_bp = Blueprint('regex', __name__)


@regex_bp.route('/api/regex/explain', methods=['POST'])
def api_explain():
    try:
        data = request_data()
        if not data or 'pattern' not in data:
            return bad_request('Missing pattern field')

        pattern = data['pattern']
        if not pattern:
            return bad_request('Pattern cannot be empty')

        return jsonify({
            'success': True,
            'pattern': pattern,
            'explanation': explain_regex(pattern)
        })

    except Exception as e:
        return error_response(e)


@regex_bp.route('/api/regex/test', methods=['POST'])
def api_test():
    """Run a pattern against text and return matches, highlights and timing"""
    try:
        data = request_data()
        if not data or 'pattern' not in data or 'text' not in data:
            return bad_request('Missing pattern or text field')

        text = data['text']
        result = run_regex(data['pattern'], text, data.get('flags', 'g'))
        result['segments'] = highlight_matches(text, result['matches'])
        return jsonify({'success': True, **result})

    except Exception as e:
        return error_response(e)


@regex_bp.route('/api/regex/flags', methods=['GET'])
def api_flags():
    return jsonify({'flags': FLAG_OPTIONS})
