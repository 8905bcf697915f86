from flask import Blueprint, jsonify

from ..api import text
from .errors import request_data, flag, no_data, bad_request, error_response

text_bp = Blueprint('text', __name__)


@text_bp.route('/api/text/json', methods=['POST'])
def api_json():
    """Format, minify or validate JSON"""
    try:
        data = request_data()
        if not data:
            return no_data()

        input_text = data.get('text', '')
        action = data.get('action', 'format')

        if action == 'validate':
            return jsonify({'success': True, **text.validate_json(input_text)})
        if not input_text.strip():
            return bad_request('No input data provided')
        if action == 'format':
            result = text.format_json(input_text, int(data.get('indent', 2)), flag(data, 'sort_keys', False))
        elif action == 'minify':
            result = text.minify_json(input_text)
        else:
            return bad_request(f'Unsupported action: {action}')
        return jsonify({'success': True, 'result': result})

    except Exception as e:
        return error_response(e)


@text_bp.route('/api/text/base64', methods=['POST'])
def api_base64():
    """Encode or decode Base64"""
    try:
        data = request_data()
        if not data:
            return no_data()

        input_text = data.get('text', '')
        url_safe = flag(data, 'url_safe', False)
        if data.get('action', 'encode') == 'decode':
            result = text.base64_decode(input_text, url_safe)
        else:
            result = text.base64_encode(input_text, url_safe)
        return jsonify({'success': True, 'result': result})

    except Exception as e:
        return error_response(e)


@text_bp.route('/api/text/url', methods=['POST'])
def api_url():
    """Percent-encode or decode text"""
    try:
        data = request_data()
        if not data:
            return no_data()

        input_text = data.get('text', '')
        if data.get('action', 'encode') == 'decode':
            result = text.url_decode(input_text)
        else:
            result = text.url_encode(input_text, flag(data, 'component', True))
        return jsonify({'success': True, 'result': result})

    except Exception as e:
        return error_response(e)


@text_bp.route('/api/text/html', methods=['POST'])
def api_html():
    try:
        data = request_data()
        if not data:
            return no_data()

        input_text = data.get('text', '')
        if data.get('action', 'encode') == 'decode':
            result = text.html_decode(input_text)
        else:
            result = text.html_encode(input_text)
        return jsonify({'success': True, 'result': result})

    except Exception as e:
        return error_response(e)


@text_bp.route('/api/text/escape', methods=['POST'])
def api_escape():
    """Escape or unescape text for JSON, HTML, URL, regex, SQL, shell or CSV"""
    try:
        data = request_data()
        if not data:
            return no_data()

        input_text = data.get('text', '')
        mode = data.get('mode', 'json')
        if data.get('action', 'escape') == 'unescape':
            result = text.unescape_string(input_text, mode)
        else:
            result = text.escape_string(input_text, mode)
        return jsonify({'success': True, 'result': result, 'mode': mode})

    except Exception as e:
        return error_response(e)


@text_bp.route('/api/text/case', methods=['POST'])
def api_case():
    try:
        data = request_data()
        if not data:
            return no_data()
        return jsonify({'success': True, 'cases': text.convert_case(data.get('text', ''))})

    except Exception as e:
        return error_response(e)


@text_bp.route('/api/text/slug', methods=['POST'])
def api_slug():
    try:
        data = request_data()
        if not data:
            return no_data()

        slugs = text.generate_slugs(data.get('text', ''), int(data.get('max_length', 0)))
        return jsonify({'success': True, 'slugs': slugs})

    except Exception as e:
        return error_response(e)


@text_bp.route('/api/text/count', methods=['POST'])
def api_count():
    try:
        data = request_data()
        if not data:
            return no_data()
        return jsonify({'success': True, 'stats': text.count_words(data.get('text', ''))})

    except Exception as e:
        return error_response(e)


@text_bp.route('/api/text/lorem', methods=['POST'])
def api_lorem():
    """Generate lorem ipsum words, sentences or paragraphs"""
    try:
        data = request_data() or {}
        result = text.generate_lorem(
            data.get('type', 'paragraphs'),
            int(data.get('count', 3)),
            flag(data, 'start_with_lorem', True),
        )
        return jsonify({'success': True, 'result': result})

    except Exception as e:
        return error_response(e)
