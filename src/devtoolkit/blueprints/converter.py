from flask import Blueprint, jsonify

from ..api.converter import convert_format, validate_format, converter, csv_to_json, json_to_csv
from .errors import request_data, no_data, bad_request, error_response

converter_bp = Blueprint('converter', __name__)


@converter_bp.route('/api/convert', methods=['POST'])
def api_convert():
    """Convert data between JSON and YAML"""
    try:
        data = request_data()
        if not data:
            return no_data()

        input_data = data.get('data', '')
        input_format = data.get('input_format', 'auto')
        output_format = data.get('output_format', '')

        if not input_data.strip():
            return bad_request('No input data provided')
        if not output_format:
            return bad_request('Output format is required')

        result = convert_format(input_data, input_format, output_format)
        if result['success']:
            return jsonify(result)
        return jsonify(result), 400

    except Exception as e:
        return error_response(e)


@converter_bp.route('/api/validate', methods=['POST'])
def api_validate():
    try:
        data = request_data()
        if not data:
            return jsonify({'valid': False, 'error': 'No data provided'}), 400

        input_data = data.get('data', '')
        format_type = data.get('format', '')
        if not input_data.strip():
            return jsonify({'valid': False, 'error': 'No input data provided'}), 400
        if not format_type:
            return jsonify({'valid': False, 'error': 'Format type is required'}), 400

        return jsonify(validate_format(input_data, format_type))

    except Exception as e:
        return error_response(e)


@converter_bp.route('/api/detect-format', methods=['POST'])
def api_detect_format():
    try:
        data = request_data()
        if not data:
            return jsonify({'format': 'unknown', 'error': 'No data provided'}), 400

        detected_format = converter.detect_format(data.get('data', ''))
        return jsonify({
            'format': detected_format,
            'success': detected_format != 'unknown'
        })

    except Exception as e:
        return error_response(e)


@converter_bp.route('/api/convert/csv', methods=['POST'])
def api_convert_csv():
    """CSV to JSON (direction 'csv-to-json') or JSON array of objects to CSV"""
    try:
        data = request_data()
        if not data:
            return no_data()

        input_data = data.get('data', '')
        if not input_data.strip():
            return bad_request('No input data provided')

        direction = data.get('direction', 'csv-to-json')
        if direction == 'csv-to-json':
            result = csv_to_json(input_data, int(data.get('indent', 2)))
        elif direction == 'json-to-csv':
            result = json_to_csv(input_data)
        else:
            return bad_request(f'Unsupported direction: {direction}')
        return jsonify({'success': True, 'result': result, 'direction': direction})

    except Exception as e:
        return error_response(e)
