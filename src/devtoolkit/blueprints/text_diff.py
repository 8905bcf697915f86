from flask import Blueprint, jsonify

from ..api import diff
from .errors import request_data, flag, bad_request, error_response

text_diff_bp = Blueprint('text_diff', __name__)


@text_diff_bp.route('/api/text-diff/compare', methods=['POST'])
def compare_texts():
    """Compare two texts

    Supports multiple output formats:
    - changes: lines/words/chars change list with character counts (default)
    - json: Structured line diff with character-level highlights
    - unified: Standard unified diff format
    - context: Context diff format
    - side-by-side: Side-by-side text format
    - stats-only: Just statistics

    Options:
    - mode: lines, words or chars (changes format)
    - ignore_whitespace: Ignore whitespace differences
    - ignore_case: Case insensitive comparison
    - context_lines: Number of context lines (default: 3)
    """
    try:
        data = request_data()
        if data is None:
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        if 'text1' not in data or 'text2' not in data:
            return bad_request('Missing text1 or text2')

        text1 = data['text1']
        text2 = data['text2']

        output_format = data.get('format', 'changes')
        mode = data.get('mode', 'lines')
        ignore_whitespace = flag(data, 'ignore_whitespace', False)
        ignore_case = flag(data, 'ignore_case', False)
        context_lines = int(data.get('context_lines', 3))

        if output_format not in diff.OUTPUT_FORMATS:
            return bad_request(f"Unsupported format: {output_format}")

        if output_format == 'changes':
            result = diff.compare_texts(text1, text2, mode, ignore_whitespace, ignore_case)
            return jsonify({
                'success': True,
                'format': 'changes',
                'mode': mode,
                'changes': result['changes'],
                'patch': diff.format_patch(result['changes']),
                'stats': result['stats'],
                'identical': result['identical'],
            })

        processed_text1, processed_text2 = diff.preprocess_texts(text1, text2, ignore_whitespace, ignore_case)
        line_diff = diff.generate_line_diff(processed_text1, processed_text2)

        if output_format == 'unified':
            rendered = diff.generate_unified_diff(processed_text1, processed_text2, context_lines)
        elif output_format == 'context':
            rendered = diff.generate_context_diff(processed_text1, processed_text2, context_lines)
        elif output_format == 'side-by-side':
            rendered = diff.generate_side_by_side_diff(processed_text1, processed_text2)
        elif output_format == 'stats-only':
            return jsonify({'success': True, 'format': 'stats-only', 'stats': line_diff['stats']})
        else:
            rendered = line_diff['lines']

        return jsonify({
            'success': True,
            'format': output_format,
            'diff': rendered,
            'stats': line_diff['stats']
        })

    except Exception as e:
        return error_response(e)
