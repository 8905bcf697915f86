#!/usr/bin/env python3
"""
Unit tests for text comparison and the diff endpoint
"""

import pytest

from devtoolkit.api.diff import (
    tokenize, compare_texts, format_patch, preprocess_texts, generate_line_diff,
    generate_character_diff_html, generate_unified_diff, generate_side_by_side_diff,
)


def change(value, added=False, removed=False):
    return {'value': value, 'added': added, 'removed': removed}


class TestCompareTexts:
    """Change lists in lines, words and chars modes"""

    def test_lines(self):
        result = compare_texts('a\nb\n', 'a\nc\n', 'lines')
        assert result['changes'] == [change('a\n'), change('b\n', removed=True), change('c\n', added=True)]
        assert result['stats'] == {'additions': 2, 'deletions': 2, 'unchanged': 2}
        assert result['identical'] is False

    def test_words(self):
        result = compare_texts('hello world', 'hello there', 'words')
        assert result['changes'] == [
            change('hello '), change('world', removed=True), change('there', added=True)
        ]

    def test_chars(self):
        result = compare_texts('cat', 'cut', 'chars')
        assert result['changes'] == [
            change('c'), change('a', removed=True), change('u', added=True), change('t')
        ]

    def test_ignore_case(self):
        result = compare_texts('Hello', 'hello', ignore_case=True)
        assert result['identical'] is True
        assert result['changes'] == [change('hello')]

    def test_ignore_whitespace_keeps_lines(self):
        assert compare_texts('a  b\nc', 'a b\nc', ignore_whitespace=True)['identical'] is True
        assert compare_texts('a\nb', 'a b', ignore_whitespace=True)['identical'] is False

    def test_both_empty(self):
        result = compare_texts('', '')
        assert result['changes'] == []
        assert result['stats'] == {'additions': 0, 'deletions': 0, 'unchanged': 0}
        assert result['identical'] is True

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unsupported diff mode"):
            tokenize('x', 'sentences')

    def test_patch(self):
        changes = [change('a\n'), change('b\n', removed=True), change('c\n', added=True)]
        assert format_patch(changes) == '  a\n- b\n+ c\n'

    def test_preprocess(self):
        assert preprocess_texts('  A\tB  ', 'x', True, True) == ('a b', 'x')


class TestLineDiff:
    """Structured line diff used by the json format"""

    def test_no_changes(self):
        result = generate_line_diff("Hello world\nThis is a test.", "Hello world\nThis is a test.")
        assert result['stats']['equal'] == 2
        assert all(line['type'] == 'equal' for line in result['lines'])

    def test_insertion(self):
        result = generate_line_diff("Line 1\nLine 3", "Line 1\nLine 2\nLine 3")
        inserted = [line for line in result['lines'] if line['type'] == 'insert']
        assert result['stats']['additions'] == 1
        assert inserted == [{'type': 'insert', 'content': 'Line 2', 'line_num_1': None, 'line_num_2': 2}]

    def test_deletion(self):
        result = generate_line_diff("Line 1\nLine 2\nLine 3", "Line 1\nLine 3")
        assert result['stats']['deletions'] == 1
        assert result['stats']['equal'] == 2

    def test_replacement_is_modify(self):
        result = generate_line_diff("Line 1\nThis is old\nLine 3", "Line 1\nThis is new\nLine 3")
        modified = [line for line in result['lines'] if line['type'] == 'modify'][0]
        assert result['stats']['modifications'] == 1
        assert modified['char_diff_1'] == 'This is <span class="char-delete">old</span>'
        assert modified['char_diff_2'] == 'This is <span class="char-insert">new</span>'

    def test_uneven_replacement(self):
        result = generate_line_diff("x\ny", "z")
        assert result['stats'] == {'additions': 0, 'deletions': 1, 'equal': 0, 'modifications': 1}

    def test_empty_inputs(self):
        assert generate_line_diff("", "")['lines'] == []

    def test_character_diff_escapes_html(self):
        left, right = generate_character_diff_html('<a>', '<b>')
        assert left == '&lt;<span class="char-delete">a</span>&gt;'
        assert right == '&lt;<span class="char-insert">b</span>&gt;'


class TestRenderings:

    def test_unified(self):
        result = generate_unified_diff('a\nb\n', 'a\nc\n')
        assert '--- original' in result
        assert '+++ modified' in result
        assert '-b\n' in result
        assert '+c\n' in result

    def test_side_by_side(self):
        lines = generate_side_by_side_diff('a\nb', 'a\nc', width=5).split('\n')
        assert lines[0] == '   1 a       a'
        assert lines[1] == '   2 b     | c'


class TestDiffEndpoint:

    def test_default_changes_format(self, client):
        response = client.post('/api/text-diff/compare', json={'text1': 'a b', 'text2': 'a c', 'mode': 'words'})
        data = response.get_json()
        assert response.status_code == 200
        assert data['format'] == 'changes'
        assert data['patch'] == '  a - b+ c'
        assert data['identical'] is False

    def test_json_format(self, client):
        response = client.post('/api/text-diff/compare', json={'text1': 'x', 'text2': 'y', 'format': 'json'})
        data = response.get_json()
        assert data['diff'][0]['type'] == 'modify'
        assert data['stats']['modifications'] == 1

    def test_stats_only(self, client):
        response = client.post('/api/text-diff/compare', json={'text1': 'x', 'text2': 'x', 'format': 'stats-only'})
        assert response.get_json() == {
            'success': True,
            'format': 'stats-only',
            'stats': {'additions': 0, 'deletions': 0, 'equal': 1, 'modifications': 0},
        }

    def test_missing_text(self, client):
        response = client.post('/api/text-diff/compare', json={'text1': 'x'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Missing text1 or text2'

    def test_bad_format(self, client):
        response = client.post('/api/text-diff/compare', json={'text1': 'x', 'text2': 'y', 'format': 'pdf'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Unsupported format: pdf'

    def test_bad_mode(self, client):
        response = client.post('/api/text-diff/compare', json={'text1': 'x', 'text2': 'y', 'mode': 'pages'})
        assert response.status_code == 400
