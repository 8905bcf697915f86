"""
Test cases for the HTML/CSS validator.
"""

import pytest

from devtoolkit.api.validator import validate_html, validate_css, validate_code, format_code

CLEAN_PAGE = """<!DOCTYPE html>
<html lang="en">
<body>
  <a href="/home">Home</a>
  <img src="logo.png" alt="Logo">
</body>
</html>"""


def messages(issues):
    return [issue['message'] for issue in issues]


class TestHtmlChecks:

    def test_clean_page(self):
        assert validate_html(CLEAN_PAGE) == []

    def test_deprecated_tags_and_attributes(self):
        issues = validate_html('<!DOCTYPE html>\n<center><font color="red">x</font></center>')
        assert messages(issues) == [
            'Deprecated tag: <center>',
            'Deprecated tag: <font>',
            'Deprecated tag: <font>',
            'Deprecated tag: <center>',
            'Deprecated attribute: color',
        ]
        assert all(issue['line'] == 2 for issue in issues)
        assert issues[0]['column'] == 1

    def test_similar_names_are_not_deprecated(self):
        html = '<!DOCTYPE html>\n<footer data-width="3"><track><abbr title="x">a</abbr></footer>'
        assert validate_html(html) == []

    def test_missing_alt_and_href(self):
        issues = validate_html('<!DOCTYPE html>\n<p>\n<img src="x.png">\n<a>anchor</a>\n</p>')
        assert [(i['line'], i['message']) for i in issues] == [
            (3, 'Missing alt attribute on image'),
            (4, 'Anchor tag missing href or name attribute'),
        ]

    def test_named_anchor_is_fine(self):
        assert validate_html('<!DOCTYPE html>\n<a name="top"></a>') == []

    def test_missing_doctype_and_lang(self):
        issues = validate_html('<p>x</p>\n<html>\n</html>')
        assert messages(issues) == ['Missing DOCTYPE declaration', 'Missing lang attribute on <html> tag']
        assert issues[1]['line'] == 2


class TestCssChecks:

    def test_balanced(self):
        assert validate_css('a:hover {\n  color: red;\n  background: url("x(1).png");\n}') == []

    def test_unexpected_closing_brace(self):
        issues = validate_css('a { color: red; }\n}')
        assert issues == [{'line': 2, 'column': 1, 'message': 'Unexpected closing brace }', 'type': 'error'}]

    def test_unclosed_blocks(self):
        issues = validate_css('a {\n  width: calc(100% - 2px;\n')
        assert [i['message'] for i in issues] == [
            "Unclosed braces: 1 '{' not closed",
            "Unclosed parentheses: 1 '(' not closed",
        ]
        assert issues[0]['line'] == 3

    def test_comments_are_ignored(self):
        assert validate_css('/* a { */\nb { color: red; }\n/* } ) */') == []

    def test_deprecated_property(self):
        issues = validate_css('div {\n  zoom: 1;\n  Filter: none;\n}')
        assert messages(issues) == ['Deprecated property: zoom', 'Deprecated property: Filter']
        assert issues[0]['type'] == 'warning'


class TestValidateCode:

    def test_summary(self):
        result = validate_code('a { color: red;', 'css')
        assert result['valid'] is False
        assert result['error_count'] == 1
        assert result['warning_count'] == 0

    def test_warnings_do_not_invalidate(self):
        result = validate_code('<center>x</center>', 'html')
        assert result['valid'] is True
        assert result['warning_count'] == 3

    @pytest.mark.parametrize('code, mode, message', [
        ('  ', 'html', 'No input data provided'),
        ('a {}', 'scss', 'Unsupported validation mode'),
    ])
    def test_bad_input(self, code, mode, message):
        with pytest.raises(ValueError, match=message):
            validate_code(code, mode)

    def test_format_css(self):
        assert format_code('a {\ncolor: red;\n}', 'css') == 'a {\n  color: red;\n}'

    def test_format_html(self):
        assert format_code('<div><p>x</p></div>', 'html') == '<div>\n <p>\n  x\n </p>\n</div>'


class TestValidatorEndpoints:

    def test_check(self, client):
        response = client.post('/api/validator/check', json={'code': 'a { color: red;', 'mode': 'css'})
        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['valid'] is False
        assert data['issues'][0]['type'] == 'error'

    def test_check_defaults_to_html(self, client):
        response = client.post('/api/validator/check', json={'code': CLEAN_PAGE})
        assert response.get_json()['mode'] == 'html'
        assert response.get_json()['issues'] == []

    def test_check_empty(self, client):
        response = client.post('/api/validator/check', json={'code': ''})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'No input data provided'

    def test_no_body(self, client):
        assert client.post('/api/validator/check').status_code == 400

    def test_format(self, client):
        response = client.post('/api/validator/format', json={'code': 'a {\nb: c;\n}', 'mode': 'css'})
        assert response.get_json() == {'success': True, 'result': 'a {\n  b: c;\n}'}

    def test_format_bad_mode(self, client):
        response = client.post('/api/validator/format', json={'code': 'x', 'mode': 'less'})
        assert response.status_code == 400
