"""
HTML and CSS checks: deprecated markup, missing accessibility attributes,
unbalanced CSS delimiters and deprecated properties, reported per line.
"""

import re
from typing import Dict, Any, List, Optional

from bs4 import BeautifulSoup

VALIDATION_MODES = ['html', 'css']

DEPRECATED_TAGS = [
    'center', 'font', 'marquee', 'frame', 'frameset', 'noframes', 'applet', 'basefont',
    'bgsound', 'blink', 'isindex', 'keygen', 'spacer', 'tt',
]
DEPRECATED_ATTRIBUTES = ['align', 'bgcolor', 'border', 'color', 'face', 'size', 'width', 'height']
DEPRECATED_PROPERTIES = [
    'zoom', 'filter', 'behavior', 'scrollbar-arrow-color', 'scrollbar-base-color',
    'scrollbar-darkshadow-color', 'scrollbar-face-color', 'scrollbar-highlight-color',
    'scrollbar-shadow-color', 'scrollbar-track-color', 'scrollbar-3dlight-color',
]

OPEN_TAG = re.compile(r'<([a-zA-Z][\w-]*)\b[^>]*', re.DOTALL)
DEPRECATED_TAG = re.compile(r'</?(%s)\b' % '|'.join(DEPRECATED_TAGS), re.IGNORECASE)
DEPRECATED_ATTRIBUTE = re.compile(r'(?<![\w-])(%s)\s*=' % '|'.join(DEPRECATED_ATTRIBUTES), re.IGNORECASE)
HTML_TAG = re.compile(r'<html\b[^>]*>', re.IGNORECASE)
CSS_PROPERTY = re.compile(r'^\s*([-\w]+)\s*:')

CSS_PAIRS = [
    ('{', '}', 'brace', 'braces'),
    ('(', ')', 'parenthesis', 'parentheses'),
    ('[', ']', 'bracket', 'brackets'),
]


def _issue(line: int, message: str, kind: str, column: Optional[int] = None) -> Dict[str, Any]:
    return {'line': line, 'column': column, 'message': message, 'type': kind}


def validate_html(code: str) -> List[Dict[str, Any]]:
    issues = []
    for number, line in enumerate(code.split('\n'), start=1):
        for match in DEPRECATED_TAG.finditer(line):
            issues.append(_issue(number, f"Deprecated tag: <{match.group(1).lower()}>", 'warning', match.start() + 1))

        for tag in OPEN_TAG.finditer(line):
            name = tag.group(1).lower()
            markup = tag.group(0)
            for attr in DEPRECATED_ATTRIBUTE.finditer(markup):
                issues.append(_issue(number, f"Deprecated attribute: {attr.group(1).lower()}", 'warning',
                                     tag.start() + attr.start() + 1))
            if name == 'img' and not re.search(r'\balt\s*=', markup, re.IGNORECASE):
                issues.append(_issue(number, "Missing alt attribute on image", 'warning', tag.start() + 1))
            if name == 'a' and not re.search(r'\b(href|name)\s*=', markup, re.IGNORECASE):
                issues.append(_issue(number, "Anchor tag missing href or name attribute", 'warning', tag.start() + 1))

    if not re.search(r'<!doctype', code, re.IGNORECASE):
        issues.append(_issue(1, "Missing DOCTYPE declaration", 'warning'))

    html_tag = HTML_TAG.search(code)
    if html_tag and not re.search(r'\blang\s*=', html_tag.group(0), re.IGNORECASE):
        line = code.count('\n', 0, html_tag.start()) + 1
        issues.append(_issue(line, "Missing lang attribute on <html> tag", 'warning'))

    return sorted(issues, key=lambda issue: issue['line'])


def _strip_css_comments(code: str) -> str:
    """Blank out comments while keeping line numbers intact."""
    return re.sub(r'/\*.*?\*/', lambda m: re.sub(r'[^\n]', ' ', m.group(0)), code, flags=re.DOTALL)


def validate_css(code: str) -> List[Dict[str, Any]]:
    issues = []
    lines = _strip_css_comments(code).split('\n')
    depth = {opener: 0 for opener, _, _, _ in CSS_PAIRS}
    quote = None

    for number, line in enumerate(lines, start=1):
        for i, char in enumerate(line):
            if char in ('"', "'") and (i == 0 or line[i - 1] != '\\'):
                if quote is None:
                    quote = char
                elif quote == char:
                    quote = None
                continue
            if quote:
                continue
            for opener, closer, name, _ in CSS_PAIRS:
                if char == opener:
                    depth[opener] += 1
                elif char == closer:
                    depth[opener] -= 1
                    if depth[opener] < 0:
                        issues.append(_issue(number, f"Unexpected closing {name} {closer}", 'error', i + 1))
                        depth[opener] = 0

        prop = CSS_PROPERTY.match(line)
        if prop and prop.group(1).lower() in DEPRECATED_PROPERTIES:
            issues.append(_issue(number, f"Deprecated property: {prop.group(1)}", 'warning', prop.start(1) + 1))

    for opener, _, _, plural in CSS_PAIRS:
        if depth[opener] > 0:
            issues.append(_issue(len(lines), f"Unclosed {plural}: {depth[opener]} '{opener}' not closed", 'error'))

    return issues


def format_code(code: str, mode: str) -> str:
    if mode == 'html':
        return BeautifulSoup(code, 'html.parser').prettify().rstrip('\n')

    indent = 0
    formatted = []
    for line in code.split('\n'):
        trimmed = line.strip()
        if '}' in trimmed:
            indent = max(0, indent - 1)
        formatted.append('  ' * indent + trimmed)
        if '{' in trimmed:
            indent += 1
    return '\n'.join(formatted)


def validate_code(code: str, mode: str) -> Dict[str, Any]:
    """
    Check HTML or CSS source and summarise the findings.

    Errors make the document invalid; warnings are advisory.
    """
    if mode not in VALIDATION_MODES:
        raise ValueError(f"Unsupported validation mode: {mode}. Supported: {', '.join(VALIDATION_MODES)}")
    if not isinstance(code, str) or not code.strip():
        raise ValueError("No input data provided")

    issues = validate_html(code) if mode == 'html' else validate_css(code)
    error_count = sum(1 for issue in issues if issue['type'] == 'error')
    return {
        'mode': mode,
        'issues': issues,
        'error_count': error_count,
        'warning_count': len(issues) - error_count,
        'valid': error_count == 0,
    }
