"""
Text comparison: token-level change lists (lines, words, characters), a
structured line diff with character highlights, and the classic unified,
context and side-by-side renderings.
"""

import re
import html
import difflib
from typing import Dict, Any, List, Tuple

DIFF_MODES = ['lines', 'words', 'chars']
OUTPUT_FORMATS = ['changes', 'json', 'unified', 'context', 'side-by-side', 'stats-only']

WORD_TOKENS = re.compile(r'\s+|\w+|[^\w\s]')


def preprocess_texts(text1: str, text2: str, ignore_whitespace: bool, ignore_case: bool) -> Tuple[str, str]:
    """Preprocess texts based on comparison options"""
    if ignore_case:
        text1 = text1.lower()
        text2 = text2.lower()

    if ignore_whitespace:
        # Collapse runs of spaces and tabs but keep line structure
        text1 = '\n'.join(re.sub(r'[ \t]+', ' ', line).strip() for line in text1.split('\n'))
        text2 = '\n'.join(re.sub(r'[ \t]+', ' ', line).strip() for line in text2.split('\n'))

    return text1, text2


def tokenize(text: str, mode: str) -> List[str]:
    if mode == 'lines':
        return text.splitlines(keepends=True)
    if mode == 'words':
        return WORD_TOKENS.findall(text)
    if mode == 'chars':
        return list(text)
    raise ValueError(f"Unsupported diff mode: {mode}. Supported: {', '.join(DIFF_MODES)}")


def _append_change(changes: List[Dict[str, Any]], value: str, added: bool, removed: bool):
    if not value:
        return
    last = changes[-1] if changes else None
    if last and last['added'] == added and last['removed'] == removed:
        last['value'] += value
    else:
        changes.append({'value': value, 'added': added, 'removed': removed})


def diff_changes(text1: str, text2: str, mode: str = 'lines') -> List[Dict[str, Any]]:
    """Diff two texts into a list of {value, added, removed} runs."""
    tokens1 = tokenize(text1, mode)
    tokens2 = tokenize(text2, mode)
    matcher = difflib.SequenceMatcher(None, tokens1, tokens2, autojunk=False)

    changes: List[Dict[str, Any]] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == 'equal':
            _append_change(changes, ''.join(tokens1[i1:i2]), False, False)
            continue
        if tag in ('delete', 'replace'):
            _append_change(changes, ''.join(tokens1[i1:i2]), False, True)
        if tag in ('insert', 'replace'):
            _append_change(changes, ''.join(tokens2[j1:j2]), True, False)
    return changes


def calculate_stats(changes: List[Dict[str, Any]]) -> Dict[str, int]:
    """Count characters added, removed and unchanged."""
    stats = {'additions': 0, 'deletions': 0, 'unchanged': 0}
    for change in changes:
        count = len(change['value'])
        if change['added']:
            stats['additions'] += count
        elif change['removed']:
            stats['deletions'] += count
        else:
            stats['unchanged'] += count
    return stats


def format_patch(changes: List[Dict[str, Any]]) -> str:
    """Render changes as '+ ', '- ' and '  ' prefixed text."""
    parts = []
    for change in changes:
        if change['added']:
            parts.append(f"+ {change['value']}")
        elif change['removed']:
            parts.append(f"- {change['value']}")
        else:
            parts.append(f"  {change['value']}")
    return ''.join(parts)


def compare_texts(text1: str, text2: str, mode: str = 'lines',
                  ignore_whitespace: bool = False, ignore_case: bool = False) -> Dict[str, Any]:
    text1, text2 = preprocess_texts(text1, text2, ignore_whitespace, ignore_case)
    if not text1 and not text2:
        changes = []
    else:
        changes = diff_changes(text1, text2, mode)
    return {
        'mode': mode,
        'changes': changes,
        'stats': calculate_stats(changes),
        'identical': text1 == text2,
    }


def generate_unified_diff(text1: str, text2: str, context_lines: int = 3) -> str:
    diff = difflib.unified_diff(
        text1.splitlines(keepends=True), text2.splitlines(keepends=True),
        fromfile='original', tofile='modified',
        n=context_lines
    )
    return ''.join(diff)


def generate_context_diff(text1: str, text2: str, context_lines: int = 3) -> str:
    diff = difflib.context_diff(
        text1.splitlines(keepends=True), text2.splitlines(keepends=True),
        fromfile='original', tofile='modified',
        n=context_lines
    )
    return ''.join(diff)


def generate_side_by_side_diff(text1: str, text2: str, width: int = 40) -> str:
    """Line-numbered two-column view; '|' marks lines that differ."""
    lines1 = text1.splitlines()
    lines2 = text2.splitlines()

    result = []
    for i in range(max(len(lines1), len(lines2))):
        line1 = lines1[i] if i < len(lines1) else ''
        line2 = lines2[i] if i < len(lines2) else ''
        marker = ' ' if line1 == line2 else '|'
        result.append(f"{i + 1:4d} {line1:<{width}} {marker} {line2}")
    return '\n'.join(result)


def generate_character_diff_html(text1: str, text2: str) -> Tuple[str, str]:
    """Character-level diff of two lines as escaped HTML with change spans."""
    matcher = difflib.SequenceMatcher(None, text1, text2, autojunk=False)
    res1, res2 = [], []

    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        left = html.escape(text1[i1:i2])
        right = html.escape(text2[j1:j2])
        if tag == 'equal':
            res1.append(left)
            res2.append(right)
            continue
        if left:
            res1.append(f'<span class="char-delete">{left}</span>')
        if right:
            res2.append(f'<span class="char-insert">{right}</span>')

    return ''.join(res1), ''.join(res2)


def generate_line_diff(text1: str, text2: str) -> Dict[str, Any]:
    """Line-by-line diff; paired replaced lines become 'modify' entries with character highlights."""
    lines1 = text1.splitlines()
    lines2 = text2.splitlines()
    matcher = difflib.SequenceMatcher(None, lines1, lines2, autojunk=False)

    result_lines = []
    stats = {'additions': 0, 'deletions': 0, 'equal': 0, 'modifications': 0}

    def deleted(i):
        result_lines.append({'type': 'delete', 'content': lines1[i], 'line_num_1': i + 1, 'line_num_2': None})
        stats['deletions'] += 1

    def inserted(j):
        result_lines.append({'type': 'insert', 'content': lines2[j], 'line_num_1': None, 'line_num_2': j + 1})
        stats['additions'] += 1

    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == 'equal':
            for offset in range(i2 - i1):
                result_lines.append({
                    'type': 'equal',
                    'content': lines1[i1 + offset],
                    'line_num_1': i1 + offset + 1,
                    'line_num_2': j1 + offset + 1
                })
                stats['equal'] += 1
        elif tag == 'delete':
            for i in range(i1, i2):
                deleted(i)
        elif tag == 'insert':
            for j in range(j1, j2):
                inserted(j)
        elif tag == 'replace':
            paired = min(i2 - i1, j2 - j1)
            stats['modifications'] += paired
            for offset in range(paired):
                line1 = lines1[i1 + offset]
                line2 = lines2[j1 + offset]
                char_diff_1, char_diff_2 = generate_character_diff_html(line1, line2)
                result_lines.append({
                    'type': 'modify',
                    'content_1': line1,
                    'content_2': line2,
                    'char_diff_1': char_diff_1,
                    'char_diff_2': char_diff_2,
                    'line_num_1': i1 + offset + 1,
                    'line_num_2': j1 + offset + 1
                })
            for i in range(i1 + paired, i2):
                deleted(i)
            for j in range(j1 + paired, j2):
                inserted(j)

    return {'lines': result_lines, 'stats': stats}
