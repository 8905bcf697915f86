"""
Regex tester: run a pattern with JavaScript-style flags, explain its parts
and split the subject text into highlighted segments.
"""

import re
import time
from typing import Dict, Any, List

SUPPORTED_FLAGS = {
    'g': 0,
    'i': re.IGNORECASE,
    'm': re.MULTILINE,
    's': re.DOTALL,
}

FLAG_OPTIONS = [
    {'flag': 'g', 'name': 'Global', 'desc': 'Find all matches'},
    {'flag': 'i', 'name': 'Case Insensitive', 'desc': 'Ignore case'},
    {'flag': 'm', 'name': 'Multiline', 'desc': '^ and $ match line boundaries'},
    {'flag': 's', 'name': 'Dot All', 'desc': '. matches newlines'},
]

ESCAPE_DESCRIPTIONS = {
    'd': 'Match any digit (0-9)',
    'w': 'Match any word character (a-z, A-Z, 0-9, _)',
    's': 'Match any whitespace character (space, tab, newline)',
    'D': 'Match any non-digit character',
    'W': 'Match any non-word character',
    'S': 'Match any non-whitespace character',
    'b': 'Match word boundary',
    'B': 'Match non-word boundary',
    'n': 'Match newline character',
    't': 'Match tab character',
    'r': 'Match carriage return',
}

SYMBOL_DESCRIPTIONS = {
    '.': 'Match any single character (except newline)',
    '^': 'Match start of string/line',
    '$': 'Match end of string/line',
    '*': 'Match 0 or more of the preceding element',
    '+': 'Match 1 or more of the preceding element',
    '?': 'Match 0 or 1 of the preceding element (optional)',
    '|': 'OR operator - match either left or right side',
    ')': 'End group',
}

GROUP_PREFIXES = [
    ('(?:', 'Start non-capturing group'),
    ('(?=', 'Start positive lookahead'),
    ('(?!', 'Start negative lookahead'),
    ('(?<=', 'Start positive lookbehind'),
    ('(?<!', 'Start negative lookbehind'),
]

# JavaScript named groups (?<name>...) become Python's (?P<name>...)
JS_NAMED_GROUP = re.compile(r'\(\?<(?![=!])')
JS_NAMED_BACKREF = re.compile(r'\\k<(\w+)>')


def to_python_pattern(pattern: str) -> str:
    pattern = JS_NAMED_GROUP.sub('(?P<', pattern)
    return JS_NAMED_BACKREF.sub(r'(?P=\1)', pattern)


def compile_flags(flags: str) -> int:
    py_flags = 0
    for flag in flags:
        if flag not in SUPPORTED_FLAGS:
            raise ValueError(f"Unsupported flag '{flag}'. Supported: {''.join(SUPPORTED_FLAGS)}")
        py_flags |= SUPPORTED_FLAGS[flag]
    return py_flags


def _describe_quantifier(quantifier: str) -> str:
    body = quantifier[1:-1]
    if ',' not in body:
        return f'Match exactly {body} of the preceding element'
    low, high = body.split(',', 1)
    if high:
        return f'Match between {low} and {high} of the preceding element'
    return f'Match {low} or more of the preceding element'


def explain_regex(pattern: str) -> List[Dict[str, str]]:
    """Generate a human-readable explanation of each regex component."""
    explanations = []
    i = 0

    while i < len(pattern):
        char = pattern[i]
        component, description = char, None

        if char == '\\' and i + 1 < len(pattern):
            next_char = pattern[i + 1]
            component = pattern[i:i + 2]
            if next_char in ESCAPE_DESCRIPTIONS:
                description = ESCAPE_DESCRIPTIONS[next_char]
            elif next_char.isdigit():
                description = f'Match backreference to group {next_char}'
            else:
                description = f'Match literal character "{next_char}"'
        elif char == '(':
            for prefix, prefix_description in GROUP_PREFIXES:
                if pattern.startswith(prefix, i):
                    component, description = prefix, prefix_description
                    break
            else:
                named = re.match(r'\(\?P?<(\w+)>', pattern[i:])
                if named:
                    component = named.group(0)
                    description = f'Start named capture group "{named.group(1)}"'
                else:
                    description = 'Start capture group'
        elif char == '[':
            end = pattern.find(']', i + 1)
            if end != -1:
                component = pattern[i:end + 1]
                negated = component.startswith('[^')
                description = (f'Match any character not in the set: {component}' if negated
                               else f'Match any character in the set: {component}')
            else:
                description = 'Start character class (missing closing bracket)'
        elif char == '{':
            end = pattern.find('}', i + 1)
            if end != -1:
                component = pattern[i:end + 1]
                description = _describe_quantifier(component)
            else:
                description = 'Start quantifier (missing closing brace)'
        elif char in SYMBOL_DESCRIPTIONS:
            description = SYMBOL_DESCRIPTIONS[char]
            # A ? after a quantifier makes it lazy
            if char == '?' and explanations and explanations[-1]['component'][-1:] in '*+?}':
                description = 'Make the preceding quantifier lazy (match as few as possible)'

        if description is None:
            description = f'Match literal character "{char}"'

        explanations.append({'component': component, 'description': description})
        i += len(component)

    return explanations


def run_regex(pattern: str, text: str, flags: str = '') -> Dict[str, Any]:
    """
    Run a pattern against text.

    With the 'g' flag every match is returned; an empty match ends the scan.
    Without it only the first match is returned.
    """
    if not pattern:
        raise ValueError("Pattern cannot be empty")

    py_flags = compile_flags(flags)

    compile_start = time.perf_counter()
    try:
        regex = re.compile(to_python_pattern(pattern), py_flags)
    except re.error as e:
        raise ValueError(f"Invalid regex pattern: {str(e)}")
    compile_time = (time.perf_counter() - compile_start) * 1000

    match_start = time.perf_counter()
    if 'g' in flags:
        found = []
        for match in regex.finditer(text):
            found.append(match)
            if not match.group(0):
                break
    else:
        first = regex.search(text)
        found = [first] if first else []
    match_time = (time.perf_counter() - match_start) * 1000

    matches = [{
        'text': match.group(0),
        'index': match.start(),
        'end': match.end(),
        'groups': list(match.groups()),
        'named_groups': match.groupdict(),
    } for match in found]

    return {
        'matches': matches,
        'match_count': len(matches),
        'group_count': regex.groups,
        'performance': {
            'compile_time_ms': round(compile_time, 3),
            'match_time_ms': round(match_time, 3),
            'total_time_ms': round(compile_time + match_time, 3),
            'pattern_length': len(pattern),
            'text_length': len(text),
        }
    }


def highlight_matches(text: str, matches: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Split text into alternating plain and matched segments."""
    segments = []
    last_index = 0

    for match in matches:
        if match['index'] > last_index:
            segments.append({'text': text[last_index:match['index']], 'match': False})
        segments.append({'text': match['text'], 'match': True})
        last_index = match['index'] + len(match['text'])

    if last_index < len(text):
        segments.append({'text': text[last_index:], 'match': False})
    return segments
