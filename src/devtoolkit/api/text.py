"""
Text mini-tools: JSON formatting, Base64, URL and HTML encoding, string
escaping, case conversion, slugs, word counts and lorem ipsum.
"""

import re
import json
import html
import math
import base64
import random
import binascii
import unicodedata
from urllib.parse import quote, unquote
from typing import Dict, Any, List, Optional


# Characters encodeURIComponent leaves alone, beyond ASCII letters and digits
URI_COMPONENT_SAFE = "-_.!~*'()"
# encodeURI additionally keeps the URL structure characters
URI_SAFE = URI_COMPONENT_SAFE + ";,/?:@&=+$#"

ESCAPE_MODES = ["json", "html", "url", "regex", "sql", "shell", "csv"]

REGEX_SPECIAL = re.compile(r'[.*+?^${}()|\[\]\\]')
REGEX_ESCAPED = re.compile(r'\\([.*+?^${}()|\[\]\\])')

READING_WPM = 200
SPEAKING_WPM = 130

LOREM_WORDS = [
    "lorem", "ipsum", "dolor", "sit", "amet", "consectetur", "adipiscing", "elit",
    "sed", "do", "eiusmod", "tempor", "incididunt", "ut", "labore", "et", "dolore",
    "magna", "aliqua", "enim", "ad", "minim", "veniam", "quis", "nostrud",
    "exercitation", "ullamco", "laboris", "nisi", "aliquip", "ex", "ea", "commodo",
    "consequat", "duis", "aute", "irure", "in", "reprehenderit", "voluptate",
    "velit", "esse", "cillum", "fugiat", "nulla", "pariatur", "excepteur", "sint",
    "occaecat", "cupidatat", "non", "proident", "sunt", "culpa", "qui", "officia",
    "deserunt", "mollit", "anim", "id", "est", "laborum", "at", "vero", "eos",
    "accusamus", "iusto", "odio", "dignissimos", "ducimus", "blanditiis",
    "praesentium", "voluptatum", "deleniti", "atque", "corrupti", "quos", "dolores",
    "quas", "molestias", "excepturi", "obcaecati", "cupiditate", "provident",
]
LOREM_START = ["Lorem", "ipsum", "dolor", "sit", "amet"]


# JSON

def format_json(text: str, indent: int = 2, sort_keys: bool = False) -> str:
    try:
        data = json.loads(text)
        return json.dumps(data, indent=indent, sort_keys=sort_keys, ensure_ascii=False)
    except json.JSONDecodeError as e:
        raise ValueError(f"JSON formatting failed: {str(e)}")


def minify_json(text: str) -> str:
    try:
        data = json.loads(text)
        return json.dumps(data, separators=(',', ':'), ensure_ascii=False)
    except json.JSONDecodeError as e:
        raise ValueError(f"JSON minification failed: {str(e)}")


def validate_json(text: str) -> Dict[str, Any]:
    """Validate JSON and locate the first error."""
    try:
        json.loads(text)
        return {'valid': True, 'error': None, 'line': None, 'column': None}
    except json.JSONDecodeError as e:
        return {'valid': False, 'error': e.msg, 'line': e.lineno, 'column': e.colno}


# Base64

def base64_encode(text: str, url_safe: bool = False) -> str:
    data = text.encode('utf-8')
    if url_safe:
        return base64.urlsafe_b64encode(data).decode('ascii').rstrip('=')
    return base64.b64encode(data).decode('ascii')


def base64_decode(text: str, url_safe: bool = False) -> str:
    cleaned = re.sub(r'\s+', '', text)
    cleaned += '=' * (-len(cleaned) % 4)
    try:
        if url_safe:
            raw = base64.urlsafe_b64decode(cleaned)
        else:
            raw = base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Invalid Base64 input: {str(e)}")
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError:
        raise ValueError("Decoded data is not valid UTF-8 text")


# URL

def url_encode(text: str, component: bool = True) -> str:
    """Percent-encode like encodeURIComponent, or encodeURI when component is False."""
    return quote(text, safe=URI_COMPONENT_SAFE if component else URI_SAFE)


def url_decode(text: str) -> str:
    try:
        return unquote(text, errors='strict')
    except UnicodeDecodeError as e:
        raise ValueError(f"URL decoding failed: {str(e)}")


# HTML

def html_encode(text: str) -> str:
    return (text.replace('&', '&amp;')
                .replace('<', '&lt;')
                .replace('>', '&gt;')
                .replace('"', '&quot;')
                .replace("'", '&#39;'))


def html_decode(text: str) -> str:
    return html.unescape(text)


# String escaping

def _escape_csv(text: str) -> str:
    if ',' in text or '"' in text or '\n' in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def _unescape_json(text: str) -> str:
    try:
        value = json.loads(f'"{text}"')
    except json.JSONDecodeError:
        return text
    return value if isinstance(value, str) else text


def _unescape_shell(text: str) -> str:
    if len(text) >= 2 and text.startswith("'") and text.endswith("'"):
        return text[1:-1].replace("'\\''", "'")
    return re.sub(r'\\(.)', r'\1', text)


def _unescape_csv(text: str) -> str:
    if len(text) >= 2 and text.startswith('"') and text.endswith('"'):
        return text[1:-1].replace('""', '"')
    return text


def escape_string(text: str, mode: str) -> str:
    """Escape text for embedding in the given context."""
    if mode == 'json':
        return json.dumps(text, ensure_ascii=False)[1:-1]
    if mode == 'html':
        return html_encode(text)
    if mode == 'url':
        return url_encode(text)
    if mode == 'regex':
        return REGEX_SPECIAL.sub(lambda m: '\\' + m.group(0), text)
    if mode == 'sql':
        return text.replace("'", "''").replace('\\', '\\\\')
    if mode == 'shell':
        return "'" + text.replace("'", "'\\''") + "'"
    if mode == 'csv':
        return _escape_csv(text)
    raise ValueError(f"Unsupported escape mode: {mode}. Supported: {', '.join(ESCAPE_MODES)}")


def unescape_string(text: str, mode: str) -> str:
    if mode == 'json':
        return _unescape_json(text)
    if mode == 'html':
        return html_decode(text)
    if mode == 'url':
        return url_decode(text)
    if mode == 'regex':
        return REGEX_ESCAPED.sub(r'\1', text)
    if mode == 'sql':
        return text.replace("''", "'").replace('\\\\', '\\')
    if mode == 'shell':
        return _unescape_shell(text)
    if mode == 'csv':
        return _unescape_csv(text)
    raise ValueError(f"Unsupported escape mode: {mode}. Supported: {', '.join(ESCAPE_MODES)}")


# Case conversion

def split_words(text: str) -> List[str]:
    """Split identifiers and phrases into words at case, dash and underscore boundaries."""
    text = re.sub(r'([a-z])([A-Z])', r'\1 \2', text)
    text = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1 \2', text)
    text = re.sub(r'[-_]', ' ', text)
    return text.split()


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def convert_case(text: str) -> Dict[str, str]:
    """Return the text in every supported case style."""
    words = split_words(text)
    lower_words = [w.lower() for w in words]
    sentence = text.lower()

    return {
        'camel': ''.join(w.lower() if i == 0 else _capitalize(w) for i, w in enumerate(words)),
        'pascal': ''.join(_capitalize(w) for w in words),
        'snake': '_'.join(lower_words),
        'screaming_snake': '_'.join(w.upper() for w in words),
        'kebab': '-'.join(lower_words),
        'train': '-'.join(_capitalize(w) for w in words),
        'upper': text.upper(),
        'lower': text.lower(),
        'title': ' '.join(_capitalize(w) for w in words),
        'sentence': sentence[:1].upper() + sentence[1:],
        'dot': '.'.join(lower_words),
        'path': '/'.join(lower_words),
    }


# Slugs

def remove_accents(text: str) -> str:
    decomposed = unicodedata.normalize('NFD', text)
    return ''.join(c for c in decomposed if not unicodedata.combining(c))


def to_slug(text: str, separator: str = '-', lowercase: bool = True) -> str:
    slug = re.sub(r'[^\w\s-]', '', remove_accents(text), flags=re.ASCII).strip()
    slug = re.sub(r'[\s_]+', separator, slug)
    slug = re.sub(re.escape(separator) + '+', separator, slug)
    return slug.lower() if lowercase else slug


def generate_slugs(text: str, max_length: int = 0) -> Dict[str, str]:
    if not text.strip():
        return {}

    slugs = {
        'kebab': to_slug(text, '-'),
        'snake': to_slug(text, '_'),
        'filename': to_slug(text, '-').strip('-'),
        'wordpress': to_slug(text, '-')[:200],
        'github': re.sub(r'[^a-z0-9-]', '', to_slug(text, '-')),
    }

    if max_length > 0:
        for key, slug in slugs.items():
            slug = slug[:max_length]
            if slug.endswith('-') or slug.endswith('_'):
                slug = slug[:-1]
            slugs[key] = slug
    return slugs


# Word counter

def count_words(text: str) -> Dict[str, Any]:
    words = text.split()
    sentences = [s for s in re.split(r'[.!?]+', text) if s.strip()]
    paragraphs = [p for p in re.split(r'\n\s*\n', text) if p.strip()]

    return {
        'characters': len(text),
        'characters_no_spaces': len(re.sub(r'\s', '', text)),
        'words': len(words),
        'sentences': len(sentences),
        'paragraphs': len(paragraphs),
        'lines': len(text.splitlines()) if text else 0,
        'reading_time_minutes': math.ceil(len(words) / READING_WPM),
        'speaking_time_minutes': math.ceil(len(words) / SPEAKING_WPM),
    }


# Lorem ipsum

def _lorem_words(count: int, rng: random.Random) -> List[str]:
    return [rng.choice(LOREM_WORDS) for _ in range(count)]


def _lorem_sentence(rng: random.Random) -> str:
    words = _lorem_words(rng.randint(8, 19), rng)
    words[0] = words[0].capitalize()
    return ' '.join(words) + '.'


def _lorem_paragraph(rng: random.Random) -> str:
    return ' '.join(_lorem_sentence(rng) for _ in range(rng.randint(4, 7)))


def generate_lorem(kind: str = 'paragraphs', count: int = 3, start_with_lorem: bool = True,
                   rng: Optional[random.Random] = None) -> str:
    """
    Generate placeholder text.

    Args:
        kind: 'words', 'sentences' or 'paragraphs'
        count: How many units to generate, clamped to 1-100
        start_with_lorem: Begin with "Lorem ipsum dolor sit amet"
        rng: Random source, mainly for tests

    Returns:
        Generated text; paragraphs are separated by blank lines
    """
    rng = rng or random.Random()
    count = max(1, min(100, int(count)))

    if kind == 'words':
        words = _lorem_words(count, rng)
        if start_with_lorem:
            for i, word in enumerate(LOREM_START[:len(words)]):
                words[i] = word.lower()
        return ' '.join(words)

    if kind == 'sentences':
        result = ' '.join(_lorem_sentence(rng) for _ in range(count))
    elif kind == 'paragraphs':
        result = '\n\n'.join(_lorem_paragraph(rng) for _ in range(count))
    else:
        raise ValueError(f"Unsupported lorem type: {kind}. Use words, sentences or paragraphs")

    if start_with_lorem:
        # The first sentence always has at least eight words
        rest = result.split(' ', len(LOREM_START))[-1]
        result = ' '.join(LOREM_START) + ' ' + rest
    return result
