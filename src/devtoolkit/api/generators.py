"""
UUID and password generators.
"""

import math
import uuid
import secrets
from typing import Dict, Any, List, Optional

UUID_FORMATS = ['default', 'uppercase', 'no-dashes', 'braces']
MAX_UUIDS = 100

UPPERCASE = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
LOWERCASE = 'abcdefghijklmnopqrstuvwxyz'
NUMBERS = '0123456789'
SYMBOLS = '!@#$%^&*()_+-=[]{}|;:,.<>?'

# Without I, O, l, i, o, 0 and 1
UPPERCASE_UNAMBIGUOUS = 'ABCDEFGHJKLMNPQRSTUVWXYZ'
LOWERCASE_UNAMBIGUOUS = 'abcdefghjkmnpqrstuvwxyz'
NUMBERS_UNAMBIGUOUS = '23456789'

MIN_PASSWORD_LENGTH = 4
MAX_PASSWORD_LENGTH = 128
MAX_PASSWORDS = 50

DEFAULT_PASSWORD_OPTIONS = {
    'length': 16,
    'uppercase': True,
    'lowercase': True,
    'numbers': True,
    'symbols': True,
    'exclude_ambiguous': False,
}

# (max entropy bits, score, label)
STRENGTH_BUCKETS = [
    (28, 1, 'Very Weak'),
    (36, 2, 'Weak'),
    (60, 3, 'Fair'),
    (128, 4, 'Strong'),
]


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def format_uuid(value: uuid.UUID, fmt: str = 'default') -> str:
    text = str(value)
    if fmt == 'uppercase':
        return text.upper()
    if fmt == 'no-dashes':
        return text.replace('-', '')
    if fmt == 'braces':
        return '{' + text + '}'
    if fmt == 'default':
        return text
    raise ValueError(f"Unsupported UUID format: {fmt}. Supported: {', '.join(UUID_FORMATS)}")


def generate_uuids(count: int = 1, fmt: str = 'default') -> List[str]:
    count = _clamp(int(count), 1, MAX_UUIDS)
    return [format_uuid(uuid.uuid4(), fmt) for _ in range(count)]


def _options(options: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    merged = dict(DEFAULT_PASSWORD_OPTIONS)
    merged.update(options or {})
    merged['length'] = _clamp(int(merged['length']), MIN_PASSWORD_LENGTH, MAX_PASSWORD_LENGTH)
    return merged


def build_charset(options: Dict[str, Any]) -> str:
    ambiguous = options.get('exclude_ambiguous')
    charset = ''
    if options.get('uppercase'):
        charset += UPPERCASE_UNAMBIGUOUS if ambiguous else UPPERCASE
    if options.get('lowercase'):
        charset += LOWERCASE_UNAMBIGUOUS if ambiguous else LOWERCASE
    if options.get('numbers'):
        charset += NUMBERS_UNAMBIGUOUS if ambiguous else NUMBERS
    if options.get('symbols'):
        charset += SYMBOLS
    return charset


def generate_password(options: Optional[Dict[str, Any]] = None) -> str:
    """Random password from the enabled character sets; empty when none are enabled."""
    options = _options(options)
    charset = build_charset(options)
    if not charset:
        return ''
    return ''.join(secrets.choice(charset) for _ in range(options['length']))


def password_strength(password: str, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Estimate strength from the length and the enabled pools.

    Returns:
        Dict with 'entropy' (bits), 'score' (1-5) and 'label'
    """
    options = _options(options)
    pool = 0
    if options.get('uppercase'):
        pool += 26
    if options.get('lowercase'):
        pool += 26
    if options.get('numbers'):
        pool += 10
    if options.get('symbols'):
        pool += 26

    entropy = len(password) * math.log2(pool) if pool and password else 0.0
    for limit, score, label in STRENGTH_BUCKETS:
        if entropy < limit:
            break
    else:
        score, label = 5, 'Very Strong'
    return {'entropy': round(entropy, 2), 'score': score, 'label': label}


def generate_passwords(count: int = 5, options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    options = _options(options)
    count = _clamp(int(count), 1, MAX_PASSWORDS)
    passwords = [generate_password(options) for _ in range(count)]
    return {
        'passwords': passwords,
        'length': options['length'],
        'strength': password_strength(passwords[0], options),
    }
