"""
Number base converter and byte size converter.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Dict, Any

BASES = [
    {'name': 'binary', 'base': 2, 'prefix': '0b', 'group': 4},
    {'name': 'octal', 'base': 8, 'prefix': '0o', 'group': 3},
    {'name': 'decimal', 'base': 10, 'prefix': '', 'group': 3},
    {'name': 'hex', 'base': 16, 'prefix': '0x', 'group': 2},
]

PREFIX_BASES = {'0b': 2, '0o': 8, '0x': 16}
BINARY_DIGITS = re.compile(r'[01]{4,}')

BYTE_UNITS = {
    'B': 1,
    'KB': 1000, 'KiB': 1024,
    'MB': 1000 ** 2, 'MiB': 1024 ** 2,
    'GB': 1000 ** 3, 'GiB': 1024 ** 3,
    'TB': 1000 ** 4, 'TiB': 1024 ** 4,
    'PB': 1000 ** 5, 'PiB': 1024 ** 5,
}


def parse_number(text: str) -> int:
    """
    Parse an integer in any supported base.

    0b, 0o and 0x prefixes select the base; a bare run of more than three
    0/1 digits is read as binary; anything else is decimal.
    """
    cleaned = (text or '').strip().replace('_', '').replace(' ', '')
    if not cleaned:
        raise ValueError("Enter a number")

    negative = cleaned.startswith('-')
    digits = cleaned[1:] if cleaned[0] in '+-' else cleaned

    prefix = digits[:2].lower()
    try:
        if prefix in PREFIX_BASES:
            value = int(digits[2:], PREFIX_BASES[prefix])
        elif BINARY_DIGITS.fullmatch(digits):
            value = int(digits, 2)
        else:
            value = int(digits, 10)
    except ValueError:
        raise ValueError(f"Invalid number: {text}")
    return -value if negative else value


def group_digits(digits: str, size: int, separator: str = ' ') -> str:
    """Group digits from the right, e.g. 1111 0000."""
    groups = []
    while digits:
        groups.insert(0, digits[-size:])
        digits = digits[:-size]
    return separator.join(groups)


def _to_base(value: int, base: int) -> str:
    if base == 2:
        return format(value, 'b')
    if base == 8:
        return format(value, 'o')
    if base == 16:
        return format(value, 'X')
    return str(value)


def convert_bases(text: str, grouped: bool = True) -> Dict[str, Any]:
    value = parse_number(text)
    sign = '-' if value < 0 else ''
    magnitude = abs(value)

    result: Dict[str, Any] = {'value': str(value)}
    for base in BASES:
        digits = _to_base(magnitude, base['base'])
        shown = group_digits(digits, base['group'], ',' if base['base'] == 10 else ' ') if grouped else digits
        result[base['name']] = {
            'value': f"{sign}{shown}",
            'prefixed': f"{sign}{base['prefix']}{digits}",
        }
    return result


def _format_decimal(value: Decimal, precision: int) -> str:
    try:
        text = format(round(value, precision), 'f')
    except InvalidOperation:
        # Too many digits to quantize in the default context
        text = format(value, 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return text or '0'


def convert_byte_size(value: Any, unit: str = 'B', precision: int = 4) -> Dict[str, str]:
    """Convert a size to every decimal and binary unit."""
    if unit not in BYTE_UNITS:
        raise ValueError(f"Unsupported unit: {unit}. Supported: {', '.join(BYTE_UNITS)}")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"Invalid size: {value}")
    if not amount.is_finite():
        raise ValueError(f"Invalid size: {value}")
    if amount < 0:
        raise ValueError("Size cannot be negative")

    total_bytes = amount * BYTE_UNITS[unit]
    return {
        name: _format_decimal(total_bytes / factor, precision)
        for name, factor in BYTE_UNITS.items()
    }
