"""
List sorter and deduplicator.
"""

import re
import math
from functools import cmp_to_key
from typing import Dict, Any, List, Optional

SORT_TYPES = ['alphabetical', 'numerical', 'length', 'natural', 'none']
DIRECTIONS = ['asc', 'desc']

CHUNK_PATTERN = re.compile(r'\d+|\D+')
LEADING_NUMBER = re.compile(r'\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')


def parse_leading_float(text: str) -> Optional[float]:
    """Parse the numeric prefix of a string the way parseFloat does; None if there is none."""
    match = LEADING_NUMBER.match(text)
    if match:
        return float(match.group(0))
    stripped = text.strip()
    for sign in ('', '+', '-'):
        if stripped.startswith(sign + 'Infinity'):
            return -math.inf if sign == '-' else math.inf
    return None


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def natural_compare(a: str, b: str) -> int:
    """Compare strings treating digit runs as numbers, so 'item2' < 'item10'."""
    a_chunks = CHUNK_PATTERN.findall(a)
    b_chunks = CHUNK_PATTERN.findall(b)

    for i in range(max(len(a_chunks), len(b_chunks))):
        a_chunk = a_chunks[i] if i < len(a_chunks) else ''
        b_chunk = b_chunks[i] if i < len(b_chunks) else ''

        if a_chunk.isdecimal() and b_chunk.isdecimal():
            result = _cmp(int(a_chunk), int(b_chunk))
        else:
            result = _cmp(a_chunk.casefold(), b_chunk.casefold())
        if result:
            return result
    return 0


def _numerical_compare(a: str, b: str) -> int:
    a_num = parse_leading_float(a)
    b_num = parse_leading_float(b)
    if a_num is None and b_num is None:
        return _cmp((a.casefold(), a.swapcase()), (b.casefold(), b.swapcase()))
    if a_num is None:
        return 1
    if b_num is None:
        return -1
    return _cmp(a_num, b_num)


def sort_list(items: List[str], sort_type: str = 'alphabetical', direction: str = 'asc',
              case_sensitive: bool = False) -> List[str]:
    if sort_type not in SORT_TYPES:
        raise ValueError(f"Unsupported sort type: {sort_type}. Supported: {', '.join(SORT_TYPES)}")
    if direction not in DIRECTIONS:
        raise ValueError(f"Unsupported sort direction: {direction}. Use asc or desc")

    if sort_type == 'alphabetical':
        if case_sensitive:
            # Lower case sorts before upper case for otherwise equal strings
            result = sorted(items, key=lambda s: (s.casefold(), s.swapcase()))
        else:
            result = sorted(items, key=lambda s: s.casefold())
    elif sort_type == 'numerical':
        result = sorted(items, key=cmp_to_key(_numerical_compare))
    elif sort_type == 'length':
        result = sorted(items, key=len)
    elif sort_type == 'natural':
        result = sorted(items, key=cmp_to_key(natural_compare))
    else:
        result = list(items)

    if direction == 'desc':
        result.reverse()
    return result


def remove_duplicates(items: List[str], case_sensitive: bool = False) -> List[str]:
    """Keep the first occurrence of each item."""
    seen = set()
    result = []
    for item in items:
        key = item if case_sensitive else item.lower()
        if key not in seen:
            seen.add(key)
            result.append(item)
    return result


def process_list(text: str, sort_type: str = 'alphabetical', direction: str = 'asc',
                 case_sensitive: bool = False, dedupe: bool = False) -> Dict[str, Any]:
    """Split text into trimmed non-empty lines, optionally dedupe, then sort."""
    lines = [line.strip() for line in text.split('\n')]
    items = [line for line in lines if line]
    input_count = len(items)

    if dedupe:
        items = remove_duplicates(items, case_sensitive)
    deduped_count = len(items)

    items = sort_list(items, sort_type, direction, case_sensitive)

    return {
        'items': items,
        'output': '\n'.join(items),
        'input_count': input_count,
        'output_count': len(items),
        'duplicates_removed': input_count - deduped_count,
    }
