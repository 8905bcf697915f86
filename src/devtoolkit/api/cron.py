"""
Cron expression parser: human-readable descriptions, field breakdown and the
next execution times of a five-field cron expression.
"""

import logging
from datetime import datetime, timedelta
from typing import Dict, Any, List, Optional, Set

from cron_descriptor import ExpressionDescriptor, Options

logger = logging.getLogger(__name__)

CRON_PRESETS = [
    {"name": "Every minute", "expression": "* * * * *"},
    {"name": "Every 5 minutes", "expression": "*/5 * * * *"},
    {"name": "Every hour", "expression": "0 * * * *"},
    {"name": "Every day at midnight", "expression": "0 0 * * *"},
    {"name": "Every day at noon", "expression": "0 12 * * *"},
    {"name": "Every Monday", "expression": "0 0 * * 1"},
    {"name": "Every weekday at 9am", "expression": "0 9 * * 1-5"},
    {"name": "First day of month", "expression": "0 0 1 * *"},
    {"name": "Every Sunday at 3am", "expression": "0 3 * * 0"},
]

MONTH_NAMES = {name: i + 1 for i, name in enumerate(
    ["JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC"])}
DAY_NAMES = {name: i for i, name in enumerate(["SUN", "MON", "TUE", "WED", "THU", "FRI", "SAT"])}

CRON_FIELDS = [
    {"name": "Minute", "min": 0, "max": 59, "range": "0-59", "special": ", - * /", "names": {}},
    {"name": "Hour", "min": 0, "max": 23, "range": "0-23", "special": ", - * /", "names": {}},
    {"name": "Day of Month", "min": 1, "max": 31, "range": "1-31", "special": ", - * / L W", "names": {}},
    {"name": "Month", "min": 1, "max": 12, "range": "1-12 or JAN-DEC", "special": ", - * /", "names": MONTH_NAMES},
    {"name": "Day of Week", "min": 0, "max": 6, "range": "0-6 or SUN-SAT", "special": ", - * / L #", "names": DAY_NAMES},
]

UNSUPPORTED_TOKENS = ("L", "W", "#")
MAX_ATTEMPTS = 1000


def describe_cron(expression: str) -> str:
    """Describe a cron expression in English using a 24-hour clock."""
    options = Options()
    options.throw_exception_on_parse_error = True
    options.use_24hour_time_format = True
    try:
        return ExpressionDescriptor(expression.strip(), options).get_description()
    except Exception as e:
        raise ValueError(f"Invalid cron expression: {str(e)}")


def _parse_value(token: str, names: Dict[str, int], minimum: int, maximum: int) -> int:
    token = token.strip().upper()
    if token in names:
        return names[token]
    if not token.isdigit():
        raise ValueError(f"Invalid value '{token}'")
    value = int(token)
    if value < minimum or value > maximum:
        raise ValueError(f"Value {value} out of range {minimum}-{maximum}")
    return value


def has_unsupported_tokens(field: str) -> bool:
    upper = field.upper()
    # Strip names first so "WED" and "JUL" do not count as W or L tokens
    for name in list(DAY_NAMES) + list(MONTH_NAMES):
        upper = upper.replace(name, "")
    return any(token in upper for token in UNSUPPORTED_TOKENS)


def expand_field(field: str, minimum: int, maximum: int,
                 names: Optional[Dict[str, int]] = None) -> Set[int]:
    """
    Expand one cron field into the set of values it matches.

    Supports *, ?, single values, names, a-b ranges, */n, a/n and a-b/n steps,
    and comma-separated lists of those. L, W and # match nothing.
    """
    names = names or {}
    if has_unsupported_tokens(field):
        return set()

    # Day of week accepts 7 as Sunday, folded back onto 0 once expanded
    day_of_week = names is DAY_NAMES
    parse_max = 7 if day_of_week else maximum

    values: Set[int] = set()
    for part in field.split(","):
        if not part:
            raise ValueError(f"Empty list item in '{field}'")

        step = 1
        has_step = "/" in part
        if has_step:
            part, step_text = part.split("/", 1)
            if not step_text.isdigit() or int(step_text) == 0:
                raise ValueError(f"Invalid step '{step_text}'")
            step = int(step_text)

        if part in ("*", "?"):
            start, end = minimum, maximum
        elif "-" in part:
            start_text, end_text = part.split("-", 1)
            start = _parse_value(start_text, names, minimum, parse_max)
            end = _parse_value(end_text, names, minimum, parse_max)
            # MON-SUN: a range ending on Sunday runs to 7
            if day_of_week and end == 0 and start > 0:
                end = 7
            if start > end:
                raise ValueError(f"Invalid range '{part}'")
        else:
            start = _parse_value(part, names, minimum, parse_max)
            # A bare start with a step runs to the end of the field
            end = maximum if has_step else start

        values.update(range(start, end + 1, step))

    if day_of_week and 7 in values:
        values.discard(7)
        values.add(0)
    return values


def match_field(field: str, value: int, minimum: int, maximum: int,
                names: Optional[Dict[str, int]] = None) -> bool:
    """Check whether a single time unit value satisfies a cron field."""
    if field == "*":
        return True
    try:
        return value in expand_field(field, minimum, maximum, names)
    except ValueError:
        return False


def _split_expression(expression: str) -> List[str]:
    return expression.strip().split()


def next_runs(expression: str, count: int = 5, start: Optional[datetime] = None) -> List[datetime]:
    """
    Find the next matching minutes by stepping a clock forward one minute at a time.

    Args:
        expression: Five-field cron expression
        count: Number of run times to return
        start: Time to search from, defaults to now

    Returns:
        Up to `count` datetimes found within the first 1000 minutes
    """
    parts = _split_expression(expression)
    if len(parts) != 5:
        return []

    try:
        allowed = [
            expand_field(part, field_def["min"], field_def["max"], field_def["names"])
            for part, field_def in zip(parts, CRON_FIELDS)
        ]
    except ValueError:
        return []

    current = (start or datetime.now()).replace(second=0, microsecond=0)
    runs: List[datetime] = []
    for _ in range(MAX_ATTEMPTS):
        if len(runs) >= count:
            break
        current += timedelta(minutes=1)
        # isoweekday: Monday=1..Sunday=7, cron: Sunday=0
        day_of_week = current.isoweekday() % 7
        if (current.minute in allowed[0] and current.hour in allowed[1]
                and current.day in allowed[2] and current.month in allowed[3]
                and day_of_week in allowed[4]):
            runs.append(current)
    return runs


def field_breakdown(expression: str) -> List[Dict[str, Any]]:
    parts = _split_expression(expression)
    breakdown = []
    for i, field_def in enumerate(CRON_FIELDS):
        entry = {
            "name": field_def["name"],
            "value": parts[i] if i < len(parts) else None,
            "range": field_def["range"],
            "special": field_def["special"],
        }
        if entry["value"] is not None:
            try:
                entry["values"] = sorted(expand_field(entry["value"], field_def["min"], field_def["max"], field_def["names"]))
            except ValueError as e:
                entry["error"] = str(e)
        breakdown.append(entry)
    return breakdown


def parse_cron(expression: str, count: int = 5, start: Optional[datetime] = None) -> Dict[str, Any]:
    """Describe an expression and compute its next run times."""
    if not expression or not expression.strip():
        raise ValueError("Cron expression cannot be empty")

    description = describe_cron(expression)
    parts = _split_expression(expression)
    warnings = []
    if len(parts) != 5:
        warnings.append("Next run times are only calculated for five-field expressions")
    elif any(has_unsupported_tokens(part) for part in parts):
        warnings.append("L, W and # are not supported when calculating next run times")

    runs = next_runs(expression, count, start)
    logger.debug("Parsed cron '%s': %d upcoming runs", expression, len(runs))

    return {
        "expression": expression.strip(),
        "description": description,
        "fields": field_breakdown(expression),
        "next_runs": [run.isoformat() for run in runs],
        "warnings": warnings,
    }
