"""
Data format converter API.
Handles conversion between JSON and YAML, and between CSV and JSON.
"""

import json
import yaml
from typing import Dict, Any, List


# Create a custom YAML loader that doesn't auto-convert dates to date objects
class StringLoader(yaml.SafeLoader):
    """Custom YAML loader that treats dates as strings."""
    pass

# Remove the implicit timestamp resolver so dates stay as strings
StringLoader.yaml_implicit_resolvers = {
    key: [resolver for resolver in resolvers if resolver[0] != 'tag:yaml.org,2002:timestamp']
    for key, resolvers in StringLoader.yaml_implicit_resolvers.items()
}

FORMATS = ['json', 'yaml']


class FormatConverter:
    """Format converter built on json and PyYAML."""

    def __init__(self):
        self.yaml_loader = StringLoader

    def detect_format(self, data: str) -> str:
        """Detect whether data is JSON or YAML."""
        data = data.strip()
        if not data:
            return 'unknown'

        try:
            json.loads(data)
            return 'json'
        except json.JSONDecodeError:
            pass

        # YAML accepts almost any text, so require some structure
        try:
            parsed = yaml.load(data, Loader=self.yaml_loader)
            if isinstance(parsed, (dict, list)):
                return 'yaml'
        except yaml.YAMLError:
            pass

        return 'unknown'

    def json_to_yaml(self, json_str: str) -> str:
        try:
            data = json.loads(json_str)
            return yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ValueError(f"JSON to YAML conversion failed: {str(e)}")

    def yaml_to_json(self, yaml_str: str, indent: int = 2) -> str:
        try:
            data = yaml.load(yaml_str, Loader=self.yaml_loader)
            return json.dumps(data, indent=indent, ensure_ascii=False)
        except (yaml.YAMLError, TypeError) as e:
            raise ValueError(f"YAML to JSON conversion failed: {str(e)}")

    def format_json(self, json_str: str) -> str:
        try:
            data = json.loads(json_str)
            return json.dumps(data, indent=2, ensure_ascii=False)
        except json.JSONDecodeError as e:
            raise ValueError(f"JSON formatting failed: {str(e)}")

    def format_yaml(self, yaml_str: str) -> str:
        try:
            data = yaml.load(yaml_str, Loader=self.yaml_loader)
            return yaml.dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)
        except yaml.YAMLError as e:
            raise ValueError(f"YAML formatting failed: {str(e)}")


converter = FormatConverter()


def convert_format(input_data: str, input_format: str, output_format: str) -> Dict[str, Any]:
    """
    Convert data between formats.

    Args:
        input_data: The input data string
        input_format: Source format ('json', 'yaml', 'auto')
        output_format: Target format ('json', 'yaml')

    Returns:
        Dict with 'success', 'result', and optional 'error' keys
    """
    try:
        if input_format == 'auto':
            input_format = converter.detect_format(input_data)
            if input_format == 'unknown':
                return {
                    'success': False,
                    'error': 'Could not auto-detect input format'
                }

        if input_format not in FORMATS or output_format not in FORMATS:
            return {
                'success': False,
                'error': f'Invalid format. Supported: {FORMATS}'
            }

        # Same format means prettify
        if input_format == output_format:
            if input_format == 'json':
                result = converter.format_json(input_data)
            else:
                result = converter.format_yaml(input_data)

            return {
                'success': True,
                'result': result,
                'input_format': input_format,
                'output_format': output_format,
                'operation': 'format'
            }

        conversion_map = {
            ('json', 'yaml'): converter.json_to_yaml,
            ('yaml', 'json'): converter.yaml_to_json,
        }
        result = conversion_map[(input_format, output_format)](input_data)

        return {
            'success': True,
            'result': result,
            'input_format': input_format,
            'output_format': output_format,
            'operation': 'convert'
        }

    except ValueError as e:
        return {
            'success': False,
            'error': str(e)
        }


def validate_format(data: str, format_type: str) -> Dict[str, Any]:
    """
    Validate that data is in the specified format.

    Args:
        data: The data string to validate
        format_type: Expected format ('json', 'yaml')

    Returns:
        Dict with 'valid', 'error' (if not valid), and 'format'
    """
    try:
        if format_type == 'json':
            json.loads(data)
        elif format_type == 'yaml':
            yaml.load(data, Loader=StringLoader)
        else:
            return {'valid': False, 'error': f'Unsupported format: {format_type}'}
        return {'valid': True, 'format': format_type}

    except (json.JSONDecodeError, yaml.YAMLError) as e:
        return {
            'valid': False,
            'error': f'Invalid {format_type}: {str(e)}',
            'format': format_type
        }


# CSV

def parse_csv_row(row: str) -> List[str]:
    """Split one CSV line, honouring double quotes and "" escapes."""
    cells = []
    current = []
    in_quotes = False
    i = 0

    while i < len(row):
        char = row[i]
        if char == '"':
            if in_quotes and i + 1 < len(row) and row[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == ',' and not in_quotes:
            cells.append(''.join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    cells.append(''.join(current).strip())
    return cells


def parse_csv(text: str) -> List[Dict[str, str]]:
    """Parse CSV with a header row into a list of row dicts."""
    lines = text.strip().split('\n')
    if not lines or not lines[0].strip():
        return []

    headers = parse_csv_row(lines[0])
    rows = []
    for line in lines[1:]:
        if not line.strip():
            continue
        values = parse_csv_row(line)
        rows.append({
            header: values[i] if i < len(values) else ''
            for i, header in enumerate(headers)
        })
    return rows


def csv_to_json(text: str, indent: int = 2) -> str:
    return json.dumps(parse_csv(text), indent=indent, ensure_ascii=False)


def _csv_value(value: Any) -> str:
    if value is None:
        text = ''
    elif isinstance(value, bool):
        text = 'true' if value else 'false'
    elif isinstance(value, float) and value.is_integer():
        text = str(int(value))
    elif isinstance(value, (dict, list)):
        text = json.dumps(value, ensure_ascii=False)
    else:
        text = str(value)

    if ',' in text or '"' in text or '\n' in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def json_to_csv(text: str) -> str:
    """Convert a JSON array of objects to CSV; columns come from the first object."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {str(e)}")

    if not isinstance(data, list) or not data or not isinstance(data[0], dict):
        raise ValueError("Input must be a non-empty array of objects")

    headers = list(data[0].keys())
    rows = [','.join(_csv_value(h) for h in headers)]
    for item in data:
        if not isinstance(item, dict):
            raise ValueError("Input must be a non-empty array of objects")
        rows.append(','.join(_csv_value(item.get(h)) for h in headers))
    return '\n'.join(rows)
