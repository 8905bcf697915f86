"""
Network reference tools: URL parser, HTTP status codes, user agent parser
and IP address analyzer.
"""

import ipaddress
from urllib.parse import urlsplit, parse_qsl
from typing import Dict, Any, List, Optional

from user_agents import parse as parse_ua

HTTP_STATUSES = {
    100: ('Continue', 'The server has received the request headers and the client should proceed to send the body.'),
    101: ('Switching Protocols', 'The requester has asked the server to switch protocols.'),
    200: ('OK', 'Standard response for successful HTTP requests.'),
    201: ('Created', 'The request has been fulfilled and a new resource has been created.'),
    202: ('Accepted', 'The request has been accepted for processing, but processing has not completed.'),
    204: ('No Content', 'The server successfully processed the request and is not returning any content.'),
    206: ('Partial Content', 'The server is delivering only part of the resource due to a range header.'),
    301: ('Moved Permanently', 'This and all future requests should be directed to the given URI.'),
    302: ('Found', 'The resource was found at a different URI temporarily.'),
    303: ('See Other', 'The response can be found under another URI using a GET method.'),
    304: ('Not Modified', 'The resource has not been modified since the version specified by the request headers.'),
    307: ('Temporary Redirect', 'The request should be repeated with another URI, keeping the method.'),
    308: ('Permanent Redirect', 'The request and all future requests should be repeated using another URI.'),
    400: ('Bad Request', 'The server cannot process the request due to a client error.'),
    401: ('Unauthorized', 'Authentication is required and has failed or has not been provided.'),
    403: ('Forbidden', 'The request was valid, but the server is refusing action.'),
    404: ('Not Found', 'The requested resource could not be found.'),
    405: ('Method Not Allowed', 'The request method is not supported for the requested resource.'),
    408: ('Request Timeout', 'The server timed out waiting for the request.'),
    409: ('Conflict', 'The request could not be processed because of a conflict in the current state of the resource.'),
    410: ('Gone', 'The resource is no longer available and will not be available again.'),
    413: ('Payload Too Large', 'The request is larger than the server is willing or able to process.'),
    415: ('Unsupported Media Type', 'The request entity has a media type which the server does not support.'),
    418: ("I'm a teapot", 'The server refuses to brew coffee because it is a teapot.'),
    422: ('Unprocessable Entity', 'The request was well-formed but contained semantic errors.'),
    429: ('Too Many Requests', 'The user has sent too many requests in a given amount of time.'),
    451: ('Unavailable For Legal Reasons', 'The resource is unavailable for legal reasons.'),
    500: ('Internal Server Error', 'A generic error message when an unexpected condition was encountered.'),
    501: ('Not Implemented', 'The server does not recognize the request method or lacks the ability to fulfil it.'),
    502: ('Bad Gateway', 'The server was acting as a gateway and received an invalid response from upstream.'),
    503: ('Service Unavailable', 'The server is currently unavailable (overloaded or down for maintenance).'),
    504: ('Gateway Timeout', 'The server was acting as a gateway and did not receive a timely response.'),
}

STATUS_CATEGORIES = {
    1: 'Informational',
    2: 'Success',
    3: 'Redirection',
    4: 'Client Error',
    5: 'Server Error',
}


# URL parser

def parse_url(text: str) -> Dict[str, Any]:
    text = (text or '').strip()
    if not text:
        raise ValueError("URL cannot be empty")

    try:
        parts = urlsplit(text)
        port = parts.port
    except ValueError as e:
        raise ValueError(f"Invalid URL: {str(e)}")
    if not parts.scheme or not parts.netloc:
        raise ValueError("Invalid URL: expected scheme://host/...")

    hostname = parts.hostname or ''
    host = hostname if port is None else f"{hostname}:{port}"
    return {
        'protocol': f"{parts.scheme}:",
        'hostname': hostname,
        'port': str(port) if port is not None else '',
        'pathname': parts.path or '/',
        'search': f"?{parts.query}" if parts.query else '',
        'hash': f"#{parts.fragment}" if parts.fragment else '',
        'origin': f"{parts.scheme}://{host}",
        'username': parts.username or '',
        'password': parts.password or '',
        'params': [{'key': k, 'value': v} for k, v in parse_qsl(parts.query, keep_blank_values=True)],
    }


# HTTP status codes

def _status_entry(code: int) -> Dict[str, Any]:
    name, description = HTTP_STATUSES[code]
    return {
        'code': code,
        'name': name,
        'description': description,
        'category': STATUS_CATEGORIES[code // 100],
    }


def http_status(code: int) -> Optional[Dict[str, Any]]:
    if code not in HTTP_STATUSES:
        return None
    return _status_entry(code)


def search_http_statuses(query: str = '') -> Dict[str, List[Dict[str, Any]]]:
    """Statuses whose code, name or description contain the query, grouped by category."""
    query = (query or '').strip().lower()
    grouped: Dict[str, List[Dict[str, Any]]] = {}
    for code in sorted(HTTP_STATUSES):
        entry = _status_entry(code)
        haystack = f"{code} {entry['name']} {entry['description']}".lower()
        if query and query not in haystack:
            continue
        grouped.setdefault(entry['category'], []).append(entry)
    return grouped


# User agent parser

def parse_user_agent(text: str) -> Dict[str, Any]:
    text = (text or '').strip()
    if not text:
        raise ValueError("User agent cannot be empty")

    ua = parse_ua(text)
    if ua.is_bot:
        device_type = 'bot'
    elif ua.is_tablet:
        device_type = 'tablet'
    elif ua.is_mobile:
        device_type = 'mobile'
    elif ua.is_pc:
        device_type = 'desktop'
    else:
        device_type = 'unknown'

    return {
        'browser': {'name': ua.browser.family, 'version': ua.browser.version_string},
        'os': {'name': ua.os.family, 'version': ua.os.version_string},
        'device': {
            'vendor': ua.device.brand,
            'model': ua.device.model,
            'type': device_type,
        },
        'engine': _engine(text),
        'is_mobile': ua.is_mobile,
        'is_tablet': ua.is_tablet,
        'is_pc': ua.is_pc,
        'is_bot': ua.is_bot,
    }


def _engine(text: str) -> str:
    if 'Gecko/' in text and 'like Gecko' not in text:
        return 'Gecko'
    if 'Trident/' in text:
        return 'Trident'
    if 'Chrome/' in text or 'Chromium/' in text:
        return 'Blink'
    if 'AppleWebKit/' in text:
        return 'WebKit'
    return 'Unknown'


# IP analyzer

def _ipv4_class(address: ipaddress.IPv4Address) -> str:
    first = int(address) >> 24
    if first < 128:
        return 'A'
    if first < 192:
        return 'B'
    if first < 224:
        return 'C'
    if first < 240:
        return 'D (Multicast)'
    return 'E (Reserved)'


def _binary(address) -> str:
    if address.version == 4:
        return '.'.join(f"{octet:08b}" for octet in address.packed)
    value = int(address)
    groups = [(value >> shift) & 0xFFFF for shift in range(112, -1, -16)]
    return ':'.join(f"{group:016b}" for group in groups)


def analyze_ip(text: str) -> Dict[str, Any]:
    """Describe an IPv4 or IPv6 address, with network details when a /prefix is given."""
    text = (text or '').strip()
    if not text:
        raise ValueError("IP address cannot be empty")

    try:
        if '/' in text:
            interface = ipaddress.ip_interface(text)
            address = interface.ip
            network = interface.network
        else:
            address = ipaddress.ip_address(text)
            network = None
    except ValueError:
        raise ValueError(f"Invalid IP address: {text}")

    result: Dict[str, Any] = {
        'address': str(address),
        'version': address.version,
        'binary': _binary(address),
        'decimal': str(int(address)),
        'is_private': address.is_private,
        'is_loopback': address.is_loopback,
        'is_link_local': address.is_link_local,
        'is_multicast': address.is_multicast,
    }
    if address.version == 4:
        result['class'] = _ipv4_class(address)
    else:
        result['compressed'] = address.compressed
        result['exploded'] = address.exploded

    if network is not None:
        hosts = network.num_addresses
        if address.version == 4 and network.prefixlen < 31:
            hosts -= 2
        result['network'] = {
            'cidr': str(network),
            'network_address': str(network.network_address),
            'broadcast_address': str(network.broadcast_address),
            'netmask': str(network.netmask),
            'prefix_length': network.prefixlen,
            'total_addresses': network.num_addresses,
            'usable_hosts': hosts,
        }
    return result
