"""
Argument validation for host commands.

Everything that reaches a command line goes through one of these checks first.
"""

import re
import ipaddress
from urllib.parse import urlsplit

from .exceptions import BridgeValidationError

DOMAIN_PATTERN = re.compile(
    r'[a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?(\.[a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?)*'
)
IPV4_PATTERN = re.compile(r'(\d{1,3}\.){3}\d{1,3}')
IPV6_PATTERN = re.compile(r'([0-9a-fA-F]{0,4}:){2,7}[0-9a-fA-F]{0,4}')

FORBIDDEN_CHARS = set('|&;$`(){}[]<>!\\"\'\n\r\t ')

ALLOWED_RECORD_TYPES = [
    "A", "AAAA", "CNAME", "MX", "TXT", "NS", "SOA", "PTR", "SRV", "CAA",
    "DNSKEY", "DS", "NAPTR", "HINFO", "ANY",
]

# Formula, cask and tap names: "name", "user/repo", "user/repo/name", "name@1.2"
PACKAGE_NAME_PATTERN = re.compile(r'[A-Za-z0-9][A-Za-z0-9@+._\-]*(/[A-Za-z0-9][A-Za-z0-9@+._\-]*){0,2}')
TAP_NAME_PATTERN = re.compile(r'[A-Za-z0-9][A-Za-z0-9_\-]*/[A-Za-z0-9][A-Za-z0-9._\-]*')


def validate_domain(domain: str) -> str:
    if not domain or len(domain) > 253:
        raise BridgeValidationError("Invalid domain: must be 1-253 characters")
    if any(c in FORBIDDEN_CHARS for c in domain):
        raise BridgeValidationError("Invalid domain: contains forbidden characters")
    if not DOMAIN_PATTERN.fullmatch(domain):
        raise BridgeValidationError("Invalid domain: contains invalid characters or format")
    return domain


def validate_record_type(record_type: str) -> str:
    upper = (record_type or '').upper()
    if upper not in ALLOWED_RECORD_TYPES:
        raise BridgeValidationError(
            f"Invalid record type: {record_type}. Allowed: {', '.join(ALLOWED_RECORD_TYPES)}"
        )
    return upper


def validate_ip_or_hostname(server: str) -> str:
    """DNS servers may be IPv4, IPv6, or a hostname."""
    if server and (IPV4_PATTERN.fullmatch(server) or IPV6_PATTERN.fullmatch(server)):
        return server
    return validate_domain(server)


def _is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
        return True
    except ValueError:
        return False


def validate_url(url: str) -> str:
    if not url or not (url.startswith('http://') or url.startswith('https://')):
        raise BridgeValidationError("URL must start with http:// or https://")
    if any(c in url for c in '\n\r\t '):
        raise BridgeValidationError("Invalid URL: contains whitespace")

    try:
        host = urlsplit(url).hostname
    except ValueError as e:
        raise BridgeValidationError(f"Invalid URL: {str(e)}")

    if host and host != 'localhost' and not _is_ip_literal(host):
        validate_domain(host)
    return url


def validate_package_name(name: str) -> str:
    if not name or len(name) > 200 or not PACKAGE_NAME_PATTERN.fullmatch(name):
        raise BridgeValidationError(f"Invalid package name: {name!r}")
    return name


def validate_tap_name(name: str) -> str:
    if not name or not TAP_NAME_PATTERN.fullmatch(name):
        raise BridgeValidationError(f"Invalid tap name: {name!r}. Expected user/repo")
    return name
