"""
Network host calls: whois, dig, openssl and curl.

Each call validates its arguments, counts against a rate limit category and
returns the command's raw text output.
"""

import logging

from .base import run_command
from .exceptions import BridgeCommandError
from .rate_limiter import DOMAIN, HTTP
from .validation import (
    validate_domain,
    validate_record_type,
    validate_ip_or_hostname,
    validate_url,
)

logger = logging.getLogger(__name__)

SEO_USER_AGENT = "User-Agent: Mozilla/5.0 (compatible; SEOTools/1.0)"
REDIRECT_MARKER = "---REDIRECT_INFO---"
HTTP_CODE_MARKER = "---HTTP_CODE---"


def whois_lookup(domain: str) -> str:
    validate_domain(domain)
    result = run_command(["whois", domain], category=DOMAIN)
    if not result.success:
        raise BridgeCommandError(f"WHOIS lookup failed: {result.stderr.strip()}")
    if not result.stdout.strip():
        raise BridgeCommandError("No WHOIS data found for this domain")
    return result.stdout


def dns_lookup(domain: str, record_type: str) -> str:
    validate_domain(domain)
    record_type = validate_record_type(record_type)
    result = run_command(["dig", domain, record_type, "+noall", "+answer"], category=DOMAIN)
    if not result.success:
        raise BridgeCommandError(f"DNS lookup failed: {result.stderr.strip()}")
    return result.stdout


def dns_lookup_server(domain: str, record_type: str, server: str) -> str:
    """Query one specific resolver with a short timeout."""
    validate_domain(domain)
    record_type = validate_record_type(record_type)
    validate_ip_or_hostname(server)
    result = run_command(
        ["dig", f"@{server}", domain, record_type, "+noall", "+answer", "+time=3", "+tries=1"],
        category=DOMAIN,
    )
    if not result.success:
        raise BridgeCommandError(f"DNS lookup failed: {result.stderr.strip()}")
    return result.stdout


def ssl_check(domain: str) -> str:
    """Fetch the certificate with s_client and decode it with x509."""
    validate_domain(domain)
    connection = run_command(
        ["openssl", "s_client", "-connect", f"{domain}:443", "-servername", domain],
        category=DOMAIN,
    )
    if not connection.success and not connection.stdout:
        raise BridgeCommandError("Could not connect to server for SSL check")

    decoded = run_command(
        ["openssl", "x509", "-noout", "-text"],
        input_data=connection.stdout.encode('utf-8'),
    )
    if not decoded.success:
        raise BridgeCommandError("SSL check failed: could not parse certificate")
    if not decoded.stdout.strip():
        raise BridgeCommandError("Could not retrieve SSL certificate")
    return decoded.stdout


def http_head_request(url: str) -> str:
    validate_url(url)
    result = run_command(["curl", "-s", "-I", "-L", "--max-time", "10", url], category=HTTP)
    if not result.success:
        raise BridgeCommandError(f"HTTP request failed: {result.stderr.strip()}")
    return result.stdout


def http_get_json(url: str) -> str:
    """GET a JSON document; HTTP error bodies are returned as-is."""
    validate_url(url)
    result = run_command(
        ["curl", "-s", "-L", "--max-time", "60", "-H", "Accept: application/json",
         "-w", f"\n{HTTP_CODE_MARKER}%{{http_code}}", url],
        category=HTTP,
        timeout=65,
    )
    if not result.success:
        if not result.stderr.strip():
            raise BridgeCommandError("HTTP request failed: Connection timed out or refused")
        raise BridgeCommandError(f"HTTP request failed: {result.stderr.strip()}")

    body, marker, _code = result.stdout.rpartition(HTTP_CODE_MARKER)
    return body.rstrip('\n') if marker else result.stdout


def http_get_html(url: str) -> str:
    validate_url(url)
    result = run_command(
        ["curl", "-s", "-L", "--max-time", "15", "-H", SEO_USER_AGENT, url],
        category=HTTP,
    )
    if not result.success:
        raise BridgeCommandError(f"HTTP request failed: {result.stderr.strip()}")
    return result.stdout


def http_follow_redirects(url: str) -> str:
    validate_url(url)
    result = run_command(
        ["curl", "-s", "-I", "-L", "--max-redirs", "10", "--max-time", "15",
         "-w", f"\n{REDIRECT_MARKER}\n%{{url_effective}}\n%{{http_code}}\n%{{redirect_url}}\n", url],
        category=HTTP,
    )
    if not result.success:
        raise BridgeCommandError(f"HTTP request failed: {result.stderr.strip()}")
    return result.stdout
