"""
Domain tools: DNS, propagation, WHOIS, SSL, HTTP headers, redirects, dead
links, availability, IP lookups and favicons.

Every tool runs its host command through the bridge and parses the raw text
output here.
"""

import re
import json
import math
import logging
from datetime import datetime, timezone
from urllib.parse import urlsplit, urljoin
from typing import Dict, Any, List, Optional, Set

from bs4 import BeautifulSoup

from ..bridge import domain as host
from ..bridge.exceptions import BridgeError
from ..config.settings import get_section

logger = logging.getLogger(__name__)

DNS_SERVERS = [
    {'name': 'Google', 'ip': '8.8.8.8', 'location': 'Global'},
    {'name': 'Cloudflare', 'ip': '1.1.1.1', 'location': 'Global'},
    {'name': 'OpenDNS', 'ip': '208.67.222.222', 'location': 'Global'},
    {'name': 'Quad9', 'ip': '9.9.9.9', 'location': 'Global'},
    {'name': 'Level3', 'ip': '4.2.2.1', 'location': 'US'},
    {'name': 'Comodo', 'ip': '8.26.56.26', 'location': 'Global'},
    {'name': 'Verisign', 'ip': '64.6.64.6', 'location': 'US'},
    {'name': 'DNS.Watch', 'ip': '84.200.69.80', 'location': 'Germany'},
]

POPULAR_TLDS = ['.com', '.net', '.org', '.io', '.co', '.dev', '.app', '.ai', '.xyz', '.tech']
AVAILABLE_MARKERS = ['no match', 'not found', 'no data found', 'status: free']

WHOIS_FIELDS = {
    'domain_name': r'Domain Name:\s*(.+)',
    'registrar': r'Registrar:\s*(.+)',
    'registrar_url': r'Registrar URL:\s*(.+)',
    'creation_date': r'Creation Date:\s*(.+)',
    'expiry_date': r'(?:Registry Expiry Date|Expiration Date):\s*(.+)',
    'updated_date': r'Updated Date:\s*(.+)',
}

SSL_FIELDS = {
    'issuer': r'Issuer:\s*(.+)',
    'subject': r'Subject:\s*(.+)',
    'valid_from': r'Not Before\s*:\s*(.+)',
    'valid_to': r'Not After\s*:\s*(.+)',
}
SSL_DATE_FORMAT = '%b %d %H:%M:%S %Y %Z'

SECURITY_HEADERS = [
    'strict-transport-security', 'content-security-policy', 'x-frame-options',
    'x-content-type-options', 'x-xss-protection', 'referrer-policy',
    'permissions-policy', 'feature-policy', 'cross-origin-opener-policy',
    'cross-origin-embedder-policy', 'cross-origin-resource-policy',
]
CACHING_HEADERS = ['cache-control', 'expires', 'etag', 'last-modified', 'age', 'vary']
CONTENT_HEADERS = ['content-type', 'content-length', 'content-encoding', 'content-language', 'content-disposition']
CORS_HEADERS = [
    'access-control-allow-origin', 'access-control-allow-methods',
    'access-control-allow-headers', 'access-control-expose-headers',
]
CATEGORY_ORDER = ['security', 'caching', 'content', 'cors', 'other']

STATUS_LINE = re.compile(r'^HTTP/[\d.]+ (\d+)\s*(.*)$')
STATUS_CODE = re.compile(r'HTTP/[\d.]+ (\d{3})')
LOCATION_HEADER = re.compile(r'location:\s*([^\r\n]+)', re.IGNORECASE)

DEFAULT_CRAWL_DEPTH = 2


def clean_domain(text: str) -> str:
    """Strip scheme, path and port from user input."""
    domain = (text or '').strip()
    domain = re.sub(r'^[a-zA-Z][a-zA-Z0-9+.\-]*://', '', domain)
    domain = domain.split('/')[0].split('?')[0].split('#')[0]
    return domain.split(':')[0].lower()


def _ensure_scheme(url: str) -> str:
    url = (url or '').strip()
    if not url:
        raise ValueError("URL cannot be empty")
    if not url.startswith(('http://', 'https://')):
        url = 'https://' + url
    return url


# DNS

def parse_dns_output(output: str, record_type: str) -> List[Dict[str, Any]]:
    """Parse `dig +noall +answer` lines: name TTL class type value."""
    records = []
    for line in output.split('\n'):
        if line.startswith(';') or not line.strip():
            continue
        parts = line.split()
        if len(parts) < 4:
            continue
        name, ttl, _cls, rtype = parts[:4]
        values = parts[4:]
        if rtype != record_type and record_type != 'ANY':
            continue

        record: Dict[str, Any] = {
            'type': rtype,
            'name': name,
            'value': ' '.join(values),
            'ttl': int(ttl) if ttl.isdigit() else None,
        }
        if rtype == 'MX' and len(values) >= 2 and values[0].isdigit():
            record['priority'] = int(values[0])
            record['value'] = ' '.join(values[1:])
        records.append(record)
    return records


def dns_lookup(domain: str, record_type: str = 'A') -> Dict[str, Any]:
    domain = clean_domain(domain)
    record_type = (record_type or 'A').upper()
    output = host.dns_lookup(domain, record_type)
    records = parse_dns_output(output, record_type)
    return {'domain': domain, 'record_type': record_type, 'records': records, 'raw': output}


def parse_propagation_output(output: str, record_type: str) -> Optional[str]:
    values = []
    for line in output.split('\n'):
        if line.startswith(';') or not line.strip():
            continue
        parts = line.split()
        if len(parts) >= 5 and parts[3] == record_type:
            if record_type == 'MX':
                values.append(f"{parts[4]} {parts[5] if len(parts) > 5 else ''}")
            else:
                values.append(parts[4])
    return ', '.join(values) if values else None


def dns_propagation(domain: str, record_type: str = 'A',
                    servers: Optional[List[Dict[str, str]]] = None) -> Dict[str, Any]:
    """Ask every public resolver for the record and compare the answers."""
    domain = clean_domain(domain)
    record_type = (record_type or 'A').upper()
    servers = servers or DNS_SERVERS

    results = []
    for server in servers:
        entry = dict(server)
        try:
            output = host.dns_lookup_server(domain, record_type, server['ip'])
            entry['status'] = 'success'
            entry['result'] = parse_propagation_output(output, record_type)
        except BridgeError as e:
            logger.info("Propagation check via %s failed: %s", server['ip'], e)
            entry['status'] = 'error'
            entry['result'] = None
            entry['error'] = str(e)
        results.append(entry)

    answered = [r for r in results if r['status'] == 'success' and r['result']]
    unique = {r['result'] for r in answered}
    return {
        'domain': domain,
        'record_type': record_type,
        'results': results,
        'success_count': len(answered),
        'unique_results': sorted(unique),
        'fully_propagated': len(unique) == 1 and len(answered) == len(results),
    }


# WHOIS

def parse_whois(output: str) -> Dict[str, Any]:
    parsed: Dict[str, Any] = {}
    for key, pattern in WHOIS_FIELDS.items():
        match = re.search(pattern, output, re.IGNORECASE)
        parsed[key] = match.group(1).strip() if match else None

    parsed['status'] = [m.strip() for m in re.findall(r'Domain Status:\s*(.+)', output, re.IGNORECASE)]
    name_servers = []
    for match in re.findall(r'Name Server:\s*(.+)', output, re.IGNORECASE):
        server = match.strip().lower()
        if server and server not in name_servers:
            name_servers.append(server)
    parsed['name_servers'] = name_servers
    return parsed


def whois_lookup(domain: str) -> Dict[str, Any]:
    domain = clean_domain(domain)
    output = host.whois_lookup(domain)
    result = parse_whois(output)
    result['raw'] = output
    return result


# SSL

def parse_ssl_output(output: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    info: Dict[str, Any] = {}
    for key, pattern in SSL_FIELDS.items():
        match = re.search(pattern, output)
        info[key] = match.group(1).strip() if match else None

    serial = re.search(r'Serial Number:\s*\n?\s*([0-9a-fA-F:]+(?: \(0x[0-9a-fA-F]+\))?)', output)
    info['serial_number'] = serial.group(1).strip() if serial else None

    sans = re.search(r'X509v3 Subject Alternative Name:.*?\n\s*(.+)', output)
    info['sans'] = [
        name.strip().replace('DNS:', '')
        for name in sans.group(1).split(',')
    ] if sans else []

    info['days_remaining'] = None
    info['is_valid'] = False
    if info['valid_to']:
        try:
            expires = datetime.strptime(info['valid_to'], SSL_DATE_FORMAT).replace(tzinfo=timezone.utc)
        except ValueError:
            logger.warning("Unrecognised certificate date: %s", info['valid_to'])
        else:
            now = now or datetime.now(timezone.utc)
            days = math.ceil((expires - now).total_seconds() / 86400)
            info['days_remaining'] = days
            info['is_valid'] = days > 0
    return info


def ssl_check(domain: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    domain = clean_domain(domain)
    output = host.ssl_check(domain)
    result = parse_ssl_output(output, now)
    result['domain'] = domain
    return result


# HTTP headers

def categorize_header(name: str) -> str:
    lower = name.lower()
    if any(h in lower for h in SECURITY_HEADERS):
        return 'security'
    if lower in CACHING_HEADERS:
        return 'caching'
    if lower in CONTENT_HEADERS:
        return 'content'
    if any(h in lower for h in CORS_HEADERS):
        return 'cors'
    return 'other'


def parse_headers(output: str) -> Dict[str, Any]:
    """Parse curl -I output; with redirects only the last response is kept."""
    status_code = None
    headers: List[Dict[str, str]] = []
    for line in output.split('\n'):
        line = line.strip()
        if not line:
            continue
        status = STATUS_LINE.match(line)
        if status:
            status_code = int(status.group(1))
            headers = []
            continue
        if ':' in line:
            name, value = line.split(':', 1)
            headers.append({
                'name': name.strip(),
                'value': value.strip(),
                'category': categorize_header(name.strip()),
            })

    headers.sort(key=lambda h: CATEGORY_ORDER.index(h['category']))
    return {'status_code': status_code, 'headers': headers}


def security_checks(headers: List[Dict[str, str]]) -> List[Dict[str, Any]]:
    present = {h['name'].lower(): h['value'] for h in headers}
    csp = present.get('content-security-policy', '')
    return [
        {
            'name': 'HSTS',
            'passed': 'strict-transport-security' in present,
            'description': 'Strict-Transport-Security forces HTTPS connections',
        },
        {
            'name': 'Clickjacking Protection',
            'passed': 'x-frame-options' in present or 'frame-ancestors' in csp,
            'description': 'X-Frame-Options or CSP frame-ancestors prevents framing',
        },
        {
            'name': 'MIME Sniffing Protection',
            'passed': present.get('x-content-type-options', '').lower() == 'nosniff',
            'description': 'X-Content-Type-Options: nosniff prevents MIME type sniffing',
        },
        {
            'name': 'Content Security Policy',
            'passed': 'content-security-policy' in present,
            'description': 'Content-Security-Policy restricts resource loading',
        },
        {
            'name': 'Referrer Policy',
            'passed': 'referrer-policy' in present,
            'description': 'Referrer-Policy controls referrer information',
        },
    ]


def inspect_headers(url: str) -> Dict[str, Any]:
    url = _ensure_scheme(url)
    output = host.http_head_request(url)
    result = parse_headers(output)
    result['url'] = url
    result['security_checks'] = security_checks(result['headers'])
    result['security_score'] = sum(1 for check in result['security_checks'] if check['passed'])
    return result


# Redirects

def _resolve_location(current_url: str, location: str) -> str:
    if location.startswith(('http://', 'https://')):
        return location
    parts = urlsplit(current_url)
    origin = f"{parts.scheme}://{parts.netloc}"
    if location.startswith('/'):
        return origin + location
    return origin + '/' + location


def parse_redirects(output: str, start_url: str) -> List[Dict[str, Any]]:
    headers_part = output.split(host.REDIRECT_MARKER)[0]
    hops = []
    current_url = start_url

    for response in re.split(r'(?=HTTP/)', headers_part):
        response = response.strip()
        if not response:
            continue
        status = STATUS_LINE.match(response.split('\n')[0].strip())
        if not status:
            continue
        status_code = int(status.group(1))
        location = re.search(r'^location:\s*(.+)$', response, re.IGNORECASE | re.MULTILINE)
        location = location.group(1).strip() if location else None

        hops.append({
            'url': current_url,
            'status_code': status_code,
            'status_text': status.group(2).strip(),
            'location': location,
        })
        if location and 300 <= status_code < 400:
            current_url = _resolve_location(current_url, location)
    return hops


def track_redirects(url: str) -> Dict[str, Any]:
    url = _ensure_scheme(url)
    output = host.http_follow_redirects(url)
    hops = parse_redirects(output, url)
    return {
        'url': url,
        'hops': hops,
        'redirect_count': sum(1 for hop in hops if 300 <= hop['status_code'] < 400),
        'final_url': hops[-1]['url'] if hops else url,
        'final_status': hops[-1]['status_code'] if hops else None,
    }


# Dead links

def normalize_link(base_url: str, link: str) -> Optional[str]:
    link = link.strip()
    if link.startswith('//'):
        link = 'https:' + link
    try:
        normalized = urljoin(base_url, link)
    except ValueError:
        return None
    normalized = normalized.split('#')[0]
    if not normalized.startswith(('http://', 'https://')):
        return None
    return normalized


def is_internal_link(base_url: str, link_url: str) -> bool:
    return urlsplit(base_url).hostname == urlsplit(link_url).hostname


def extract_links(html: str, base_url: str) -> List[Dict[str, str]]:
    soup = BeautifulSoup(html, 'html.parser')
    links = []
    for anchor in soup.select('a[href]'):
        href = anchor.get('href', '')
        if not href:
            continue
        url = normalize_link(base_url, href)
        if not url:
            continue
        links.append({'url': url, 'anchor_text': anchor.get_text(strip=True) or href})
    return links


class DeadLinkCrawler:
    """
    Sequential crawler that checks every link once and recurses into
    successful internal pages while the depth allows.

    Checked links and crawled pages are tracked separately, so a page reached
    first as a link can still be crawled.
    """

    def __init__(self, start_url: str, depth: int = DEFAULT_CRAWL_DEPTH,
                 max_depth: int = 5, max_links: int = 200):
        self.start_url = start_url
        self.depth = max(1, min(max_depth, depth))
        self.max_links = max_links
        self.checked_links: Set[str] = set()
        self.crawled_pages: Set[str] = set()
        self.results: List[Dict[str, Any]] = []
        self.truncated = False

    def check_link(self, url: str, anchor_text: str) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            'url': url,
            'anchor_text': anchor_text,
            'status': 'error',
            'status_code': None,
            'error': None,
            'redirect_url': None,
            'is_internal': is_internal_link(self.start_url, url),
        }
        try:
            headers = host.http_head_request(url)
        except BridgeError as e:
            result['error'] = str(e)
            return result

        code = STATUS_CODE.search(headers)
        status_code = int(code.group(1)) if code else None
        result['status_code'] = status_code
        if status_code and 200 <= status_code < 300:
            result['status'] = 'success'
        elif status_code and 300 <= status_code < 400:
            location = LOCATION_HEADER.search(headers)
            result['status'] = 'redirect'
            result['redirect_url'] = location.group(1).strip() if location else None
        else:
            result['error'] = f"HTTP {status_code}" if status_code else 'Unknown status'
        return result

    def crawl(self, page_url: str, current_depth: int = 1):
        if current_depth > self.depth or page_url in self.crawled_pages:
            return
        self.crawled_pages.add(page_url)

        html = host.http_get_html(page_url)
        for link in extract_links(html, page_url):
            if link['url'] in self.checked_links:
                continue
            if len(self.checked_links) >= self.max_links:
                self.truncated = True
                return
            self.checked_links.add(link['url'])

            result = self.check_link(link['url'], link['anchor_text'])
            self.results.append(result)
            if result['status'] == 'success' and result['is_internal'] and current_depth < self.depth:
                try:
                    self.crawl(link['url'], current_depth + 1)
                except BridgeError as e:
                    logger.info("Could not crawl %s: %s", link['url'], e)


def check_dead_links(url: str, depth: int = DEFAULT_CRAWL_DEPTH) -> Dict[str, Any]:
    url = _ensure_scheme(url)
    crawler_config = get_section('crawler')
    crawler = DeadLinkCrawler(
        url,
        depth=int(depth),
        max_depth=int(crawler_config.get('max_depth', 5)),
        max_links=int(crawler_config.get('max_links', 200)),
    )
    crawler.crawl(url)

    summary = {'total': len(crawler.results), 'success': 0, 'redirect': 0, 'error': 0}
    for result in crawler.results:
        summary[result['status']] += 1

    return {
        'url': url,
        'depth': crawler.depth,
        'links': crawler.results,
        'summary': summary,
        'pages_crawled': len(crawler.crawled_pages),
        'truncated': crawler.truncated,
    }


# Availability

def normalize_name(name: str) -> str:
    name = re.sub(r'\s+', '-', (name or '').strip().lower())
    return re.sub(r'[^a-z0-9-]', '', name)


def is_available(whois_text: str) -> bool:
    lower = whois_text.lower()
    return any(marker in lower for marker in AVAILABLE_MARKERS)


def check_availability(name: str, custom_tld: Optional[str] = None) -> Dict[str, Any]:
    clean_name = normalize_name(name)
    if not clean_name:
        raise ValueError("Enter a domain name to check")

    tlds = list(POPULAR_TLDS)
    if custom_tld and custom_tld.strip():
        tld = custom_tld.strip().lower()
        tlds.insert(0, tld if tld.startswith('.') else '.' + tld)

    checks = []
    for tld in tlds:
        domain = clean_name + tld
        check: Dict[str, Any] = {'domain': domain, 'tld': tld, 'available': False, 'error': None}
        try:
            check['available'] = is_available(host.whois_lookup(domain))
        except BridgeError as e:
            logger.info("Availability check for %s failed: %s", domain, e)
            check['error'] = 'Check failed'
        checks.append(check)

    return {
        'name': clean_name,
        'checks': checks,
        'available_count': sum(1 for c in checks if c['available']),
    }


# IP lookup

def _get_json(url: str) -> Dict[str, Any]:
    body = host.http_get_json(url)
    try:
        data = json.loads(body)
    except json.JSONDecodeError:
        raise ValueError("Invalid response from lookup service")
    if not isinstance(data, dict):
        raise ValueError("Invalid response from lookup service")
    return data


def lookup_ip(ip: str) -> Dict[str, Any]:
    ip = (ip or '').strip()
    if not ip:
        raise ValueError("IP address cannot be empty")
    if not re.fullmatch(r'[0-9a-fA-F:.]+', ip):
        raise ValueError(f"Invalid IP address: {ip}")

    data = _get_json(f"https://ipinfo.io/{ip}/json")
    error = data.get('error')
    if error:
        message = error.get('message') if isinstance(error, dict) else str(error)
        raise ValueError(message or 'Invalid IP address')
    return data


def my_ip() -> str:
    data = _get_json('https://api.ipify.org?format=json')
    if 'ip' not in data:
        raise ValueError("Invalid response from lookup service")
    return data['ip']


# Favicons

COMMON_FAVICON_PATHS = [
    '/favicon.ico',
    '/apple-touch-icon.png',
    '/apple-touch-icon-precomposed.png',
    '/favicon-16x16.png',
    '/favicon-32x32.png',
    '/favicon-96x96.png',
    '/favicon-192x192.png',
    '/favicon-512x512.png',
    '/android-chrome-192x192.png',
    '/android-chrome-512x512.png',
]
ICON_SIZE = re.compile(r'(\d+)x(\d+)', re.IGNORECASE)
CONTENT_TYPE_HEADER = re.compile(r'content-type:\s*([^\r\n;]+)', re.IGNORECASE)


def size_from_url(url: str) -> str:
    match = ICON_SIZE.search(url)
    return f"{match.group(1)}x{match.group(2)}" if match else 'Unknown'


def extract_icon_links(html: str, page_url: str) -> Dict[str, Any]:
    """
    Collect icon <link> tags and the manifest location from a page.

    Matches rel values containing "icon", "apple" or "shortcut", so
    "shortcut icon" and "apple-touch-icon" are both found.
    """
    soup = BeautifulSoup(html, 'html.parser')
    icons = []
    manifest_url = None
    for link in soup.select('link[rel][href]'):
        rel = ' '.join(link.get('rel') or []).lower()
        href = link.get('href', '').strip()
        if not href:
            continue
        if 'manifest' in rel.split():
            manifest_url = manifest_url or urljoin(page_url, href)
            continue
        if not any(word in rel for word in ('icon', 'apple', 'shortcut')):
            continue
        icons.append({
            'url': urljoin(page_url, href),
            'size': link.get('sizes') or size_from_url(href),
            'type': link.get('type') or 'image/png',
            'rel': rel,
            'source': 'link',
        })
    return {'icons': icons, 'manifest_url': manifest_url}


def parse_manifest_icons(body: str, manifest_url: str) -> List[Dict[str, Any]]:
    try:
        manifest = json.loads(body)
    except json.JSONDecodeError:
        return []
    if not isinstance(manifest, dict) or not isinstance(manifest.get('icons'), list):
        return []

    icons = []
    for icon in manifest['icons']:
        if not isinstance(icon, dict) or not icon.get('src'):
            continue
        icons.append({
            'url': urljoin(manifest_url, icon['src']),
            'size': icon.get('sizes') or 'Unknown',
            'type': icon.get('type') or 'image/png',
            'rel': None,
            'source': 'manifest',
        })
    return icons


def check_common_path(origin: str, path: str) -> Optional[Dict[str, Any]]:
    """HEAD a well-known favicon path; only a final 200 counts as found."""
    url = urljoin(origin, path)
    try:
        headers = host.http_head_request(url)
    except BridgeError as e:
        logger.debug("No favicon at %s: %s", url, e)
        return None

    codes = STATUS_CODE.findall(headers)
    if not codes or codes[-1] != '200':
        return None
    content_type = CONTENT_TYPE_HEADER.findall(headers)
    return {
        'url': url,
        'size': size_from_url(path),
        'type': content_type[-1].strip() if content_type else 'image/png',
        'rel': None,
        'source': 'common_path',
    }


def grab_favicons(url: str) -> Dict[str, Any]:
    """Find a site's favicons from its HTML, its web manifest and well-known paths."""
    url = _ensure_scheme(url)
    parts = urlsplit(url)
    origin = f"{parts.scheme}://{parts.netloc}/"

    page = extract_icon_links(host.http_get_html(url), url)
    found = list(page['icons'])

    if page['manifest_url']:
        try:
            found.extend(parse_manifest_icons(host.http_get_json(page['manifest_url']), page['manifest_url']))
        except BridgeError as e:
            logger.info("Could not read manifest %s: %s", page['manifest_url'], e)

    for path in COMMON_FAVICON_PATHS:
        icon = check_common_path(origin, path)
        if icon:
            found.append(icon)

    favicons = []
    seen: Set[str] = set()
    for icon in found:
        if icon['url'] in seen:
            continue
        seen.add(icon['url'])
        favicons.append(icon)

    return {
        'url': url,
        'favicons': favicons,
        'manifest_url': page['manifest_url'],
        'count': len(favicons),
    }
