"""
Domain, DNS and HTTP inspection routes. Every tool here shells out through
the host bridge, so failures map to 502/504 rather than 400.
"""

from flask import Blueprint, jsonify

from ..api import domain as domain_tools
from .errors import request_data, text_value, no_data, bad_request, error_response

domain_bp = Blueprint('domain', __name__)


def _required(data, key, label):
    value = text_value(data, key)
    if not value:
        raise ValueError(f"{label} is required")
    return value


@domain_bp.route('/api/domain/dns', methods=['POST'])
def api_dns_lookup():
    try:
        data = request_data()
        if not data:
            return no_data()

        domain = _required(data, 'domain', 'Domain')
        result = domain_tools.dns_lookup(domain, data.get('record_type', 'A'))
        return jsonify({'success': True, **result})

    except Exception as e:
        return error_response(e)


@domain_bp.route('/api/domain/propagation', methods=['POST'])
def api_dns_propagation():
    try:
        data = request_data()
        if not data:
            return no_data()

        domain = _required(data, 'domain', 'Domain')
        result = domain_tools.dns_propagation(domain, data.get('record_type', 'A'))
        return jsonify({'success': True, **result})

    except Exception as e:
        return error_response(e)


@domain_bp.route('/api/domain/whois', methods=['POST'])
def api_whois():
    try:
        data = request_data()
        if not data:
            return no_data()

        result = domain_tools.whois_lookup(_required(data, 'domain', 'Domain'))
        return jsonify({'success': True, **result})

    except Exception as e:
        return error_response(e)


@domain_bp.route('/api/domain/ssl', methods=['POST'])
def api_ssl_check():
    try:
        data = request_data()
        if not data:
            return no_data()

        result = domain_tools.ssl_check(_required(data, 'domain', 'Domain'))
        return jsonify({'success': True, **result})

    except Exception as e:
        return error_response(e)


@domain_bp.route('/api/domain/headers', methods=['POST'])
def api_headers():
    try:
        data = request_data()
        if not data:
            return no_data()

        result = domain_tools.inspect_headers(_required(data, 'url', 'URL'))
        return jsonify({'success': True, **result})

    except Exception as e:
        return error_response(e)


@domain_bp.route('/api/domain/redirects', methods=['POST'])
def api_redirects():
    try:
        data = request_data()
        if not data:
            return no_data()

        result = domain_tools.track_redirects(_required(data, 'url', 'URL'))
        return jsonify({'success': True, **result})

    except Exception as e:
        return error_response(e)


@domain_bp.route('/api/domain/dead-links', methods=['POST'])
def api_dead_links():
    """Crawl a site and report broken links, up to the requested depth"""
    try:
        data = request_data()
        if not data:
            return no_data()

        url = _required(data, 'url', 'URL')
        try:
            depth = int(data.get('depth', domain_tools.DEFAULT_CRAWL_DEPTH))
        except (TypeError, ValueError):
            return bad_request("Depth must be a number")

        result = domain_tools.check_dead_links(url, depth)
        return jsonify({'success': True, **result})

    except Exception as e:
        return error_response(e)


@domain_bp.route('/api/domain/availability', methods=['POST'])
def api_availability():
    try:
        data = request_data()
        if not data:
            return no_data()

        result = domain_tools.check_availability(data.get('name', ''), data.get('custom_tld'))
        return jsonify({'success': True, **result})

    except Exception as e:
        return error_response(e)


@domain_bp.route('/api/domain/ip-lookup', methods=['POST'])
def api_ip_lookup():
    try:
        data = request_data()
        if not data:
            return no_data()
        return jsonify({'success': True, 'result': domain_tools.lookup_ip(data.get('ip', ''))})

    except Exception as e:
        return error_response(e)


@domain_bp.route('/api/domain/my-ip', methods=['GET'])
def api_my_ip():
    try:
        return jsonify({'success': True, 'ip': domain_tools.my_ip()})

    except Exception as e:
        return error_response(e)


@domain_bp.route('/api/domain/favicons', methods=['POST'])
def api_favicons():
    try:
        data = request_data()
        if not data:
            return no_data()

        result = domain_tools.grab_favicons(_required(data, 'url', 'URL'))
        return jsonify({'success': True, **result})

    except Exception as e:
        return error_response(e)
