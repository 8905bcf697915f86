"""
Hashes, HMAC signatures and JWT inspection.
"""

import hmac
import json
import binascii
import hashlib
import logging
from datetime import datetime, timezone
from typing import Dict, Any, List, Optional

import jwt
from jwt.utils import base64url_decode

logger = logging.getLogger(__name__)

HMAC_ALGORITHMS = {
    'SHA-1': hashlib.sha1,
    'SHA-256': hashlib.sha256,
    'SHA-384': hashlib.sha384,
    'SHA-512': hashlib.sha512,
}

DEFAULT_JWT_ALGORITHMS = ['HS256', 'HS384', 'HS512']


def md5_hex(text: str) -> str:
    """MD5 of the text with CRLF line endings normalised to LF."""
    normalized = text.replace('\r\n', '\n')
    return hashlib.md5(normalized.encode('utf-8')).hexdigest()


def generate_hashes(text: str) -> Dict[str, str]:
    data = text.encode('utf-8')
    return {
        'MD5': md5_hex(text),
        'SHA-1': hashlib.sha1(data).hexdigest(),
        'SHA-256': hashlib.sha256(data).hexdigest(),
        'SHA-512': hashlib.sha512(data).hexdigest(),
    }


def generate_hmac(message: str, key: str, algorithm: str = 'SHA-256') -> str:
    if not message or not key:
        raise ValueError("Message and secret key are required")
    digest = HMAC_ALGORITHMS.get(algorithm)
    if digest is None:
        raise ValueError(f"Unsupported algorithm: {algorithm}. Supported: {', '.join(HMAC_ALGORITHMS)}")
    return hmac.new(key.encode('utf-8'), message.encode('utf-8'), digest).hexdigest()


def _timestamp(value: Any) -> Optional[str]:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return None
    try:
        return datetime.fromtimestamp(value, tz=timezone.utc).isoformat()
    except (OverflowError, OSError, ValueError):
        return None


def _decode_segment(segment: str) -> Dict[str, Any]:
    try:
        decoded = json.loads(base64url_decode(segment.encode('ascii')))
    except (UnicodeError, binascii.Error, json.JSONDecodeError) as e:
        raise ValueError(str(e))
    if not isinstance(decoded, dict):
        raise ValueError("JWT segment is not a JSON object")
    return decoded


def decode_jwt(token: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    """
    Decode a JWT without verifying its signature.

    Header and payload are decoded separately so one bad part does not hide
    the other; each failure is reported in its own error field.
    """
    token = (token or '').strip()
    parts = token.split('.')
    if len(parts) != 3:
        raise ValueError("Invalid JWT format. Expected 3 parts separated by dots.")

    result: Dict[str, Any] = {
        'header': None,
        'payload': None,
        'signature': parts[2],
        'header_error': None,
        'payload_error': None,
    }

    try:
        result['header'] = _decode_segment(parts[0])
    except ValueError:
        result['header_error'] = 'Invalid header encoding'

    try:
        result['payload'] = _decode_segment(parts[1])
    except ValueError:
        result['payload_error'] = 'Invalid payload encoding'

    result['is_valid'] = result['header'] is not None and result['payload'] is not None

    payload = result['payload'] or {}
    now = now or datetime.now(timezone.utc)
    exp = payload.get('exp')
    expires_at = _timestamp(exp)
    result['expires_at'] = expires_at
    result['issued_at'] = _timestamp(payload.get('iat'))
    result['is_expired'] = expires_at is not None and exp < now.timestamp()
    return result


def verify_jwt(token: str, secret: str, algorithms: Optional[List[str]] = None) -> Dict[str, Any]:
    """Verify a token's signature and registered claims with PyJWT."""
    if not token or not secret:
        raise ValueError("Token and secret are required")

    try:
        claims = jwt.decode(token.strip(), secret, algorithms=algorithms or DEFAULT_JWT_ALGORITHMS)
        return {'verified': True, 'claims': claims}
    except jwt.ExpiredSignatureError:
        return {'verified': False, 'error': 'Token has expired'}
    except jwt.InvalidTokenError as e:
        logger.debug("JWT verification failed: %s", e)
        return {'verified': False, 'error': str(e) or 'Invalid token'}
