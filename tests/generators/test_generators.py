"""
Tests for the UUID and password generators.
"""

import re
import uuid

import pytest

from devtoolkit.api.generators import (
    format_uuid, generate_uuids, build_charset, generate_password, password_strength,
    generate_passwords, DEFAULT_PASSWORD_OPTIONS, SYMBOLS,
)

SAMPLE = uuid.UUID('12345678-1234-4234-8234-1234567890ab')


class TestUuids:

    def test_formats(self):
        assert format_uuid(SAMPLE) == '12345678-1234-4234-8234-1234567890ab'
        assert format_uuid(SAMPLE, 'uppercase') == '12345678-1234-4234-8234-1234567890AB'
        assert format_uuid(SAMPLE, 'no-dashes') == '123456781234423482341234567890ab'
        assert format_uuid(SAMPLE, 'braces') == '{12345678-1234-4234-8234-1234567890ab}'

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unsupported UUID format"):
            format_uuid(SAMPLE, 'base64')

    def test_generates_v4(self):
        values = generate_uuids(3)
        assert len(set(values)) == 3
        assert all(uuid.UUID(v).version == 4 for v in values)

    def test_count_clamped(self):
        assert len(generate_uuids(500)) == 100
        assert len(generate_uuids(0)) == 1


class TestPasswords:

    def test_length_and_charset(self):
        password = generate_password({'length': 24, 'symbols': False})
        assert len(password) == 24
        assert re.fullmatch(r'[A-Za-z0-9]+', password)

    def test_length_clamped(self):
        assert len(generate_password({'length': 1})) == 4
        assert len(generate_password({'length': 1000})) == 128

    def test_exclude_ambiguous(self):
        charset = build_charset({'uppercase': True, 'lowercase': True, 'numbers': True,
                                 'exclude_ambiguous': True})
        for char in 'IOlio01':
            assert char not in charset

    def test_symbols_only(self):
        password = generate_password({'uppercase': False, 'lowercase': False, 'numbers': False})
        assert all(c in SYMBOLS for c in password)

    def test_no_charset(self):
        options = {key: False for key in ('uppercase', 'lowercase', 'numbers', 'symbols')}
        assert generate_password(options) == ''

    def test_batch(self):
        result = generate_passwords(3, {'length': 12})
        assert len(result['passwords']) == 3
        assert result['length'] == 12
        assert result['strength']['score'] in range(1, 6)

    def test_defaults_not_mutated(self):
        generate_passwords(1, {'length': 8})
        assert DEFAULT_PASSWORD_OPTIONS['length'] == 16


class TestPasswordStrength:

    def lowercase_only(self):
        return {'uppercase': False, 'lowercase': True, 'numbers': False, 'symbols': False}

    def test_very_weak(self):
        options = {'uppercase': False, 'lowercase': False, 'numbers': True, 'symbols': False}
        result = password_strength('1234', options)
        assert result['label'] == 'Very Weak'
        assert result['entropy'] == 13.29

    def test_fair(self):
        result = password_strength('abcdefgh', self.lowercase_only())
        assert (result['score'], result['label']) == (3, 'Fair')

    def test_strong(self):
        result = password_strength('x' * 16)
        assert (result['score'], result['label']) == (4, 'Strong')

    def test_very_strong(self):
        result = password_strength('x' * 20)
        assert (result['score'], result['label']) == (5, 'Very Strong')

    def test_empty(self):
        assert password_strength('')['entropy'] == 0.0


class TestGeneratorEndpoints:

    def test_uuid(self, client):
        response = client.post('/api/generate/uuid', json={'count': 2, 'format': 'braces'})
        uuids = response.get_json()['uuids']
        assert len(uuids) == 2
        assert all(u.startswith('{') and u.endswith('}') for u in uuids)

    def test_uuid_without_body(self, client):
        response = client.post('/api/generate/uuid')
        assert len(response.get_json()['uuids']) == 1

    def test_uuid_bad_format(self, client):
        response = client.post('/api/generate/uuid', json={'format': 'nope'})
        assert response.status_code == 400

    def test_password(self, client):
        response = client.post('/api/generate/password', json={'count': 2, 'length': 10, 'symbols': False})
        data = response.get_json()
        assert data['success'] is True
        assert [len(p) for p in data['passwords']] == [10, 10]
        assert 'entropy' in data['strength']
