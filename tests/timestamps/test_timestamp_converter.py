"""
Tests for the timestamp converter.
"""

from datetime import datetime, timedelta, timezone

import pytest

from devtoolkit.api.timestamps import (
    parse_timestamp, relative_time, format_timestamp, convert_timestamp, current_timestamp, PARSE_ERROR
)

NOV_14 = datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)


class TestParseTimestamp:

    def test_unix_seconds(self):
        assert parse_timestamp('1700000000') == NOV_14

    def test_unix_millis(self):
        assert parse_timestamp('1700000000000') == NOV_14

    def test_iso_utc(self):
        assert parse_timestamp('2023-11-14T22:13:20Z') == NOV_14

    def test_iso_with_offset(self):
        assert parse_timestamp('2023-11-15T00:13:20+02:00') == NOV_14

    def test_iso_naive_is_aware(self):
        assert parse_timestamp('2023-11-14T22:13:20').tzinfo is not None

    def test_rfc2822(self):
        assert parse_timestamp('Tue, 14 Nov 2023 22:13:20 +0000') == NOV_14

    def test_surrounding_whitespace(self):
        assert parse_timestamp('  1700000000 \n') == NOV_14

    def test_garbage(self):
        with pytest.raises(ValueError) as exc_info:
            parse_timestamp('not a date')
        assert str(exc_info.value) == PARSE_ERROR

    def test_empty(self):
        with pytest.raises(ValueError):
            parse_timestamp('   ')


class TestRelativeTime:

    def test_past(self):
        assert relative_time(NOV_14 - timedelta(days=3), now=NOV_14) == '3 days ago'

    def test_future(self):
        assert relative_time(NOV_14 + timedelta(hours=2, minutes=5), now=NOV_14) == 'in 2 hours'

    def test_singular(self):
        assert relative_time(NOV_14 + timedelta(minutes=1), now=NOV_14) == 'in 1 minute'

    def test_years(self):
        assert relative_time(NOV_14 - timedelta(days=800), now=NOV_14) == '2 years ago'

    def test_just_now(self):
        assert relative_time(NOV_14 + timedelta(milliseconds=400), now=NOV_14) == 'just now'


class TestFormatTimestamp:

    def test_representations(self):
        result = format_timestamp(NOV_14, now=NOV_14 + timedelta(seconds=30))
        assert result['unix'] == 1700000000
        assert result['unix_ms'] == 1700000000000
        assert result['iso'] == '2023-11-14T22:13:20.000Z'
        assert result['utc'] == 'Tue, 14 Nov 2023 22:13:20 GMT'
        assert result['relative'] == '30 seconds ago'
        assert len(result['date']) == 10

    def test_millisecond_precision(self):
        result = convert_timestamp('1700000000123', now=NOV_14)
        assert result['unix_ms'] == 1700000000123
        assert result['iso'] == '2023-11-14T22:13:20.123Z'

    def test_current(self):
        assert current_timestamp(NOV_14)['relative'] == 'just now'


class TestTimestampEndpoints:

    def test_convert(self, client):
        response = client.post('/api/timestamp/convert', json={'input': '1700000000'})
        data = response.get_json()
        assert response.status_code == 200
        assert data['result']['iso'] == '2023-11-14T22:13:20.000Z'

    def test_numeric_input(self, client):
        response = client.post('/api/timestamp/convert', json={'input': 1700000000})
        assert response.get_json()['result']['unix'] == 1700000000

    def test_invalid(self, client):
        response = client.post('/api/timestamp/convert', json={'input': 'yesterday-ish'})
        assert response.status_code == 400
        assert response.get_json()['error'] == PARSE_ERROR

    def test_now(self, client):
        data = client.get('/api/timestamp/now').get_json()
        assert data['result']['relative'] == 'just now'
