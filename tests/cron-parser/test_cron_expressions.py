"""
Tests for the cron expression parser: field expansion, matching,
next run calculation and the endpoints.
"""

from datetime import datetime

import pytest

from devtoolkit.api.cron import (
    expand_field, match_field, has_unsupported_tokens, next_runs, field_breakdown,
    parse_cron, describe_cron, DAY_NAMES, MONTH_NAMES,
)


class TestExpandField:

    def test_wildcard(self):
        assert expand_field('*', 0, 59) == set(range(60))

    def test_range_with_step(self):
        assert expand_field('1-10/3', 0, 59) == {1, 4, 7, 10}

    def test_start_with_step_runs_to_end(self):
        assert expand_field('5/20', 0, 59) == {5, 25, 45}

    def test_list(self):
        assert expand_field('1,15,30', 0, 59) == {1, 15, 30}

    def test_day_names(self):
        assert expand_field('MON-FRI', 0, 6, DAY_NAMES) == {1, 2, 3, 4, 5}

    def test_seven_is_sunday(self):
        assert expand_field('7', 0, 6, DAY_NAMES) == {0}

    def test_range_ending_on_seven(self):
        assert expand_field('5-7', 0, 6, DAY_NAMES) == {5, 6, 0}

    def test_name_range_ending_on_sunday(self):
        assert expand_field('MON-SUN', 0, 6, DAY_NAMES) == {0, 1, 2, 3, 4, 5, 6}
        assert expand_field('FRI-SUN', 0, 6, DAY_NAMES) == {5, 6, 0}

    def test_day_of_week_above_seven(self):
        with pytest.raises(ValueError, match="out of range"):
            expand_field('8', 0, 6, DAY_NAMES)

    def test_month_names(self):
        assert expand_field('jan,MAR', 1, 12, MONTH_NAMES) == {1, 3}

    def test_question_mark(self):
        assert expand_field('?', 1, 31) == set(range(1, 32))

    def test_out_of_range(self):
        with pytest.raises(ValueError, match="out of range"):
            expand_field('60', 0, 59)

    def test_zero_step(self):
        with pytest.raises(ValueError, match="Invalid step"):
            expand_field('*/0', 0, 59)

    def test_reversed_range(self):
        with pytest.raises(ValueError, match="Invalid range"):
            expand_field('10-5', 0, 59)

    def test_unsupported_tokens_match_nothing(self):
        assert expand_field('L', 1, 31) == set()
        assert expand_field('5#2', 0, 6, DAY_NAMES) == set()

    def test_names_are_not_unsupported_tokens(self):
        assert has_unsupported_tokens('WED') is False
        assert has_unsupported_tokens('JUL') is False
        assert has_unsupported_tokens('15W') is True


class TestMatchField:

    def test_star_matches_anything(self):
        assert match_field('*', 42, 0, 59)

    def test_step(self):
        assert match_field('*/15', 30, 0, 59)
        assert not match_field('*/15', 31, 0, 59)

    def test_invalid_field_never_matches(self):
        assert match_field('abc', 1, 0, 59) is False


class TestNextRuns:

    def test_every_minute(self):
        runs = next_runs('* * * * *', 3, start=datetime(2024, 1, 1, 12, 0, 30))
        assert runs == [
            datetime(2024, 1, 1, 12, 1),
            datetime(2024, 1, 1, 12, 2),
            datetime(2024, 1, 1, 12, 3),
        ]

    def test_every_fifteen_minutes(self):
        runs = next_runs('*/15 * * * *', 4, start=datetime(2024, 1, 1, 0, 0))
        assert [r.strftime('%H:%M') for r in runs] == ['00:15', '00:30', '00:45', '01:00']

    def test_weekday_schedule(self):
        # 2024-01-08 is a Monday
        runs = next_runs('0 9 * * 1-5', 1, start=datetime(2024, 1, 8, 8, 30))
        assert runs == [datetime(2024, 1, 8, 9, 0)]

    def test_weekend_range_through_seven(self):
        # 2024-01-06 is a Saturday, 2024-01-07 a Sunday
        runs = next_runs('0 * * * 5-7', 2, start=datetime(2024, 1, 6, 23, 30))
        assert runs == [datetime(2024, 1, 7, 0, 0), datetime(2024, 1, 7, 1, 0)]
        # Sunday 23:00 is followed by Monday, outside the range
        runs = next_runs('0 * * * 5-7', 2, start=datetime(2024, 1, 7, 22, 30))
        assert runs == [datetime(2024, 1, 7, 23, 0)]
        assert match_field('5-7', 6, 0, 6, DAY_NAMES)

    def test_search_is_bounded(self):
        # Yearly schedule is far beyond the search window
        assert next_runs('0 0 1 1 *', 1, start=datetime(2024, 6, 1)) == []

    def test_wrong_field_count(self):
        assert next_runs('* * *', 5) == []


class TestParseCron:

    def test_describe(self):
        assert describe_cron('* * * * *') == 'Every minute'
        assert '09:00' in describe_cron('0 9 * * 1-5')

    def test_parse(self):
        result = parse_cron('*/5 * * * *', 2, start=datetime(2024, 1, 1, 10, 0))
        assert result['expression'] == '*/5 * * * *'
        assert result['next_runs'] == ['2024-01-01T10:05:00', '2024-01-01T10:10:00']
        assert result['warnings'] == []
        assert [f['name'] for f in result['fields']] == [
            'Minute', 'Hour', 'Day of Month', 'Month', 'Day of Week'
        ]

    def test_unsupported_token_warning(self):
        result = parse_cron('0 0 L * *', 1, start=datetime(2024, 1, 1))
        assert result['next_runs'] == []
        assert any('not supported' in w for w in result['warnings'])

    def test_field_breakdown_error(self):
        fields = field_breakdown('99 * * * *')
        assert 'error' in fields[0]
        assert fields[1]['values'] == list(range(24))

    def test_empty(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            parse_cron('   ')

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid cron expression"):
            parse_cron('not a cron')


class TestCronEndpoints:

    def test_parse_clamps_count(self, client):
        response = client.post('/api/cron/parse', json={'expression': '* * * * *', 'count': 50})
        data = response.get_json()
        assert response.status_code == 200
        assert data['success'] is True
        assert len(data['next_runs']) == 20

    def test_invalid_expression(self, client):
        response = client.post('/api/cron/parse', json={'expression': 'bad'})
        assert response.status_code == 400
        assert response.get_json()['success'] is False

    def test_presets(self, client):
        response = client.get('/api/cron/presets')
        presets = response.get_json()['presets']
        assert {'name': 'Every minute', 'expression': '* * * * *'} in presets
