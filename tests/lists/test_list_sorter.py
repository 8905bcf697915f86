"""
Test cases for the list sorter and deduplicator.
"""

import math

import pytest

from devtoolkit.api.lists import (
    parse_leading_float, natural_compare, sort_list, remove_duplicates, process_list
)


class TestParseLeadingFloat:

    def test_numeric_prefix(self):
        assert parse_leading_float('3px') == 3.0
        assert parse_leading_float('  -2.5e2 items') == -250.0
        assert parse_leading_float('.5') == 0.5

    def test_infinity(self):
        assert parse_leading_float('-Infinity') == -math.inf
        assert parse_leading_float('Infinity and beyond') == math.inf

    def test_not_a_number(self):
        assert parse_leading_float('abc') is None


class TestSorting:

    def test_natural_order(self):
        assert sort_list(['item10', 'item2', 'item1'], 'natural') == ['item1', 'item2', 'item10']

    def test_natural_compare(self):
        assert natural_compare('item2', 'item10') < 0
        assert natural_compare('File1', 'file1') == 0

    def test_numerical_puts_text_last(self):
        assert sort_list(['10', '9', 'abc', '2.5'], 'numerical') == ['2.5', '9', '10', 'abc']

    def test_alphabetical_ignores_case(self):
        assert sort_list(['banana', 'Apple', 'cherry'], 'alphabetical') == ['Apple', 'banana', 'cherry']

    def test_alphabetical_case_sensitive_lower_first(self):
        assert sort_list(['b', 'B', 'a', 'A'], 'alphabetical', case_sensitive=True) == ['a', 'A', 'b', 'B']

    def test_length_is_stable(self):
        assert sort_list(['ccc', 'a', 'bb', 'd'], 'length') == ['a', 'd', 'bb', 'ccc']

    def test_descending(self):
        assert sort_list(['a', 'c', 'b'], 'alphabetical', 'desc') == ['c', 'b', 'a']

    def test_none_keeps_order(self):
        assert sort_list(['z', 'a'], 'none') == ['z', 'a']

    def test_invalid_sort_type(self):
        with pytest.raises(ValueError, match="Unsupported sort type"):
            sort_list(['a'], 'random')

    def test_invalid_direction(self):
        with pytest.raises(ValueError, match="Unsupported sort direction"):
            sort_list(['a'], 'alphabetical', 'up')


class TestDeduplication:

    def test_case_insensitive_keeps_first(self):
        assert remove_duplicates(['Apple', 'apple', 'Banana']) == ['Apple', 'Banana']

    def test_case_sensitive(self):
        assert remove_duplicates(['Apple', 'apple', 'Apple'], case_sensitive=True) == ['Apple', 'apple']

    def test_process_list(self):
        result = process_list('  b\n\na\n b ', dedupe=True)
        assert result['items'] == ['a', 'b']
        assert result['output'] == 'a\nb'
        assert result['input_count'] == 3
        assert result['output_count'] == 2
        assert result['duplicates_removed'] == 1


class TestListEndpoint:

    def test_process(self, client):
        response = client.post('/api/lists/process', json={
            'text': 'item10\nitem2\nitem2',
            'sort_type': 'natural',
            'remove_duplicates': True,
        })
        data = response.get_json()
        assert response.status_code == 200
        assert data['items'] == ['item2', 'item10']
        assert data['duplicates_removed'] == 1

    def test_bad_sort_type(self, client):
        response = client.post('/api/lists/process', json={'text': 'a', 'sort_type': 'shuffle'})
        assert response.status_code == 400
        assert 'Unsupported sort type' in response.get_json()['error']
