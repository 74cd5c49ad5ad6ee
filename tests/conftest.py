"""
Pytest fixtures for popular drug ratings tests.
"""

import os
import sys
from unittest.mock import Mock

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import aiohttp
import pytest
from ratings import RatingRecord


class FakeResponse:
    """Stand-in for an aiohttp response used as an async context manager."""

    def __init__(self, url, payload, status=200):
        self.url = url
        self.payload = payload
        self.status = status

    def raise_for_status(self):
        if self.status >= 400:
            raise aiohttp.ClientResponseError(
                request_info=Mock(real_url=self.url),
                history=(),
                status=self.status,
                message='error',
            )

    async def json(self):
        return self.payload

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False


class FakeSession:
    """Records GET calls and answers them from a url -> (payload, status) map."""

    def __init__(self, routes):
        self.routes = routes
        self.calls = []

    def get(self, url, params=None, headers=None):
        self.calls.append((url, params))
        payload, status = self.routes[url]
        return FakeResponse(url, payload, status)


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def sample_drug():
    """Sample ratings API drug body."""
    return {
        'id': 'loxonin',
        'name': 'Loxonin S',
        'count_ratings': 128,
        'avg_rating': 4.2,
        'maker': 'Daiichi Sankyo',
    }


@pytest.fixture
def sample_records():
    return {
        'A': RatingRecord('Drug A', 30, 4.5),
        'B': RatingRecord('Drug B', 20, 3.8),
        'C': RatingRecord('Drug C', 10, 2.9),
    }


@pytest.fixture
def mock_analytics_response():
    """Sample Reporting API v4 batchGet response, most viewed first."""
    return {
        'reports': [
            {
                'columnHeader': {
                    'dimensions': ['ga:pagePath', 'ga:pageTitle'],
                    'metricHeader': {'metricHeaderEntries': [{'name': 'ga:pageviews', 'type': 'INTEGER'}]},
                },
                'data': {
                    'rows': [
                        {'dimensions': ['/medicine/loxonin/reviews', 'Loxonin S'],
                         'metrics': [{'values': ['950']}]},
                        {'dimensions': ['/medicine/bufferin/reviews', 'Bufferin A'],
                         'metrics': [{'values': ['610']}]},
                        {'dimensions': ['/medicine/eve/reviews', 'EVE A'],
                         'metrics': [{'values': ['402']}]},
                    ],
                    'rowCount': 3,
                },
            }
        ]
    }
