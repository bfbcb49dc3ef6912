"""
Helpers shared by the test modules.
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, Mock

import httpx

from domain.models.rate import FetchOutcome


def json_response(payload):
    """Mock httpx response returning ``payload`` from .json()"""
    response = Mock()
    response.json.return_value = payload
    response.raise_for_status = Mock()
    return response


def status_error(status_code, text="error"):
    error_response = Mock()
    error_response.status_code = status_code
    error_response.text = text
    return httpx.HTTPStatusError("HTTP error", request=Mock(), response=error_response)


def make_source(name, success=True):
    """Stand-in rate source whose fetch() is an AsyncMock"""
    source = Mock()
    source.name = name
    source.fetch = AsyncMock(return_value=FetchOutcome(success=success, message=f"{name} done"))
    return source


def at(minute=0, second=0):
    return datetime(2025, 1, 1, 12, minute, second, tzinfo=UTC)
