# nosec B101


from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_aggregation_service, get_scheduler
from api.main import app
from application.services.scheduler import ScheduledTask, TaskScheduler
from domain.exceptions.rate import UnsupportedStablecoinError
from domain.models.rate import AggregatedRate
from tests.helpers import at, make_source


@pytest.fixture
def mock_aggregation_service():
    mock_service = MagicMock()
    mock_service.get_rates = AsyncMock(return_value=[
        AggregatedRate(
            fiat_code='GHS',
            stablecoin_code='USDT',
            sources=['quidax', 'binance'],
            buy_rate=12.0,
            sell_rate=14.0,
            generated_at=datetime(2025, 9, 30, 10, 0, 0, tzinfo=UTC),
        ),
    ])
    return mock_service


@pytest.fixture
def scheduler():
    scheduler = TaskScheduler(clock=lambda: at(0, 30))
    source = make_source('binance')
    scheduler.tasks = [
        ScheduledTask('GHS', source, 5, 0),
        ScheduledTask('NGN', source, 4, 50),
    ]
    return scheduler


@pytest.fixture
def client(mock_aggregation_service, scheduler):
    app.dependency_overrides[get_aggregation_service] = lambda: mock_aggregation_service
    app.dependency_overrides[get_scheduler] = lambda: scheduler
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()


def test_get_rates_success(client, mock_aggregation_service):
    response = client.get('/api/rates/USDT')

    assert response.status_code == 200
    data = response.json()
    assert len(data) == 1
    assert data[0]['fiat_code'] == 'GHS'
    assert data[0]['stablecoin_code'] == 'USDT'
    assert data[0]['sources'] == ['quidax', 'binance']
    assert data[0]['buy_rate'] == 12.0
    assert data[0]['sell_rate'] == 14.0
    assert 'generated_at' in data[0]
    mock_aggregation_service.get_rates.assert_awaited_once_with('USDT', None)


def test_get_rates_passes_fiat_filter(client, mock_aggregation_service):
    response = client.get('/api/rates/usdt', params={'fiats': 'NGN,GHS'})

    assert response.status_code == 200
    mock_aggregation_service.get_rates.assert_awaited_once_with('usdt', ['NGN', 'GHS'])


def test_get_rates_ignores_empty_fiat_entries(client, mock_aggregation_service):
    response = client.get('/api/rates/USDT', params={'fiats': 'NGN,,'})

    assert response.status_code == 200
    mock_aggregation_service.get_rates.assert_awaited_once_with('USDT', ['NGN'])


def test_get_rates_empty_result(client, mock_aggregation_service):
    mock_aggregation_service.get_rates.return_value = []

    response = client.get('/api/rates/USDC')

    assert response.status_code == 200
    assert response.json() == []


def test_get_rates_unsupported_stablecoin_returns_400(client, mock_aggregation_service):
    mock_aggregation_service.get_rates.side_effect = UnsupportedStablecoinError(
        'Unsupported stablecoin: DAI'
    )

    response = client.get('/api/rates/DAI')

    assert response.status_code == 400
    assert 'DAI' in response.json()['detail']


def test_get_rates_stablecoin_too_short_rejected(client):
    response = client.get('/api/rates/US')
    assert response.status_code == 422


def test_scheduler_stats(client):
    response = client.get('/api/scheduler/stats')

    assert response.status_code == 200
    data = response.json()
    assert data['running'] is False
    assert data['total_tasks'] == 2
    assert data['tasks_by_interval'] == {'5min': 1, '4min': 1}
    assert data['due_tasks'] == 1
