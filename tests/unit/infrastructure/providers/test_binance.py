# nosec B101


import httpx
import pytest

from domain.exceptions.rate import MalformedResponse, NetworkFailure, NoDataFailure
from infrastructure.persistence.repositories.rate import RateRepository
from infrastructure.providers.binance import BinanceP2PSource
from tests.helpers import json_response, status_error


def ads(*prices):
    return {'code': '000000', 'data': [{'adv': {'price': str(p)}} for p in prices]}


def order_book(buy_prices, sell_prices, failing_assets=()):
    """side_effect for client.request answering per (asset, tradeType)"""
    def respond(method, url, **kwargs):
        payload = kwargs['json']
        if payload['asset'] in failing_assets:
            raise httpx.ConnectError('connection refused')
        prices = buy_prices if payload['tradeType'] == 'BUY' else sell_prices
        return json_response(ads(*prices))
    return respond


@pytest.mark.asyncio
async def test_fetch_quote_uses_median_of_each_side(database, mock_client):
    mock_client.request.side_effect = order_book([10, 30, 20], [11, 13])
    source = BinanceP2PSource(database, client=mock_client)

    quote = await source.fetch_quote('USDT', 'GHS')

    assert quote.buy_rate == 20.0
    assert quote.sell_rate == 12.0
    assert quote.source_name == 'binance'
    assert quote.stablecoin_code == 'USDT'
    assert quote.fiat_code == 'GHS'


@pytest.mark.asyncio
async def test_fetch_quote_posts_search_payload_per_side(database, mock_client):
    mock_client.request.side_effect = order_book([10], [11])
    source = BinanceP2PSource(database, client=mock_client, timeout=5, rows=20)

    await source.fetch_quote('USDC', 'NGN')

    assert mock_client.request.call_count == 2
    payloads = []
    for call in mock_client.request.call_args_list:
        assert call.args == ('POST', BinanceP2PSource.BASE_URL)
        assert call.kwargs['timeout'] == 5
        payloads.append(call.kwargs['json'])

    assert sorted(p['tradeType'] for p in payloads) == ['BUY', 'SELL']
    for payload in payloads:
        assert payload['asset'] == 'USDC'
        assert payload['fiat'] == 'NGN'
        assert payload['page'] == 1
        assert payload['rows'] == 20


@pytest.mark.asyncio
async def test_fetch_quote_empty_side_raises_no_data(database, mock_client):
    mock_client.request.side_effect = order_book([10, 12], [])
    source = BinanceP2PSource(database, client=mock_client)

    with pytest.raises(NoDataFailure) as exc_info:
        await source.fetch_quote('USDT', 'GHS')

    assert 'SELL side' in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_quote_missing_data_field_raises_malformed(database, mock_client):
    mock_client.request.return_value = json_response({'code': '000000'})
    source = BinanceP2PSource(database, client=mock_client)

    with pytest.raises(MalformedResponse):
        await source.fetch_quote('USDT', 'GHS')


@pytest.mark.asyncio
async def test_fetch_quote_skips_unparseable_prices(database, mock_client):
    def respond(method, url, **kwargs):
        return json_response({'data': [
            {'adv': {'price': 'abc'}},
            {'adv': {}},
            {'adv': {'price': '-3'}},
            {'adv': {'price': '15.5'}},
        ]})

    mock_client.request.side_effect = respond
    source = BinanceP2PSource(database, client=mock_client)

    quote = await source.fetch_quote('USDT', 'GHS')

    assert quote.buy_rate == 15.5
    assert quote.sell_rate == 15.5


@pytest.mark.asyncio
async def test_fetch_quote_no_parseable_prices_raises_malformed(database, mock_client):
    mock_client.request.return_value = json_response({'data': [{'adv': {'price': 'nan'}}]})
    source = BinanceP2PSource(database, client=mock_client)

    with pytest.raises(MalformedResponse):
        await source.fetch_quote('USDT', 'GHS')


@pytest.mark.asyncio
async def test_fetch_quote_http_error_raises_network_failure(database, mock_client):
    mock_client.request.side_effect = status_error(429, 'Too Many Requests')
    source = BinanceP2PSource(database, client=mock_client)

    with pytest.raises(NetworkFailure) as exc_info:
        await source.fetch_quote('USDT', 'GHS')

    assert '429' in str(exc_info.value)


@pytest.mark.asyncio
async def test_fetch_persists_every_stablecoin(database, mock_client):
    mock_client.request.side_effect = order_book([10, 30, 20], [11, 13])
    source = BinanceP2PSource(database, client=mock_client)

    outcome = await source.fetch('ghs')

    assert outcome.success is True
    assert outcome.errors == []
    assert sorted(q.stablecoin_code for q in outcome.quotes) == ['USDC', 'USDT']

    async with database.session() as session:
        repo = RateRepository(session)
        usdt = await repo.find_one('GHS', 'USDT', 'binance')
        usdc = await repo.find_one('GHS', 'USDC', 'binance')

    assert (usdt.buy_rate, usdt.sell_rate) == (20.0, 12.0)
    assert (usdc.buy_rate, usdc.sell_rate) == (20.0, 12.0)


@pytest.mark.asyncio
async def test_fetch_partial_failure_persists_succeeding_stablecoin(database, mock_client):
    mock_client.request.side_effect = order_book([10], [12], failing_assets=('USDC',))
    source = BinanceP2PSource(database, client=mock_client)

    outcome = await source.fetch('GHS')

    assert outcome.success is True
    assert [q.stablecoin_code for q in outcome.quotes] == ['USDT']
    assert len(outcome.errors) == 1
    assert outcome.errors[0].startswith('USDC/GHS: NetworkFailure')

    async with database.session() as session:
        repo = RateRepository(session)
        assert await repo.find_one('GHS', 'USDT', 'binance') is not None
        assert await repo.find_one('GHS', 'USDC', 'binance') is None


@pytest.mark.asyncio
async def test_fetch_all_stablecoins_failing_returns_unsuccessful_outcome(database, mock_client):
    mock_client.request.side_effect = httpx.TimeoutException('Request timed out')
    source = BinanceP2PSource(database, client=mock_client)

    outcome = await source.fetch('GHS')

    assert outcome.success is False
    assert outcome.quotes == []
    assert 'No data fetched for GHS from binance' in outcome.message
    assert len(outcome.errors) == 2
    assert all('timed out' in error for error in outcome.errors)


@pytest.mark.asyncio
async def test_fetch_repeated_does_not_duplicate_records(database, mock_client):
    mock_client.request.side_effect = order_book([10], [12])
    source = BinanceP2PSource(database, client=mock_client)

    await source.fetch('GHS')
    mock_client.request.side_effect = order_book([11], [13])
    await source.fetch('GHS')

    async with database.session() as session:
        records = await RateRepository(session).find_all('USDT', ['GHS'])

    assert len(records) == 1
    assert records[0].buy_rate == 11.0
    assert records[0].sell_rate == 13.0
