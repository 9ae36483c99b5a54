import httpx
import pytest
from fastapi import HTTPException

from src.integrations.promorang import DashboardPromorangClient, HistoryPromorangClient, viewer_key


async def test_get_data_unwraps_envelope_and_sends_token(promorang_api):
    client = promorang_api({'/api/promoshare/dashboard': {'draws': []}})

    data = await client.get_data('/api/promoshare/dashboard', token='secret')

    assert data == {'draws': []}
    request = promorang_api.requests[-1]
    assert request.headers['Authorization'] == 'Bearer secret'
    assert str(request.url) == 'https://promorang.test/api/promoshare/dashboard'
    await client.close()


async def test_no_authorization_header_without_token(promorang_api):
    client = promorang_api({'/api/promoshare/dashboard': {'draws': []}})

    await client.get_data('/api/promoshare/dashboard')

    assert 'Authorization' not in promorang_api.requests[-1].headers
    await client.close()


async def test_http_error_becomes_502(promorang_api):
    client = promorang_api({'/api/promoshare/dashboard': 500})

    with pytest.raises(HTTPException) as exc_info:
        await client.get('/api/promoshare/dashboard')

    assert exc_info.value.status_code == 502
    await client.close()


async def test_network_error_becomes_502(promorang_api):
    def fail(request):
        raise httpx.ConnectError('connection refused', request=request)

    client = promorang_api({'/api/promoshare/dashboard': fail})

    with pytest.raises(HTTPException) as exc_info:
        await client.get('/api/promoshare/dashboard')

    assert exc_info.value.status_code == 502
    await client.close()


@pytest.mark.parametrize(
    'body',
    [
        {'success': False, 'error': 'nope'},
        {'success': True},
        {'success': True, 'data': None},
        ['not', 'an', 'envelope'],
    ],
)
async def test_unsuccessful_envelope_becomes_502(promorang_api, body):
    client = promorang_api({'/api/promoshare/dashboard': lambda request: httpx.Response(200, json=body)})

    with pytest.raises(HTTPException) as exc_info:
        await client.get_data('/api/promoshare/dashboard')

    assert exc_info.value.status_code == 502
    await client.close()


async def test_invalid_json_becomes_502(promorang_api):
    client = promorang_api({'/api/promoshare/dashboard': lambda request: httpx.Response(200, text='<html>')})

    with pytest.raises(HTTPException):
        await client.get_data('/api/promoshare/dashboard')
    await client.close()


async def test_dashboard_section_caches_per_viewer(promorang_api, fake_redis, modern_payload):
    client = promorang_api({'/api/promoshare/dashboard': modern_payload})
    section = DashboardPromorangClient(client, fake_redis, token='alice')

    first = await section.get()
    second = await section.get()

    assert len(promorang_api.requests) == 1
    assert first == second
    assert f'promoshare:dashboard:{viewer_key("alice")}' in fake_redis.store
    assert 'alice' not in next(iter(fake_redis.store))

    other = DashboardPromorangClient(client, fake_redis, token='bob')
    await other.get()
    assert len(promorang_api.requests) == 2
    await client.close()


async def test_force_refresh_skips_cache(promorang_api, fake_redis, modern_payload):
    client = promorang_api({'/api/promoshare/dashboard': modern_payload})
    section = DashboardPromorangClient(client, fake_redis, token='alice')

    await section.get()
    await section.get(force_refresh=True)

    assert len(promorang_api.requests) == 2
    await client.close()


async def test_cache_failures_fall_through_to_api(promorang_api, broken_redis, legacy_payload):
    client = promorang_api({'/api/promoshare/dashboard': legacy_payload})
    section = DashboardPromorangClient(client, broken_redis, token='alice')

    payload = await section.get()

    assert payload.current_jackpot == 500
    await client.close()


async def test_history_section(promorang_api, fake_redis, history_payload):
    client = promorang_api({'/api/promoshare/history': history_payload})
    section = HistoryPromorangClient(client, fake_redis, token='alice')

    history = await section.get()

    assert [result.won for result in history.draws] == [True, False]
    assert history.draws[0].winning_numbers == [47, 156, 892]
    assert sum(earning.tickets_earned for earning in history.earnings) == 13
    assert fake_redis.ttls[section.cache_key] == section.cache_ttl
    await client.close()


def test_viewer_key_is_stable_and_opaque():
    assert viewer_key('token') == viewer_key('token')
    assert viewer_key('token') != viewer_key('other')
    assert viewer_key(None) == 'anonymous'
    assert 'token' not in viewer_key('token')
