"""Pytest configuration and fixtures."""

import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from src.integrations.promorang import PromorangClient
from src.services.promoshare import Draw


NOW = datetime(2026, 1, 10, 12, 0, 0, tzinfo=timezone.utc)


class FakeRedisClient:
    """In-memory stand-in for RedisClient (JSON round-trip, TTL ignored)."""

    def __init__(self):
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}

    async def get_json(self, key: str):
        data = self.store.get(key)
        return json.loads(data) if data else None

    async def set_json(self, key: str, value, expire: int):
        self.store[key] = json.dumps(value, default=str)
        self.ttls[key] = expire

    async def close(self):
        pass


class BrokenRedisClient(FakeRedisClient):
    async def get_json(self, key: str):
        raise ConnectionError('redis is down')

    async def set_json(self, key: str, value, expire: int):
        raise ConnectionError('redis is down')


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def fake_redis():
    return FakeRedisClient()


@pytest.fixture
def broken_redis():
    return BrokenRedisClient()


@pytest.fixture
def make_draw():
    """Factory for normalized draws; end_at is given as hours from NOW."""

    def _make(draw_id=1, cycle_type='daily', hours=12, **overrides) -> Draw:
        fields = {
            'id': draw_id,
            'cycle_type': cycle_type,
            'end_at': NOW + timedelta(hours=hours),
            'jackpot_amount': 50,
            'user_tickets': 3,
            'total_tickets': 89,
        }
        fields.update(overrides)
        return Draw(**fields)

    return _make


def _iso(hours: float) -> str:
    return (datetime.now(timezone.utc) + timedelta(hours=hours)).isoformat().replace('+00:00', 'Z')


@pytest.fixture
def modern_payload():
    return {
        'draws': [
            {
                'id': 1, 'cycle_type': 'daily', 'end_at': _iso(12),
                'jackpot_amount': 50, 'is_rollover': False,
                'userTickets': 3, 'totalTickets': 89,
                'poolItems': [{'id': 'd1', 'reward_type': 'gem', 'amount': 50, 'description': 'Daily Gems'}],
            },
            {
                'id': 2, 'cycle_type': 'weekly', 'end_at': _iso(96),
                'jackpot_amount': 500, 'is_rollover': False,
                'userTickets': 12, 'totalTickets': 450,
                'poolItems': [{'id': 'w1', 'reward_type': 'gem', 'amount': 500, 'description': 'Weekly Jackpot'}],
            },
            {
                'id': 3, 'cycle_type': 'monthly', 'end_at': _iso(18 * 24),
                'jackpot_amount': 2500, 'is_rollover': False,
                'userTickets': 45, 'totalTickets': 2100,
                'poolItems': [{'id': 'm1', 'reward_type': 'gem', 'amount': 2500, 'description': 'Monthly Grand Prize'}],
            },
            {
                'id': 4, 'cycle_type': 'grand', 'end_at': _iso(96),
                'jackpot_amount': 10000, 'is_rollover': True,
                'userTickets': 12, 'totalTickets': 450,
                'poolItems': [{'id': 'g1', 'reward_type': 'gem', 'amount': 10000, 'description': 'GRAND JACKPOT'}],
            },
        ],
        'recentWinners': [
            {'username': 'alex_creator', 'prize': '250 Gems', 'date': '2 days ago'},
        ],
    }


@pytest.fixture
def legacy_payload():
    return {
        'activeCycle': {
            'id': 'cycle-7', 'cycle_type': 'weekly', 'status': 'active',
            'start_at': _iso(-72), 'end_at': _iso(96),
        },
        'userTickets': 12,
        'totalTickets': 450,
        'poolItems': [
            {'type': 'gem', 'amount': 1000, 'description': 'Weekly Gem Jackpot'},
            {'type': 'key', 'amount': 10, 'description': 'Runner-up Keys'},
        ],
        'currentJackpot': 500,
        'isRollover': False,
        'ticketNumbers': [17, 42],
    }


@pytest.fixture
def history_payload():
    return {
        'draws': [
            {
                'id': '1', 'cycle_type': 'weekly', 'draw_date': '2026-01-05T00:00:00Z',
                'your_tickets': 35, 'total_tickets': 11200, 'won': True,
                'prize': '50 Gems', 'prize_type': 'gem',
                'winning_numbers': [47, 156, 892], 'your_numbers': [12, 47, 89, 156],
            },
            {
                'id': '2', 'cycle_type': 'weekly', 'draw_date': '2025-12-29T00:00:00Z',
                'your_tickets': 28, 'total_tickets': 9800, 'won': False,
            },
        ],
        'earnings': [
            {'id': '1', 'action': 'drop_complete', 'tickets_earned': 3,
             'timestamp': '2026-01-09T14:30:00Z', 'description': 'Completed a drop'},
            {'id': '2', 'action': 'referral', 'tickets_earned': 10,
             'timestamp': '2026-01-09T10:15:00Z', 'description': 'Friend signed up'},
        ],
    }


@pytest.fixture
def promorang_api():
    """
    Build a PromorangClient backed by httpx.MockTransport.

    Routes map a path to a JSON body (wrapped in the success envelope), an
    int status code, or a callable taking the request.
    """
    requests: list[httpx.Request] = []

    def _build(routes: dict) -> PromorangClient:
        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            route = routes.get(request.url.path)
            if route is None:
                return httpx.Response(404, json={'success': False})
            if callable(route):
                return route(request)
            if isinstance(route, int):
                return httpx.Response(route, json={'success': False})
            return httpx.Response(200, json={'success': True, 'data': route})

        return PromorangClient(
            base_url='https://promorang.test',
            rate_limit=0,
            transport=httpx.MockTransport(handler),
        )

    _build.requests = requests
    return _build
