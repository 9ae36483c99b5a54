import json
from dataclasses import asdict

from fastapi import APIRouter, Header, HTTPException, Query, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from src.core.logger import get_logger
from src.integrations.redis import RedisClient
from src.integrations.promorang import (
    PromorangClient,
    DashboardPromorangClient,
    HistoryPromorangClient,
)
from src.core.config import env_config
from src.presentation.websocket_codes import WebSocketCode
from src.services.promoshare import (
    CountdownTicker,
    DashboardSnapshotStore,
    Remaining,
    aggregate_draws,
    build_dashboard_view,
    build_widget_view,
    format_compact,
    history_summary,
)
from src.services.promoshare.countdown import utcnow
from src.services.promoshare.snapshot import DashboardSnapshot

logger = get_logger(__name__)

router = APIRouter(prefix='/api/promoshare', tags=['promoshare'])

_promorang_client: PromorangClient | None = None
_redis_client: RedisClient | None = None


def get_promorang_client() -> PromorangClient:
    """Dependency for getting PromorangClient."""
    global _promorang_client # noqa
    if _promorang_client is None:
        _promorang_client = PromorangClient()
    return _promorang_client


def get_redis_client() -> RedisClient:
    """Dependency for getting RedisClient."""
    global _redis_client # noqa
    if _redis_client is None:
        _redis_client = RedisClient(env_config.REDIS_URL)
    return _redis_client


async def close_clients():
    """Close clients on application shutdown."""
    global _promorang_client, _redis_client # noqa
    if _promorang_client:
        await _promorang_client.close()
        _promorang_client = None
    if _redis_client:
        await _redis_client.close()
        _redis_client = None
        logger.info('Clients closed')


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, value = authorization.partition(' ')
    if scheme.lower() != 'bearer' or not value.strip():
        return None
    return value.strip()


def _serialize_ticks(ticks: dict[str | int, Remaining]) -> dict[str, dict]:
    return {
        str(draw_id): {**asdict(left), 'compact': format_compact(left)}
        for draw_id, left in ticks.items()
    }


def _send_message(websocket: WebSocket, code: WebSocketCode, data: dict | list | None = None):
    """
    Send a structured message to the client.

    Args:
        websocket: WebSocket connection
        code: Message code
        data: Message payload
    """
    message = {'code': code.value, 'data': data}
    return websocket.send_text(json.dumps(message, ensure_ascii=False))


@router.get('/dashboard')
async def get_dashboard(
    force_refresh: bool = Query(False, description='Force refresh from API'),
    authorization: str | None = Header(None),
):
    """
    Get the viewer's PromoShare dashboard: draws in display order and totals.

    - **force_refresh**: If True, ignores cache and fetches fresh data.
      When the refetch fails the cached dashboard is returned instead.
    """
    client = DashboardPromorangClient(
        get_promorang_client(), get_redis_client(), token=_bearer_token(authorization)
    )
    try:
        payload = await client.get(force_refresh=force_refresh)
    except HTTPException:
        payload = await client.get_cached() if force_refresh else None
        if payload is None:
            raise
        logger.warning('Dashboard refetch failed, serving cached snapshot')
    except ValidationError as e:
        logger.error(f'Malformed dashboard payload, serving empty dashboard: {e.error_count()} error(s)')
        payload = None

    winners = payload.recent_winners if payload is not None else []
    view = build_dashboard_view(aggregate_draws(payload), winners, utcnow())
    return view.model_dump(mode='json')


@router.get('/widget')
async def get_widget(authorization: str | None = Header(None)):
    """Get the dashboard widget summary: tickets, combined jackpot and the soonest time left."""
    client = DashboardPromorangClient(
        get_promorang_client(), get_redis_client(), token=_bearer_token(authorization)
    )
    try:
        payload = await client.get()
    except ValidationError as e:
        logger.error(f'Malformed dashboard payload, serving empty widget: {e.error_count()} error(s)')
        payload = None

    return build_widget_view(aggregate_draws(payload), utcnow()).model_dump(mode='json')


@router.get('/history')
async def get_history(
    force_refresh: bool = Query(False, description='Force refresh from API'),
    authorization: str | None = Header(None),
):
    """
    Get past draw results and ticket earnings.

    - **force_refresh**: If True, ignores cache and fetches fresh data
    """
    client = HistoryPromorangClient(
        get_promorang_client(), get_redis_client(), token=_bearer_token(authorization)
    )
    data = await client.get(force_refresh=force_refresh)

    return {
        **data.model_dump(mode='json'),
        'summary': history_summary(data.draws, data.earnings),
    }


async def _apply_snapshot(
    websocket: WebSocket,
    store: DashboardSnapshotStore,
    ticker: CountdownTicker,
    force_refresh: bool,
):
    previous = store.snapshot
    snapshot: DashboardSnapshot | None = await store.refresh(force_refresh=force_refresh)
    draws = snapshot.draws if snapshot else []
    ticker.update(draws)

    if snapshot is previous:
        await _send_message(websocket, WebSocketCode.ERROR, {'message': 'Dashboard refresh failed'})
    else:
        view = build_dashboard_view(snapshot.draws, snapshot.recent_winners, utcnow())
        await _send_message(websocket, WebSocketCode.DRAWS_UPDATED, view.model_dump(mode='json'))

    if draws:
        ticker.start()
    else:
        await _send_message(websocket, WebSocketCode.COUNTDOWN_IDLE, None)


@router.websocket('/countdown')
async def websocket_countdown(websocket: WebSocket, token: str | None = Query(None)):
    """
    WebSocket endpoint streaming remaining time for every active draw.

    **1. Connection:**
    - Server sends: {"code": "CONNECTION_ESTABLISHED", "data": null}
    - Server sends the dashboard: {"code": "DRAWS_UPDATED", "data": {...}}

    **2. Every tick (one per second for all draws):**
    ```json
    {
      "code": "COUNTDOWN_TICK",
      "data": {"1": {"days": 0, "hours": 11, "minutes": 59, "seconds": 58, "compact": "11h 59m"}}
    }
    ```
    With no active draws the server sends {"code": "COUNTDOWN_IDLE"} and stops ticking.

    **3. Pull to refresh:**
    - Client sends: {"code": "REFRESH"}
    - Server answers with DRAWS_UPDATED, or with ERROR when the fetch fails
      (the previous snapshot keeps counting down)
    """
    await websocket.accept()
    logger.info(f'WebSocket: countdown connected {websocket.client}')

    token = token or _bearer_token(websocket.headers.get('authorization'))
    section = DashboardPromorangClient(get_promorang_client(), get_redis_client(), token=token)
    store = DashboardSnapshotStore(section)

    async def send_ticks(ticks: dict[str | int, Remaining]):
        await _send_message(websocket, WebSocketCode.COUNTDOWN_TICK, _serialize_ticks(ticks))

    ticker = CountdownTicker(send_ticks)

    try:
        await _send_message(websocket, WebSocketCode.CONNECTION_ESTABLISHED, None)
        await _apply_snapshot(websocket, store, ticker, force_refresh=False)

        while True:
            message = await websocket.receive()
            if message.get('type') == 'websocket.disconnect':
                logger.info('WebSocket: client sent disconnect')
                break
            if 'text' not in message:
                continue

            try:
                code = json.loads(message['text']).get('code')
            except (json.JSONDecodeError, AttributeError):
                await _send_message(websocket, WebSocketCode.ERROR, {'message': 'Invalid JSON message'})
                continue

            if code == WebSocketCode.REFRESH.value:
                await _apply_snapshot(websocket, store, ticker, force_refresh=True)
            else:
                logger.warning(f'WebSocket: unknown message code: {code}')
                await _send_message(websocket, WebSocketCode.ERROR, {'message': f'Unknown message code: {code}'})
    except WebSocketDisconnect:
        logger.info(f'WebSocket: client disconnected {websocket.client}')
    except Exception as e:
        logger.error(f'WebSocket: unexpected error: {e}', exc_info=True)
    finally:
        store.close()
        await ticker.aclose()
        logger.info(f'WebSocket: countdown closed {websocket.client}')
