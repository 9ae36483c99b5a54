"""
Adapter from the Promorang dashboard payload to normalized draws.

The backend still answers some viewers with the single-cycle shape
(`activeCycle` plus sibling scalars). Everything that knows about that shape
lives here; once the backend only sends `draws`, `_from_legacy` can go.
"""

from pydantic import ValidationError

from src.core.logger import get_logger
from src.integrations.promorang.dashboard.models import DashboardPayload, DrawPayload, PoolItemPayload
from src.services.promoshare.models import Draw, PoolItem, RewardType

logger = get_logger(__name__)


def _pool_items(items: list[PoolItemPayload] | None) -> list[PoolItem]:
    return [
        PoolItem(
            id=item.id,
            reward_type=RewardType(item.reward_type or 'other'),
            amount=item.amount or 0,
            description=item.description or '',
            sponsor_name=item.sponsor_name,
            image_url=item.image_url,
        )
        for item in items or []
    ]


def _from_draw(draw: DrawPayload) -> Draw:
    return Draw(
        id=draw.id,
        cycle_type=draw.cycle_type,
        end_at=draw.end_at,
        jackpot_amount=draw.jackpot_amount or 0,
        is_rollover=draw.is_rollover or False,
        user_tickets=draw.user_tickets or 0,
        total_tickets=draw.total_tickets or 0,
        ticket_numbers=draw.ticket_numbers or [],
        pool_items=_pool_items(draw.pool_items),
    )


def _from_legacy(payload: DashboardPayload) -> Draw:
    cycle = payload.active_cycle
    return Draw(
        id=cycle.id,
        cycle_type=cycle.cycle_type,
        end_at=cycle.end_at,
        jackpot_amount=payload.current_jackpot or 0,
        is_rollover=payload.is_rollover or False,
        user_tickets=payload.user_tickets or 0,
        total_tickets=payload.total_tickets or 0,
        ticket_numbers=payload.ticket_numbers or [],
        pool_items=_pool_items(payload.pool_items),
    )


def aggregate_draws(payload: DashboardPayload | None) -> list[Draw]:
    """
    Produce the ordered list of draws from whichever shape the backend sent.

    An explicit `draws` list wins, even when empty. Only when `draws` is
    missing does a legacy `activeCycle` become a single draw. Entries that
    cannot be normalized (unknown cycle type, missing id or end time, a
    field of the wrong type) are logged and skipped.

    Args:
        payload: Parsed dashboard body, or None when nothing was fetched

    Returns:
        Normalized draws in payload order
    """
    if payload is None:
        return []

    if payload.draws is not None:
        draws: list[Draw] = []
        for raw in payload.draws:
            try:
                draws.append(_from_draw(DrawPayload.model_validate(raw)))
            except ValidationError as e:
                draw_id = raw.get('id') if isinstance(raw, dict) else None
                logger.warning(f'Skipping malformed draw {draw_id!r}: {e.error_count()} error(s)')
        return draws

    if payload.active_cycle is not None:
        try:
            return [_from_legacy(payload)]
        except ValidationError as e:
            logger.warning(f'Skipping malformed legacy cycle {payload.active_cycle.id!r}: {e.error_count()} error(s)')

    return []
