"""View models rendered by the mobile screen, the web dashboard and the widget."""

from datetime import datetime

from pydantic import BaseModel

from src.integrations.promorang.dashboard.models import RecentWinner
from src.services.promoshare.countdown import format_compact, remaining
from src.services.promoshare.metrics import combined_jackpot, total_user_tickets, win_probability_percent
from src.services.promoshare.models import CycleType, Draw, PoolItem
from src.services.promoshare.ordering import sort_draws

DRAW_CONFIG: dict[CycleType, dict[str, str]] = {
    CycleType.DAILY: {
        'label': 'Daily Draw',
        'description': 'Drawn every day at midnight',
    },
    CycleType.WEEKLY: {
        'label': 'Weekly Draw',
        'description': 'Drawn every Sunday',
    },
    CycleType.MONTHLY: {
        'label': 'Monthly Draw',
        'description': 'Drawn on the 1st of each month',
    },
    CycleType.GRAND: {
        'label': 'GRAND JACKPOT',
        'description': 'Weekly mega draw - rolls over!',
    },
}


class DrawView(BaseModel):
    id: str | int
    cycle_type: CycleType
    label: str
    description: str
    end_at: datetime
    jackpot_amount: int | float
    is_rollover: bool
    user_tickets: int
    total_tickets: int
    ticket_numbers: list[int]
    win_probability: float
    time_left: str
    is_settling: bool
    pool_items: list[PoolItem]


class DashboardView(BaseModel):
    draws: list[DrawView]
    active_draws: int
    total_user_tickets: int
    combined_jackpot: int | float
    recent_winners: list[RecentWinner]


class WidgetView(BaseModel):
    user_tickets: int
    jackpot: int | float
    time_left: str | None


def build_draw_view(draw: Draw, now: datetime) -> DrawView:
    config = DRAW_CONFIG[draw.cycle_type]
    left = remaining(draw.end_at, now)
    return DrawView(
        id=draw.id,
        cycle_type=draw.cycle_type,
        label=config['label'],
        description=config['description'],
        end_at=draw.end_at,
        jackpot_amount=draw.jackpot_amount,
        is_rollover=draw.is_rollover,
        user_tickets=draw.user_tickets,
        total_tickets=draw.total_tickets,
        ticket_numbers=draw.ticket_numbers,
        win_probability=win_probability_percent(draw),
        time_left=format_compact(left),
        is_settling=left.is_settling,
        pool_items=draw.pool_items,
    )


def build_dashboard_view(draws: list[Draw], recent_winners: list[RecentWinner], now: datetime) -> DashboardView:
    """
    Assemble the dashboard: draws in display order plus the totals bar.

    Args:
        draws: Normalized draws
        recent_winners: Winners list from the same payload
        now: Reference time for the time-left figures
    """
    return DashboardView(
        draws=[build_draw_view(draw, now) for draw in sort_draws(draws)],
        active_draws=len(draws),
        total_user_tickets=total_user_tickets(draws),
        combined_jackpot=combined_jackpot(draws),
        recent_winners=recent_winners,
    )


def build_widget_view(draws: list[Draw], now: datetime) -> WidgetView:
    """Compact summary: all tickets, all jackpots, and the soonest draw's time left."""
    soonest = min(draws, key=lambda draw: draw.end_at, default=None)
    return WidgetView(
        user_tickets=total_user_tickets(draws),
        jackpot=combined_jackpot(draws),
        time_left=format_compact(remaining(soonest.end_at, now)) if soonest else None,
    )
