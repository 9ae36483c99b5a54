"""PromoShare draw aggregation, ordering, countdown and metrics."""

from src.services.promoshare.countdown import CountdownTicker, format_compact, remaining
from src.services.promoshare.legacy import aggregate_draws
from src.services.promoshare.metrics import (
    combined_jackpot,
    history_summary,
    total_user_tickets,
    win_probability_percent,
)
from src.services.promoshare.models import CycleType, Draw, PoolItem, Remaining, RewardType
from src.services.promoshare.ordering import sort_draws
from src.services.promoshare.presenter import build_dashboard_view, build_widget_view
from src.services.promoshare.snapshot import DashboardSnapshot, DashboardSnapshotStore

__all__ = [
    'CountdownTicker',
    'CycleType',
    'DashboardSnapshot',
    'DashboardSnapshotStore',
    'Draw',
    'PoolItem',
    'Remaining',
    'RewardType',
    'aggregate_draws',
    'build_dashboard_view',
    'build_widget_view',
    'combined_jackpot',
    'format_compact',
    'history_summary',
    'remaining',
    'sort_draws',
    'total_user_tickets',
    'win_probability_percent',
]
