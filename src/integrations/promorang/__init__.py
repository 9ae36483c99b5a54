from src.integrations.promorang.client import PromorangClient
from src.integrations.promorang.base import BasePromorangSection, viewer_key
from src.integrations.promorang.dashboard.client import DashboardPromorangClient
from src.integrations.promorang.history.client import HistoryPromorangClient

__all__ = [
    "BasePromorangSection",
    "DashboardPromorangClient",
    "HistoryPromorangClient",
    "PromorangClient",
    "viewer_key",
]
