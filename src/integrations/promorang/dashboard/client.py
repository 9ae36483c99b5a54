from src.integrations.promorang.base import BasePromorangSection
from src.integrations.promorang.dashboard.models import DashboardPayload


class DashboardPromorangClient(BasePromorangSection[DashboardPayload]):
    """Client for fetching the viewer's PromoShare dashboard."""

    cache_prefix: str = 'promoshare:dashboard'
    response_model = DashboardPayload

    async def _fetch_from_api(self) -> DashboardPayload:
        """Fetch dashboard data from Promorang API."""
        data = await self.promorang_client.get_data('/api/promoshare/dashboard', token=self.token)

        return DashboardPayload(**data)
