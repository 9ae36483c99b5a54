from src.core.config import app_config
from src.integrations.promorang.base import BasePromorangSection
from src.integrations.promorang.history.models import HistoryResponse


class HistoryPromorangClient(BasePromorangSection[HistoryResponse]):
    """Client for fetching past draw results and ticket earnings."""

    cache_prefix: str = 'promoshare:history'
    cache_ttl: int = app_config.HISTORY_CACHE_TTL
    response_model = HistoryResponse

    async def _fetch_from_api(self) -> HistoryResponse:
        """Fetch history data from Promorang API."""
        data = await self.promorang_client.get_data('/api/promoshare/history', token=self.token)

        return HistoryResponse(**data)
