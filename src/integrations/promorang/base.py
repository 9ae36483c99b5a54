import hashlib
from abc import ABC, abstractmethod
from typing import TypeVar, Generic

from pydantic import BaseModel

from src.core.config import app_config
from src.integrations.redis import RedisClient
from src.integrations.promorang.client import PromorangClient
from src.core.logger import get_logger

logger = get_logger(__name__)

T = TypeVar('T', bound=BaseModel)


def viewer_key(token: str | None) -> str:
    """Stable, non-reversible cache scope for a bearer token."""
    if not token:
        return 'anonymous'
    return hashlib.sha256(token.encode('utf-8')).hexdigest()[:16]


class BasePromorangSection(ABC, Generic[T]):
    """
    Base class for per-viewer Promorang sections.
    Provides Redis caching functionality.
    """

    cache_prefix: str = ""
    cache_ttl: int = app_config.DASHBOARD_CACHE_TTL
    response_model: type[T]

    def __init__(self, promorang_client: PromorangClient, redis_client: RedisClient, token: str | None = None):
        """
        Initialize section.

        Args:
            promorang_client: Client for Promorang API
            redis_client: Client for Redis
            token: Viewer's bearer token
        """
        self.promorang_client = promorang_client
        self.redis_client = redis_client
        self.token = token

        if not getattr(self, 'response_model', None):
            raise ValueError(f"response_model must be set on {self.__class__.__name__}")

    @property
    def cache_key(self) -> str:
        """Cache key scoped to the current viewer."""
        if not self.cache_prefix:
            raise ValueError(f"cache_prefix must be set on {self.__class__.__name__}")
        return f'{self.cache_prefix}:{viewer_key(self.token)}'

    async def _get_from_cache(self) -> T | None:
        """
        Get data from cache.

        Returns:
            Deserialized model or None if not cached
        """
        cache_key = self.cache_key
        try:
            cached_data = await self.redis_client.get_json(cache_key)
            if cached_data:
                logger.debug(f"Data found in cache for key: {cache_key}")
                return self.response_model(**cached_data)
            return None
        except Exception as e:
            logger.warning(f"Error getting data from cache: {e}")
            return None

    async def _save_to_cache(self, data: T):
        """
        Save data to cache.

        Args:
            data: Data model to save
        """
        cache_key = self.cache_key
        try:
            data_dict = data.model_dump(mode='json')
            await self.redis_client.set_json(cache_key, data_dict, self.cache_ttl)
            logger.debug(f"Data saved to cache with key: {cache_key}, TTL: {self.cache_ttl}s")
        except Exception as e:
            logger.error(f"Error saving data to cache: {e}")

    @abstractmethod
    async def _fetch_from_api(self) -> T:
        """
        Fetch data from Promorang API.
        Must be implemented in subclasses.

        Returns:
            Data model
        """
        pass

    async def get_cached(self) -> T | None:
        """Get cached data only, without calling the API."""
        return await self._get_from_cache()

    async def get(self, force_refresh: bool = False) -> T:
        """
        Get data from cache or API.

        Args:
            force_refresh: If True, ignores cache and fetches fresh data

        Returns:
            Data model
        """
        if not force_refresh:
            cached_data = await self._get_from_cache()
            if cached_data:
                return cached_data

        logger.info(f"Fetching data from API for section: {self.__class__.__name__}")
        fresh_data = await self._fetch_from_api()
        await self._save_to_cache(fresh_data)
        return fresh_data
