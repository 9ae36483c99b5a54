import asyncio
import time
from urllib.parse import urljoin

import httpx
from fastapi import HTTPException

from src.core.config import env_config
from src.core.logger import get_logger

logger = get_logger(__name__)


class PromorangClient:
    """
    Client for the Promorang API.
    Keeps one shared HTTP connection pool and optionally spaces requests out.
    """

    DEFAULT_HEADERS = {
        'Accept': 'application/json',
        'User-Agent': 'promoshare-backend/1.0',
    }

    def __init__(
        self,
        base_url: str | None = None,
        rate_limit: float | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize client.

        Args:
            base_url: API root, defaults to PROMORANG_API_URL
            rate_limit: Minimum interval between requests in seconds (0 disables it)
            timeout: Request timeout in seconds
            transport: Custom httpx transport (used by tests)
        """
        self.base_url = base_url or env_config.PROMORANG_API_URL
        self.rate_limit = env_config.PROMORANG_RATE_LIMIT if rate_limit is None else rate_limit
        self.timeout = env_config.HTTP_TIMEOUT if timeout is None else timeout
        self.last_request_time: float = 0.0
        self._lock = asyncio.Lock()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers=self.DEFAULT_HEADERS,
                transport=self._transport,
            )
        return self._client

    async def _wait_for_rate_limit(self):
        """Wait for rate limit before next request."""
        if self.rate_limit <= 0:
            return
        async with self._lock:
            current_time = time.time()
            time_since_last_request = current_time - self.last_request_time

            if time_since_last_request < self.rate_limit:
                wait_time = self.rate_limit - time_since_last_request
                logger.debug(f'Rate limit: waiting {wait_time:.2f} seconds')
                await asyncio.sleep(wait_time)

            self.last_request_time = time.time()

    async def request(
        self,
        method: str,
        path: str,
        token: str | None = None,
        **kwargs
    ) -> httpx.Response:
        """
        Execute HTTP request.

        Args:
            method: HTTP method
            path: Path relative to the API root
            token: Viewer's bearer token, forwarded as Authorization header
            **kwargs: Additional httpx parameters

        Returns:
            httpx Response object
        """
        await self._wait_for_rate_limit()

        client = await self._get_client()
        url = urljoin(self.base_url, path)
        headers = kwargs.pop('headers', {})
        if token:
            headers['Authorization'] = f'Bearer {token}'

        try:
            logger.debug(f'Executing request: {method} {url}')
            response = await client.request(method, path, headers=headers, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            logger.error(f'HTTP error for request {url}: {e.response.status_code}')
            raise HTTPException(502, f'Error occurred while getting data from {url}')
        except httpx.RequestError as e:
            logger.error(f'Request error to {url}: {e}')
            raise HTTPException(502, f'Error occurred while getting data from {url}')

    async def get(self, path: str, token: str | None = None, **kwargs) -> httpx.Response:
        """Execute GET request."""
        return await self.request('GET', path, token=token, **kwargs)

    async def get_data(self, path: str, token: str | None = None, **kwargs) -> dict:
        """
        Execute GET request and unwrap the {"success": ..., "data": ...} envelope.

        Raises:
            HTTPException: If the body is not JSON or the envelope reports failure
        """
        response = await self.get(path, token=token, **kwargs)
        try:
            body = response.json()
        except ValueError:
            logger.error(f'Invalid JSON from {path}')
            raise HTTPException(502, f'Invalid response from {path}')

        if not isinstance(body, dict) or not body.get('success') or not isinstance(body.get('data'), dict):
            logger.error(f'Unsuccessful response from {path}: {str(body)[:200]}')
            raise HTTPException(502, f'Unsuccessful response from {path}')
        return body['data']

    async def close(self):
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        """Async context manager support."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager support."""
        await self.close()
