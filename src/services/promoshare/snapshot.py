"""Holds the latest successfully fetched dashboard for one viewer."""

import itertools
from dataclasses import dataclass, field
from datetime import datetime

from fastapi import HTTPException
from pydantic import ValidationError

from src.core.logger import get_logger
from src.integrations.promorang import DashboardPromorangClient
from src.integrations.promorang.dashboard.models import RecentWinner
from src.services.promoshare.countdown import utcnow
from src.services.promoshare.legacy import aggregate_draws
from src.services.promoshare.models import Draw

logger = get_logger(__name__)


@dataclass(frozen=True)
class DashboardSnapshot:
    draws: list[Draw]
    recent_winners: list[RecentWinner] = field(default_factory=list)
    fetched_at: datetime = field(default_factory=utcnow)


class DashboardSnapshotStore:
    """
    Last-write-wins holder for the dashboard snapshot.

    Refreshes may overlap (pull-to-refresh while a periodic refetch is in
    flight). Whichever refresh started last and succeeded is kept; a failed
    refresh leaves the previous snapshot in place. After `close()` no refresh
    writes anything.
    """

    def __init__(self, section: DashboardPromorangClient):
        """
        Initialize store.

        Args:
            section: Dashboard section bound to the viewer's token
        """
        self.section = section
        self._snapshot: DashboardSnapshot | None = None
        self._applied_seq = 0
        self._seq = itertools.count(1)
        self._closed = False

    @property
    def snapshot(self) -> DashboardSnapshot | None:
        return self._snapshot

    @property
    def closed(self) -> bool:
        return self._closed

    async def refresh(self, force_refresh: bool = False) -> DashboardSnapshot | None:
        """
        Fetch the dashboard and swap the snapshot in whole.

        Args:
            force_refresh: If True, bypasses the Redis cache

        Returns:
            The snapshot held after this refresh (may be None if nothing was ever fetched)
        """
        seq = next(self._seq)
        try:
            payload = await self.section.get(force_refresh=force_refresh)
        except HTTPException as e:
            logger.error(f'Dashboard refresh failed, keeping previous snapshot: {e.detail}')
            return self._snapshot
        except ValidationError as e:
            logger.error(f'Malformed dashboard payload, keeping previous snapshot: {e.error_count()} error(s)')
            return self._snapshot

        if self._closed:
            logger.debug(f'Dropping refresh #{seq}: store closed')
            return self._snapshot
        if seq < self._applied_seq:
            logger.debug(f'Dropping refresh #{seq}: newer refresh #{self._applied_seq} already applied')
            return self._snapshot

        self._applied_seq = seq
        self._snapshot = DashboardSnapshot(
            draws=aggregate_draws(payload),
            recent_winners=list(payload.recent_winners),
        )
        return self._snapshot

    def close(self):
        self._closed = True
