# loomdesk/services/live_interest_ticker.py
from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from loomdesk.core.config import settings
from loomdesk.services.challan_interest import ChallanLike, live_interest
from loomdesk.utils.money import ZERO, money2
from loomdesk.utils.timezone import now_local

logger = logging.getLogger(__name__)


class LiveInterestTicker:
    """
    Caller-owned refresher for a displayed "interest owed now" figure.

    Every `interval` seconds it asks `challan_provider` for the current
    challan, runs the pure `live_interest` on it and keeps the result.
    The calculation itself knows nothing about this timer.
    """

    def __init__(self,
                 challan_provider: Callable[[], ChallanLike],
                 interval: Optional[float] = None,
                 clock: Callable[[], datetime] = now_local):
        self.challan_provider = challan_provider
        self.interval = float(interval if interval is not None else
                              settings.LIVE_INTEREST_REFRESH_SECONDS)
        if self.interval <= 0:
            raise ValueError("interval must be positive")
        self.clock = clock
        self.value: Decimal = money2(ZERO)
        self.updated_at: Optional[datetime] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def tick(self) -> Decimal:
        now = self.clock()
        self.value = live_interest(self.challan_provider(), now)
        self.updated_at = now
        return self.value

    async def _run(self):
        while True:
            try:
                self.tick()
            except Exception:
                # keep the last good value on screen; next tick retries
                logger.exception("live interest refresh failed")
            await asyncio.sleep(self.interval)

    async def start(self):
        if self.running:
            return
        self._task = asyncio.create_task(self._run())

    async def stop(self):
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
