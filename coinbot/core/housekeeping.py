# coinbot/core/housekeeping.py
from __future__ import annotations
import asyncio, logging

from coinbot.core.config import settings
from coinbot.domain import cooldowns as d_cooldowns

log = logging.getLogger(__name__)

class Housekeeper:
    """Purge périodique des cooldowns expirés (ménage, pas de la correction)."""
    _task: asyncio.Task | None = None

    @classmethod
    def start(cls) -> asyncio.Task:
        if cls._task and not cls._task.done():
            return cls._task
        cls._task = asyncio.create_task(cls._run())
        return cls._task

    @classmethod
    def stop(cls) -> None:
        if cls._task and not cls._task.done():
            cls._task.cancel()
        cls._task = None

    @classmethod
    def tick(cls, now: int | None = None) -> int:
        return d_cooldowns.reap_expired(now)

    @classmethod
    async def _run(cls):
        while True:
            try:
                cls.tick()
            except Exception:
                log.exception("Housekeeper: erreur boucle")
            await asyncio.sleep(settings.housekeeping_interval_s)
