# coinbot/domain/cooldowns.py
from __future__ import annotations
import logging

from coinbot.core.db.base import get_conn, run_in_transaction
from coinbot.core.errors import TooSoon
from coinbot.domain import clock
from coinbot.persistence import cooldowns as repo

log = logging.getLogger(__name__)

def remaining(user_id, action: str, now: int | None = None) -> int:
    """Secondes avant la prochaine tentative (0 = dispo). Lecture seule."""
    now = clock.now() if now is None else int(now)
    return max(0, repo.expires_at(get_conn(), str(user_id), action) - now)

def check_in(con, user_id, action: str, now: int) -> None:
    wait = repo.expires_at(con, str(user_id), action) - int(now)
    if wait > 0:
        raise TooSoon(wait, action)

def touch_in(con, user_id, action: str, now: int, cooldown_s: int) -> int:
    expires = int(now) + int(cooldown_s)
    repo.touch(con, str(user_id), action, expires)
    return expires

def reap_expired(now: int | None = None) -> int:
    now = clock.now() if now is None else int(now)
    n = run_in_transaction(repo.delete_expired, now)
    if n:
        log.info("Cooldowns expirés supprimés: %d", n)
    return n
