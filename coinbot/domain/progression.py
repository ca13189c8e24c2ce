# coinbot/domain/progression.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from coinbot.core.config import settings
from coinbot.core.db.base import run_in_transaction
from coinbot.domain import accounts as d_accounts
from coinbot.domain import economy as d_economy
from coinbot.domain.money import floor_growth
from coinbot.persistence import accounts as repo

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class XPResult:
    level: int
    xp: int
    required_xp: int
    leveled_up: bool
    new_level: Optional[int] = None
    levels_gained: int = 0
    bonus_paid: int = 0


def required_xp(level: int) -> int:
    """XP nécessaire pour passer de ``level`` à ``level + 1``."""
    cfg = settings.economy.leveling
    return floor_growth(cfg.base_xp, cfg.xp_multiplier, int(level) - 1)

def _below_cap(level: int) -> bool:
    max_level = settings.economy.leveling.max_level
    return max_level is None or level < max_level

def grant_xp_in(con, user_id, amount: int, source: str) -> XPResult:
    acc = d_accounts.ensure_in(con, user_id)
    amount = int(amount)
    if amount <= 0:
        return XPResult(acc.level, acc.xp, required_xp(acc.level), False)

    level, xp = acc.level, acc.xp + amount
    bonus = settings.economy.leveling.level_up_bonus
    gained = 0
    # boucle: un gros gain (boost XP) peut franchir plusieurs paliers
    while _below_cap(level) and xp >= required_xp(level):
        xp -= required_xp(level)
        level += 1
        gained += 1
        if bonus > 0:
            d_economy.credit_in(con, acc.user_id, bonus, f"level up bonus (level {level})")

    repo.update(con, acc.user_id, level=level, xp=xp)
    d_economy.record(con, acc.user_id, "xp", amount, f"xp from {source}")
    if gained:
        log.info("Level up %s: %d -> %d (%s)", acc.user_id, acc.level, level, source)

    return XPResult(
        level=level,
        xp=xp,
        required_xp=required_xp(level),
        leveled_up=gained > 0,
        new_level=level if gained else None,
        levels_gained=gained,
        bonus_paid=gained * bonus,
    )

def grant_xp(user_id, amount: int, source: str) -> XPResult:
    return run_in_transaction(grant_xp_in, user_id, amount, source)

def progress(user_id) -> dict:
    acc = d_accounts.get(user_id)
    need = required_xp(acc.level)
    pct = min(100, (acc.xp * 100) // need) if need > 0 else 100
    return {"level": acc.level, "xp": acc.xp, "required_xp": need, "percent": int(pct)}
