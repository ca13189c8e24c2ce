# coinbot/domain/work.py
from __future__ import annotations
import random
from dataclasses import dataclass

from coinbot.core.config import settings
from coinbot.core.db.base import run_in_transaction
from coinbot.domain import accounts as d_accounts
from coinbot.domain import clock
from coinbot.domain import cooldowns as d_cooldowns
from coinbot.domain import economy as d_economy
from coinbot.domain import progression as d_progression
from coinbot.domain.money import floor_mul
from coinbot.domain.progression import XPResult

ACTION = "work"

_rng = random.SystemRandom()


@dataclass(frozen=True)
class WorkResult:
    reward: int
    wallet: int
    xp: XPResult
    next_at: int


def reward_for(level: int, factor: float) -> int:
    cfg = settings.economy.work
    base = min(cfg.base_reward * int(level), cfg.max_reward)
    return max(1, floor_mul(base, factor))

def work_in(con, user_id, now: int | None = None, rng: random.Random | None = None) -> WorkResult:
    cfg = settings.economy.work
    rng = rng or _rng
    now = clock.now() if now is None else int(now)
    acc = d_accounts.ensure_in(con, user_id)
    d_cooldowns.check_in(con, acc.user_id, ACTION, now)

    reward = reward_for(acc.level, rng.uniform(1 - cfg.randomness, 1 + cfg.randomness))
    wallet = d_economy.credit_in(con, acc.user_id, reward, "work")
    xp = d_progression.grant_xp_in(con, acc.user_id, settings.economy.leveling.xp_sources.work, "work")
    if xp.leveled_up:
        wallet = d_accounts.ensure_in(con, acc.user_id).wallet
    next_at = d_cooldowns.touch_in(con, acc.user_id, ACTION, now, cfg.cooldown_s)
    return WorkResult(reward, wallet, xp, next_at)

def work(user_id, now: int | None = None, rng: random.Random | None = None) -> WorkResult:
    return run_in_transaction(work_in, user_id, now, rng)
