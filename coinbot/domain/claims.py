# coinbot/domain/claims.py
"""Récompenses périodiques (daily/weekly/monthly/yearly).

Chaque type est une petite machine à états indépendante par compte: jamais
réclamé → disponible → réclamé (fenêtre en cours) → disponible, etc. Seul le
daily porte un streak: il continue si la réclamation tombe avant
``reset_after_s`` (fenêtre de grâce, plus longue que la fenêtre de base),
sinon il repart à 1.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from coinbot.core.config import settings, ClaimConfig
from coinbot.core.db.base import get_conn, run_in_transaction
from coinbot.core.errors import TooSoon
from coinbot.domain import accounts as d_accounts
from coinbot.domain import clock
from coinbot.domain import economy as d_economy
from coinbot.domain import progression as d_progression
from coinbot.domain.money import floor_mul
from coinbot.domain.progression import XPResult
from coinbot.persistence import claims as repo

log = logging.getLogger(__name__)

CLAIM_TYPES = ("daily", "weekly", "monthly", "yearly")


@dataclass(frozen=True)
class ClaimResult:
    claim_type: str
    amount: int
    streak: Optional[int]
    xp: XPResult


@dataclass(frozen=True)
class ClaimStatus:
    claim_type: str
    claimed: bool
    time_left: int
    streak: Optional[int]


def _config(claim_type: str) -> ClaimConfig:
    if claim_type not in CLAIM_TYPES:
        raise ValueError(f"unknown claim type {claim_type!r}")
    return getattr(settings.economy.claims, claim_type)

def streak_amount(cfg: ClaimConfig, streak: int) -> int:
    if not cfg.streak or not cfg.streak.enabled:
        return cfg.amount
    bonus = min(int(streak) * Decimal(str(cfg.streak.per_streak_bonus)), Decimal(str(cfg.streak.max_bonus)))
    return floor_mul(cfg.amount, 1 + bonus)

def claim_in(con, user_id, claim_type: str, now: int | None = None) -> ClaimResult:
    cfg = _config(claim_type)
    now = clock.now() if now is None else int(now)
    acc = d_accounts.ensure_in(con, user_id)
    rec = repo.get(con, acc.user_id, claim_type)

    if rec is None:
        streak, amount = 1, cfg.amount
    else:
        elapsed = now - rec["last_claimed_ts"]
        if elapsed < cfg.window_s:
            raise TooSoon(cfg.window_s - elapsed, claim_type)
        if cfg.streak:
            streak = rec["streak"] + 1 if elapsed < cfg.streak.reset_after_s else 1
            amount = streak_amount(cfg, streak)
        else:
            streak, amount = 1, cfg.amount

    repo.upsert(con, acc.user_id, claim_type, now, streak)
    d_economy.credit_in(con, acc.user_id, amount, f"{claim_type} reward")
    xp = d_progression.grant_xp_in(con, acc.user_id, cfg.xp, f"{claim_type} reward")
    log.info("Claim %s %s: %d (streak %s)", claim_type, acc.user_id, amount, streak if cfg.streak else "-")
    return ClaimResult(claim_type, amount, streak if cfg.streak else None, xp)

def claim(user_id, claim_type: str, now: int | None = None) -> ClaimResult:
    return run_in_transaction(claim_in, user_id, claim_type, now)

def status(user_id, claim_type: str, now: int | None = None) -> ClaimStatus:
    # lecture pure: ne provisionne pas le compte
    cfg = _config(claim_type)
    now = clock.now() if now is None else int(now)
    rec = repo.get(get_conn(), str(user_id), claim_type)
    if rec is None:
        return ClaimStatus(claim_type, False, 0, 0 if cfg.streak else None)
    left = max(0, cfg.window_s - (now - rec["last_claimed_ts"]))
    return ClaimStatus(claim_type, left > 0, left, rec["streak"] if cfg.streak else None)
