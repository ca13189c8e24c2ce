# coinbot/domain/safe.py
from __future__ import annotations
import logging
from dataclasses import dataclass

from coinbot.core.config import settings
from coinbot.core.db.base import run_in_transaction
from coinbot.core.errors import (
    InsufficientFunds, InsufficientSafeFunds, InvalidAmount, SafeFull, SafeMaxTier, WalletLimitExceeded,
)
from coinbot.domain import accounts as d_accounts
from coinbot.domain import economy as d_economy
from coinbot.domain.money import floor_growth
from coinbot.persistence import accounts as repo

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpgradeInfo:
    tier: int
    capacity: int
    next_cost: int
    max_tier: int
    can_upgrade: bool


def upgrade_cost(tier: int) -> int:
    """Prix pour passer du palier ``tier`` au suivant (exponentiel)."""
    cfg = settings.economy.safe
    return floor_growth(cfg.base_cost, cfg.upgrade_multiplier, int(tier) - 1)

def capacity_for(tier: int) -> int:
    cfg = settings.economy.safe
    return cfg.base_capacity + (int(tier) - 1) * cfg.capacity_increase_per_tier

def deposit_in(con, user_id, amount: int) -> tuple[int, int]:
    amount = int(amount)
    if amount <= 0:
        raise InvalidAmount(amount)
    acc = d_accounts.ensure_in(con, user_id)
    if acc.wallet < amount:
        raise InsufficientFunds(amount, acc.wallet)
    room = acc.safe_capacity - acc.safe_balance
    if amount > room:
        raise SafeFull(max(0, room))

    wallet, safe = acc.wallet - amount, acc.safe_balance + amount
    repo.update(con, acc.user_id, wallet=wallet, safe_balance=safe)
    d_economy.record(con, acc.user_id, "deposit", amount, "deposit to safe")
    return wallet, safe

def withdraw_in(con, user_id, amount: int) -> tuple[int, int]:
    amount = int(amount)
    if amount <= 0:
        raise InvalidAmount(amount)
    acc = d_accounts.ensure_in(con, user_id)
    if acc.safe_balance < amount:
        raise InsufficientSafeFunds(amount, acc.safe_balance)
    wallet = acc.wallet + amount
    d_economy.check_wallet_cap(wallet, WalletLimitExceeded)

    safe = acc.safe_balance - amount
    repo.update(con, acc.user_id, wallet=wallet, safe_balance=safe)
    d_economy.record(con, acc.user_id, "withdraw", amount, "withdraw from safe")
    return wallet, safe

def upgrade_in(con, user_id) -> tuple[int, int, int]:
    acc = d_accounts.ensure_in(con, user_id)
    max_tier = settings.economy.safe.max_tier
    if acc.safe_tier >= max_tier:
        raise SafeMaxTier(max_tier)
    cost = upgrade_cost(acc.safe_tier)
    if acc.wallet < cost:
        raise InsufficientFunds(cost, acc.wallet)

    # le coût est détruit (puits), pas déplacé
    d_economy.debit_in(con, acc.user_id, cost, "safe upgrade")
    tier = acc.safe_tier + 1
    capacity = capacity_for(tier)
    repo.update(con, acc.user_id, safe_tier=tier, safe_capacity=capacity)
    log.info("Coffre %s: palier %d -> %d (capacité %d, coût %d)", acc.user_id, acc.safe_tier, tier, capacity, cost)
    return tier, capacity, cost

def deposit(user_id, amount: int) -> tuple[int, int]:
    return run_in_transaction(deposit_in, user_id, amount)

def withdraw(user_id, amount: int) -> tuple[int, int]:
    return run_in_transaction(withdraw_in, user_id, amount)

def upgrade(user_id) -> tuple[int, int, int]:
    return run_in_transaction(upgrade_in, user_id)

def upgrade_info(user_id) -> UpgradeInfo:
    acc = d_accounts.get(user_id)
    max_tier = settings.economy.safe.max_tier
    can = acc.safe_tier < max_tier
    return UpgradeInfo(
        tier=acc.safe_tier,
        capacity=acc.safe_capacity,
        next_cost=upgrade_cost(acc.safe_tier) if can else 0,
        max_tier=max_tier,
        can_upgrade=can,
    )
