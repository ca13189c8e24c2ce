# coinbot/domain/accounts.py
from __future__ import annotations

from coinbot.core.config import settings
from coinbot.core.db.base import get_conn, run_in_transaction
from coinbot.persistence import accounts as repo
from coinbot.persistence.accounts import Account


def ensure_in(con, user_id) -> Account:
    """Provisionne le compte si absent (dans la transaction de l'appelant)."""
    eco = settings.economy
    return repo.get_or_create(con, str(user_id), eco.currency.starting_balance, eco.safe.base_capacity)

def get(user_id) -> Account:
    return run_in_transaction(ensure_in, user_id)

def balance(user_id) -> tuple[int, int, int]:
    """(wallet, safe, capacité du coffre)."""
    acc = get(user_id)
    return acc.wallet, acc.safe_balance, acc.safe_capacity

def _record_command_in(con, user_id) -> int:
    ensure_in(con, user_id)
    return repo.incr_commands(con, str(user_id))

def record_command(user_id) -> int:
    return run_in_transaction(_record_command_in, user_id)

def count() -> int:
    return repo.count(get_conn())

def top_richest(limit: int = 10) -> list[tuple[str, int]]:
    return repo.top_richest(get_conn(), int(limit))

def top_levels(limit: int = 10) -> list[tuple[str, int, int]]:
    return repo.top_levels(get_conn(), int(limit))

def rank(user_id) -> int:
    return repo.level_rank(get_conn(), str(user_id))
