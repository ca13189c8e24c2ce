# coinbot/domain/economy.py
from __future__ import annotations
import logging

from coinbot.core.config import settings
from coinbot.core.db.base import get_conn, run_in_transaction
from coinbot.core.errors import InsufficientFunds, InvalidAmount, LimitExceeded, SelfTransfer
from coinbot.domain import accounts as d_accounts
from coinbot.domain import clock
from coinbot.persistence import accounts as repo
from coinbot.persistence import ledger as ledger_repo
from coinbot.persistence.ledger import LedgerEntry

log = logging.getLogger(__name__)

# Toutes les valeurs d'argent sont des entiers (coins), bornés par l'INTEGER de SQLite.
SQLITE_MAX_INT = 2**63 - 1

def record(con, user_id, kind: str, amount: int, reason: str) -> None:
    ledger_repo.append(con, str(user_id), kind, int(amount), reason, clock.now())
    log.debug("ledger %s %s %d (%s)", user_id, kind, amount, reason)

def _check_amount(amount: int) -> int:
    amount = int(amount)
    if amount <= 0 or amount < settings.economy.currency.min_transaction_amount:
        raise InvalidAmount(amount)
    return amount

def check_wallet_cap(new_wallet: int, error=LimitExceeded) -> None:
    cap = settings.economy.currency.max_wallet_amount
    limit = SQLITE_MAX_INT if cap is None else min(cap, SQLITE_MAX_INT)
    if new_wallet > limit:
        raise error(limit)

# ───────── Variantes internes (transaction déjà ouverte) ─────────
def credit_in(con, user_id, amount: int, reason: str) -> int:
    amount = _check_amount(amount)
    acc = d_accounts.ensure_in(con, user_id)
    new_wallet = acc.wallet + amount
    check_wallet_cap(new_wallet)
    repo.update(con, acc.user_id, wallet=new_wallet)
    record(con, acc.user_id, "credit", amount, reason)
    return new_wallet

def debit_in(con, user_id, amount: int, reason: str) -> int:
    amount = _check_amount(amount)
    acc = d_accounts.ensure_in(con, user_id)
    if acc.wallet < amount:
        raise InsufficientFunds(amount, acc.wallet)
    new_wallet = acc.wallet - amount
    repo.update(con, acc.user_id, wallet=new_wallet)
    record(con, acc.user_id, "debit", amount, reason)
    return new_wallet

def transfer_in(con, from_id, to_id, amount: int) -> tuple[int, int]:
    # import local: progression dépend déjà de ce module
    from coinbot.domain import progression as d_progression

    sender, receiver = str(from_id), str(to_id)
    if sender == receiver:
        raise SelfTransfer()
    amount = int(amount)
    cap = settings.economy.currency.max_transaction_amount
    if amount <= 0 or (cap is not None and amount > cap):
        raise InvalidAmount(amount, cap)

    d_accounts.ensure_in(con, sender)
    d_accounts.ensure_in(con, receiver)
    debit_in(con, sender, amount, f"transfer to {receiver}")
    receiver_wallet = credit_in(con, receiver, amount, f"transfer from {sender}")
    d_progression.grant_xp_in(con, sender, settings.economy.leveling.xp_sources.transfer, "transfer")
    # le bonus de level-up a pu créditer l'émetteur: relire
    return repo.get(con, sender).wallet, receiver_wallet

# ───────── API publique (une transaction par appel) ─────────
def credit(user_id, amount: int, reason: str) -> int:
    return run_in_transaction(credit_in, user_id, amount, reason)

def debit(user_id, amount: int, reason: str) -> int:
    return run_in_transaction(debit_in, user_id, amount, reason)

def transfer(from_id, to_id, amount: int) -> tuple[int, int]:
    return run_in_transaction(transfer_in, from_id, to_id, amount)

def history(user_id, limit: int = 20, kind: str | None = None) -> list[LedgerEntry]:
    """Dernières écritures du compte, plus récentes d'abord."""
    return ledger_repo.recent(get_conn(), str(user_id), int(limit), kind)

def totals(user_id) -> dict[str, int]:
    return ledger_repo.totals(get_conn(), str(user_id))
