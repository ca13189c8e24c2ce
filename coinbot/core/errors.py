# coinbot/core/errors.py
"""Échecs métier (causés par l'utilisateur) et échec interne du stockage.

Toutes les erreurs ``EconomyError`` sont récupérables: la couche commandes les
affiche telles quelles. ``InternalFailure`` signale un problème de stockage,
la transaction a déjà été annulée.
"""
from __future__ import annotations
from typing import Optional


class EconomyError(Exception):
    """Base des refus métier."""


class AccountNotFound(EconomyError):
    def __init__(self, user_id: str):
        super().__init__(f"account {user_id} not found")
        self.user_id = user_id


class InsufficientFunds(EconomyError):
    def __init__(self, needed: int, available: int):
        super().__init__(f"insufficient funds: need {needed}, have {available}")
        self.needed = needed
        self.available = available


class InsufficientSafeFunds(EconomyError):
    def __init__(self, needed: int, available: int):
        super().__init__(f"insufficient safe funds: need {needed}, have {available}")
        self.needed = needed
        self.available = available


class SafeFull(EconomyError):
    def __init__(self, room: int):
        super().__init__(f"safe can only hold {room} more")
        self.room = room


class SafeMaxTier(EconomyError):
    def __init__(self, max_tier: int):
        super().__init__(f"safe already at max tier {max_tier}")
        self.max_tier = max_tier


class LimitExceeded(EconomyError):
    def __init__(self, limit: int):
        super().__init__(f"wallet cannot hold more than {limit}")
        self.limit = limit


class WalletLimitExceeded(LimitExceeded):
    pass


class InvalidAmount(EconomyError):
    def __init__(self, amount: int, limit: Optional[int] = None):
        msg = f"invalid amount {amount}" + (f" (max {limit})" if limit is not None else "")
        super().__init__(msg)
        self.amount = amount
        self.limit = limit


class SelfTransfer(EconomyError):
    def __init__(self):
        super().__init__("cannot transfer to yourself")


class TooSoon(EconomyError):
    def __init__(self, remaining: int, action: str = ""):
        super().__init__(f"{action or 'action'} available in {remaining}s")
        self.remaining = int(remaining)
        self.action = action


class BetOutOfRange(EconomyError):
    def __init__(self, bet: int, min_bet: int, max_bet: Optional[int]):
        super().__init__(f"bet {bet} outside [{min_bet}, {max_bet if max_bet is not None else '∞'}]")
        self.bet = bet
        self.min_bet = min_bet
        self.max_bet = max_bet


class InvalidGuess(EconomyError):
    pass


class UnknownItem(EconomyError):
    def __init__(self, item_id: str):
        super().__init__(f"unknown item {item_id!r}")
        self.item_id = item_id


class ItemLimitReached(EconomyError):
    def __init__(self, item_id: str, max_quantity: int):
        super().__init__(f"{item_id}: limit of {max_quantity} reached")
        self.item_id = item_id
        self.max_quantity = max_quantity


class LevelTooLow(EconomyError):
    def __init__(self, required: int, level: int):
        super().__init__(f"level {required} required (current {level})")
        self.required = required
        self.level = level


class InternalFailure(Exception):
    """Le stockage a échoué; rien n'a été écrit."""
