# coinbot/domain/items.py
"""Catalogue du shop: une table de données, chaque entrée est une variante
(objet empilable, consommable XP, amélioration) qui porte son propre effet
sur le ledger."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any

from coinbot.core.errors import ItemLimitReached
from coinbot.domain import economy as d_economy
from coinbot.domain import progression as d_progression
from coinbot.domain import safe as d_safe
from coinbot.persistence import inventory as inv_repo
from coinbot.persistence.accounts import Account


@dataclass(frozen=True, kw_only=True)
class ShopItem:
    id: str
    name: str
    description: str
    category: str
    price: int = 0
    emoji: str = ""
    required_level: int = 0

    def price_for(self, acc: Account | None) -> int:
        return self.price

    def purchase(self, con, acc: Account) -> dict[str, Any]:
        raise NotImplementedError


@dataclass(frozen=True, kw_only=True)
class StackableItem(ShopItem):
    max_quantity: int = 1

    def purchase(self, con, acc):
        owned = inv_repo.quantity(con, acc.user_id, self.id)
        if owned >= self.max_quantity:
            raise ItemLimitReached(self.id, self.max_quantity)
        d_economy.debit_in(con, acc.user_id, self.price, f"shop:{self.id}")
        return {"quantity": inv_repo.add_item(con, acc.user_id, self.id, 1)}


@dataclass(frozen=True, kw_only=True)
class XPBoost(ShopItem):
    xp_amount: int

    def purchase(self, con, acc):
        d_economy.debit_in(con, acc.user_id, self.price, f"shop:{self.id}")
        return {"xp": d_progression.grant_xp_in(con, acc.user_id, self.xp_amount, "xp boost")}


@dataclass(frozen=True, kw_only=True)
class SafeUpgrade(ShopItem):
    # prix dynamique: dépend du palier courant (palier 1 pour un compte inconnu)

    def price_for(self, acc):
        return d_safe.upgrade_cost(acc.safe_tier if acc else 1)

    def purchase(self, con, acc):
        tier, capacity, _ = d_safe.upgrade_in(con, acc.user_id)
        return {"tier": tier, "capacity": capacity}


ITEMS: dict[str, ShopItem] = {
    "trophy": StackableItem(
        id="trophy", name="Trophy", emoji="🏆", category="items",
        description="A prestigious trophy to show off your wealth",
        price=1000000, max_quantity=10,
    ),
    "xp_boost": XPBoost(
        id="xp_boost", name="XP Boost", emoji="⚡", category="boosts",
        description="Instantly gain 1000 XP",
        price=50000, xp_amount=1000,
    ),
    "safe_upgrade": SafeUpgrade(
        id="safe_upgrade", name="Safe Upgrade", emoji="🔒", category="upgrades",
        description="Upgrade your safe capacity",
    ),
    "lottery_ticket": StackableItem(
        id="lottery_ticket", name="Lottery Ticket", emoji="🎫", category="items",
        description="A chance to win big! Draw happens daily",
        price=10000, max_quantity=100,
    ),
}
