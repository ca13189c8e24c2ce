# coinbot/domain/shop.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Any, Optional

from coinbot.core.db.base import get_conn, run_in_transaction
from coinbot.core.errors import LevelTooLow, UnknownItem
from coinbot.domain import accounts as d_accounts
from coinbot.domain.items import ITEMS, ShopItem
from coinbot.persistence import accounts as acc_repo
from coinbot.persistence import inventory as inv_repo

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Purchase:
    item_id: str
    price: int
    wallet: int
    effect: dict[str, Any]


def list_items(category: Optional[str] = None, user_id=None) -> list[tuple[ShopItem, int]]:
    """(objet, prix affiché). Avec ``user_id``, les prix dynamiques suivent son compte.

    Lecture pure: un compte inconnu voit les prix d'un compte neuf, sans être créé.
    """
    acc = acc_repo.find(get_conn(), str(user_id)) if user_id is not None else None
    out = []
    for it in ITEMS.values():
        if category and it.category != category:
            continue
        out.append((it, it.price_for(acc)))
    return out

def buy_in(con, user_id, item_id: str) -> Purchase:
    it = ITEMS.get(str(item_id).lower().strip())
    if it is None:
        raise UnknownItem(item_id)
    acc = d_accounts.ensure_in(con, user_id)
    if it.required_level and acc.level < it.required_level:
        raise LevelTooLow(it.required_level, acc.level)

    price = it.price_for(acc)
    effect = it.purchase(con, acc)
    wallet = d_accounts.ensure_in(con, acc.user_id).wallet
    log.info("Achat %s par %s pour %d", it.id, acc.user_id, price)
    return Purchase(it.id, price, wallet, effect)

def buy(user_id, item_id: str) -> Purchase:
    return run_in_transaction(buy_in, user_id, item_id)

def inventory(user_id) -> dict[str, int]:
    return inv_repo.get_inventory(get_conn(), str(user_id))
