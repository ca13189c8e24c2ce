import pytest

from coinbot.core.errors import InsufficientFunds, ItemLimitReached, LevelTooLow, SafeMaxTier, UnknownItem
from coinbot.domain import accounts as d_accounts
from coinbot.domain import economy as d_economy
from coinbot.domain import items
from coinbot.domain import progression as d_progression
from coinbot.domain import shop


def test_list_items_by_category():
    ids = [it.id for it, _ in shop.list_items(category="items")]
    assert ids == ["trophy", "lottery_ticket"]


def test_dynamic_price_resolved_for_user(make_account):
    make_account("alice", safe_tier=3)
    prices = {it.id: price for it, price in shop.list_items(user_id="alice")}
    assert prices["safe_upgrade"] == 11250
    assert prices["trophy"] == 1000000


def test_buy_lottery_ticket(make_account):
    make_account("alice", wallet=25000)
    p = shop.buy("alice", "Lottery_Ticket ")
    assert (p.item_id, p.price, p.wallet) == ("lottery_ticket", 10000, 15000)
    assert p.effect == {"quantity": 1}
    shop.buy("alice", "lottery_ticket")
    assert shop.inventory("alice") == {"lottery_ticket": 2}
    [last, _] = d_economy.history("alice", kind="debit")
    assert last.reason == "shop:lottery_ticket"


def test_stack_limit(make_account):
    make_account("alice", wallet=10_000_000)
    for _ in range(10):
        shop.buy("alice", "trophy")
    with pytest.raises(ItemLimitReached):
        shop.buy("alice", "trophy")
    assert shop.inventory("alice") == {"trophy": 10}
    assert d_accounts.get("alice").wallet == 0


def test_insufficient_funds_leaves_inventory(make_account):
    make_account("alice", wallet=9999)
    with pytest.raises(InsufficientFunds):
        shop.buy("alice", "lottery_ticket")
    assert shop.inventory("alice") == {}
    assert d_accounts.get("alice").wallet == 9999


def test_xp_boost_cascades(make_account):
    make_account("alice", wallet=60000)
    p = shop.buy("alice", "xp_boost")
    xp, level = 1000, 1
    while xp >= d_progression.required_xp(level):
        xp -= d_progression.required_xp(level)
        level += 1
    acc = d_accounts.get("alice")
    assert (acc.level, acc.xp) == (level, xp) == (5, 188)
    assert p.effect["xp"].levels_gained == 4
    assert acc.wallet == 60000 - 50000 + 4 * 500


def test_safe_upgrade(make_account):
    make_account("alice", wallet=6000)
    p = shop.buy("alice", "safe_upgrade")
    assert p.price == 5000
    assert p.effect == {"tier": 2, "capacity": 20000}
    assert p.wallet == 1000


def test_safe_upgrade_at_max_tier(make_account):
    make_account("alice", wallet=10**12, safe_tier=50)
    with pytest.raises(SafeMaxTier):
        shop.buy("alice", "safe_upgrade")


def test_unknown_item():
    with pytest.raises(UnknownItem):
        shop.buy("alice", "yacht")
    assert d_accounts.count() == 0


def test_level_requirement(make_account, monkeypatch):
    vip = items.StackableItem(
        id="vip_pass", name="VIP Pass", category="items", description="Members only",
        price=10, required_level=5,
    )
    monkeypatch.setitem(items.ITEMS, "vip_pass", vip)
    make_account("alice", wallet=100, level=4)
    with pytest.raises(LevelTooLow) as exc:
        shop.buy("alice", "vip_pass")
    assert (exc.value.required, exc.value.level) == (5, 4)
    make_account("alice", level=5)
    assert shop.buy("alice", "vip_pass").wallet == 90


def test_listing_for_unknown_user_is_a_pure_read():
    prices = {it.id: price for it, price in shop.list_items(user_id="ghost")}
    assert prices["safe_upgrade"] == 5000
    assert d_accounts.count() == 0
    assert dict((it.id, p) for it, p in shop.list_items())["safe_upgrade"] == 5000
