"""Propriétés: conservation, non-négativité, capacité du coffre, cascade de niveaux."""
import itertools

from hypothesis import HealthCheck, given, settings as h_settings, strategies as st

from coinbot.core.config import settings
from coinbot.core.errors import EconomyError
from coinbot.domain import accounts as d_accounts
from coinbot.domain import economy as d_economy
from coinbot.domain import progression as d_progression
from coinbot.domain import safe as d_safe
from coinbot.domain import wager

from tests.helpers import ScriptedRng, make_account

_ids = itertools.count()
_fixture_ok = h_settings(suppress_health_check=[HealthCheck.function_scoped_fixture], max_examples=40, deadline=None)


def _fresh(prefix, n):
    k = next(_ids)
    return [f"{prefix}{k}_{i}" for i in range(n)]


def _worth(acc):
    return acc.wallet + acc.safe_balance


@_fixture_ok
@given(moves=st.lists(st.tuples(st.integers(0, 2), st.integers(0, 2), st.integers(-5, 3000)), max_size=25))
def test_transfers_conserve_money(db, moves):
    users = _fresh("t", 3)
    for u in users:
        make_account(u, wallet=1000)
    for a, b, amount in moves:
        try:
            d_economy.transfer(users[a], users[b], amount)
        except EconomyError:
            pass
    accs = [d_accounts.get(u) for u in users]
    bonus = settings.economy.leveling.level_up_bonus
    assert sum(_worth(a) for a in accs) == 3000 + bonus * sum(a.level - 1 for a in accs)
    assert all(a.wallet >= 0 for a in accs)


@_fixture_ok
@given(ops=st.lists(st.tuples(st.sampled_from(["deposit", "withdraw", "upgrade"]), st.integers(-10, 40000)), max_size=25))
def test_safe_stays_within_capacity(db, ops):
    [u] = _fresh("s", 1)
    make_account(u, wallet=50000)
    spent = 0
    for op, amount in ops:
        try:
            if op == "deposit":
                d_safe.deposit(u, amount)
            elif op == "withdraw":
                d_safe.withdraw(u, amount)
            else:
                spent += d_safe.upgrade(u)[2]
        except EconomyError:
            pass
        acc = d_accounts.get(u)
        assert acc.wallet >= 0
        assert 0 <= acc.safe_balance <= acc.safe_capacity
        assert acc.safe_capacity == d_safe.capacity_for(acc.safe_tier)
    assert _worth(d_accounts.get(u)) == 50000 - spent


@_fixture_ok
@given(start_xp=st.integers(0, 99), amount=st.integers(0, 20000))
def test_level_cascade_leaves_xp_below_requirement(db, start_xp, amount):
    [u] = _fresh("x", 1)
    make_account(u, wallet=0, xp=start_xp)
    res = d_progression.grant_xp(u, amount, "test")
    acc = d_accounts.get(u)
    assert acc.xp < d_progression.required_xp(acc.level)
    assert acc.level == 1 + res.levels_gained
    assert acc.wallet == settings.economy.leveling.level_up_bonus * res.levels_gained
    total = acc.xp + sum(d_progression.required_xp(lv) for lv in range(1, acc.level))
    assert total == start_xp + max(amount, 0)


@_fixture_ok
@given(bet=st.integers(100, 10000), win=st.booleans())
def test_coinflip_settlement(db, bet, win):
    [u] = _fresh("c", 1)
    make_account(u, wallet=10000)
    out = wager.play_coinflip(u, bet, "heads", rng=ScriptedRng("heads" if win else "tails"))
    expected = bet * 195 // 100 - bet if win else -bet
    assert out.net_change == expected
    assert out.wallet == 10000 + expected
    assert out.wallet >= 0
