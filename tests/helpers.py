"""Outils de test: comptes forcés et générateurs aléatoires scriptés."""
from coinbot.core.db.base import run_in_transaction
from coinbot.domain import accounts as d_accounts
from coinbot.persistence import accounts as repo


def make_account(user_id="alice", **fields):
    """Provisionne ``user_id`` puis force les champs donnés (wallet, xp, ...)."""
    def _fn(con):
        d_accounts.ensure_in(con, user_id)
        if fields:
            repo.update(con, str(user_id), **fields)
        return repo.get(con, str(user_id))
    return run_in_transaction(_fn)


class ScriptedRng:
    """Renvoie les valeurs fournies, dans l'ordre, quel que soit le tirage demandé."""

    def __init__(self, *values):
        self.values = list(values)

    def _next(self):
        assert self.values, "no scripted value left"
        return self.values.pop(0)

    def choice(self, seq):
        v = self._next()
        assert v in seq
        return v

    def randint(self, a, b):
        v = self._next()
        assert a <= v <= b
        return v

    def randrange(self, stop):
        v = self._next()
        assert 0 <= v < stop
        return v

    def uniform(self, a, b):
        v = self._next()
        assert a <= v <= b
        return v


class ExplodingRng:
    def __getattr__(self, name):
        raise AssertionError(f"rng.{name} should not have been called")
