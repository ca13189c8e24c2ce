# coinbot/persistence/accounts.py
from __future__ import annotations
from dataclasses import dataclass

from coinbot.core.errors import AccountNotFound

_COLS = "user_id, wallet, safe_balance, safe_capacity, safe_tier, level, xp, total_commands"
_UPDATABLE = {"wallet", "safe_balance", "safe_capacity", "safe_tier", "level", "xp", "total_commands"}


@dataclass
class Account:
    user_id: str
    wallet: int
    safe_balance: int
    safe_capacity: int
    safe_tier: int
    level: int
    xp: int
    total_commands: int


def _row_to_account(row) -> Account:
    return Account(
        user_id=row[0], wallet=int(row[1]), safe_balance=int(row[2]), safe_capacity=int(row[3]),
        safe_tier=int(row[4]), level=int(row[5]), xp=int(row[6]), total_commands=int(row[7]),
    )

def get(con, user_id: str) -> Account:
    row = con.execute(f"SELECT {_COLS} FROM accounts WHERE user_id=?", (user_id,)).fetchone()
    if row is None:
        raise AccountNotFound(user_id)
    return _row_to_account(row)

def find(con, user_id: str) -> Account | None:
    row = con.execute(f"SELECT {_COLS} FROM accounts WHERE user_id=?", (user_id,)).fetchone()
    return _row_to_account(row) if row else None

def get_or_create(con, user_id: str, wallet: int, safe_capacity: int) -> Account:
    con.execute(
        "INSERT INTO accounts(user_id, wallet, safe_capacity) VALUES(?,?,?) ON CONFLICT(user_id) DO NOTHING",
        (user_id, int(wallet), int(safe_capacity)),
    )
    return get(con, user_id)

def update(con, user_id: str, **fields) -> None:
    cols = {k: int(v) for k, v in fields.items() if k in _UPDATABLE}
    unknown = set(fields) - _UPDATABLE
    if unknown:
        raise ValueError(f"unknown account fields: {sorted(unknown)}")
    if not cols:
        return
    assignments = ", ".join(f"{k}=?" for k in cols)
    cur = con.execute(
        f"UPDATE accounts SET {assignments}, updated_ts=strftime('%s','now') WHERE user_id=?",
        (*cols.values(), user_id),
    )
    if cur.rowcount == 0:
        raise AccountNotFound(user_id)

def incr_commands(con, user_id: str, delta: int = 1) -> int:
    con.execute("UPDATE accounts SET total_commands = total_commands + ? WHERE user_id=?", (int(delta), user_id))
    (n,) = con.execute("SELECT total_commands FROM accounts WHERE user_id=?", (user_id,)).fetchone()
    return int(n)

def count(con) -> int:
    (n,) = con.execute("SELECT COUNT(*) FROM accounts").fetchone()
    return int(n)

def top_richest(con, limit: int = 10) -> list[tuple[str, int]]:
    rows = con.execute(
        "SELECT user_id, wallet + safe_balance AS worth FROM accounts "
        "ORDER BY worth DESC, user_id ASC LIMIT ?",
        (int(limit),),
    ).fetchall()
    return [(r[0], int(r[1])) for r in rows]

def top_levels(con, limit: int = 10) -> list[tuple[str, int, int]]:
    rows = con.execute(
        "SELECT user_id, level, xp FROM accounts ORDER BY level DESC, xp DESC, user_id ASC LIMIT ?",
        (int(limit),),
    ).fetchall()
    return [(r[0], int(r[1]), int(r[2])) for r in rows]

def level_rank(con, user_id: str) -> int:
    # 0 si le compte n'existe pas
    row = con.execute("SELECT level, xp FROM accounts WHERE user_id=?", (user_id,)).fetchone()
    if row is None:
        return 0
    (ahead,) = con.execute(
        "SELECT COUNT(*) FROM accounts WHERE level > ? OR (level = ? AND xp > ?)",
        (int(row[0]), int(row[0]), int(row[1])),
    ).fetchone()
    return int(ahead) + 1
