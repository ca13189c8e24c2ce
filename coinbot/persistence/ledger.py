# coinbot/persistence/ledger.py
from __future__ import annotations
from dataclasses import dataclass

KINDS = ("credit", "debit", "deposit", "withdraw", "xp")


@dataclass(frozen=True)
class LedgerEntry:
    id: int
    user_id: str
    kind: str
    amount: int
    reason: str
    ts: int


def append(con, user_id: str, kind: str, amount: int, reason: str, ts: int) -> int:
    if kind not in KINDS:
        raise ValueError(f"unknown ledger kind {kind!r}")
    cur = con.execute(
        "INSERT INTO ledger_entries(user_id, kind, amount, reason, ts) VALUES(?,?,?,?,?)",
        (user_id, kind, int(amount), reason or "", int(ts)),
    )
    return int(cur.lastrowid)

def recent(con, user_id: str, limit: int = 20, kind: str | None = None) -> list[LedgerEntry]:
    sql = "SELECT id, user_id, kind, amount, reason, ts FROM ledger_entries WHERE user_id=?"
    params: list = [user_id]
    if kind:
        sql += " AND kind=?"
        params.append(kind)
    sql += " ORDER BY ts DESC, id DESC LIMIT ?"
    params.append(int(limit))
    rows = con.execute(sql, params).fetchall()
    return [LedgerEntry(int(r[0]), r[1], r[2], int(r[3]), r[4], int(r[5])) for r in rows]

def totals(con, user_id: str) -> dict[str, int]:
    rows = con.execute(
        "SELECT kind, COALESCE(SUM(amount),0) FROM ledger_entries WHERE user_id=? GROUP BY kind", (user_id,)
    ).fetchall()
    return {r[0]: int(r[1]) for r in rows}
