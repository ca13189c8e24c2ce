# coinbot/persistence/cooldowns.py
from __future__ import annotations

def expires_at(con, user_id: str, action: str) -> int:
    row = con.execute("SELECT expires_ts FROM cooldowns WHERE user_id=? AND action=?", (user_id, action)).fetchone()
    return int(row[0]) if row else 0

def touch(con, user_id: str, action: str, expires_ts: int) -> None:
    con.execute(
        "INSERT INTO cooldowns(user_id, action, expires_ts) VALUES(?,?,?) "
        "ON CONFLICT(user_id, action) DO UPDATE SET expires_ts=excluded.expires_ts",
        (user_id, action, int(expires_ts)),
    )

def delete_expired(con, now: int) -> int:
    cur = con.execute("DELETE FROM cooldowns WHERE expires_ts <= ?", (int(now),))
    return int(cur.rowcount)
