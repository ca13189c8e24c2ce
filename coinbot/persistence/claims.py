# coinbot/persistence/claims.py
from __future__ import annotations

def get(con, user_id: str, claim_type: str) -> dict | None:
    row = con.execute(
        "SELECT last_claimed_ts, streak FROM claims WHERE user_id=? AND claim_type=?", (user_id, claim_type)
    ).fetchone()
    if row is None:
        return None
    return {"last_claimed_ts": int(row[0]), "streak": int(row[1])}

def upsert(con, user_id: str, claim_type: str, last_claimed_ts: int, streak: int = 1) -> None:
    con.execute(
        "INSERT INTO claims(user_id, claim_type, last_claimed_ts, streak) VALUES(?,?,?,?) "
        "ON CONFLICT(user_id, claim_type) DO UPDATE SET last_claimed_ts=excluded.last_claimed_ts, "
        "streak=excluded.streak",
        (user_id, claim_type, int(last_claimed_ts), int(streak)),
    )
