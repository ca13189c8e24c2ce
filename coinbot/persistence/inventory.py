# coinbot/persistence/inventory.py
from __future__ import annotations

def get_inventory(con, user_id: str) -> dict[str, int]:
    rows = con.execute("SELECT item_id, qty FROM inventory WHERE user_id=? AND qty > 0", (user_id,)).fetchall()
    return {r[0]: int(r[1]) for r in rows}

def quantity(con, user_id: str, item_id: str) -> int:
    row = con.execute("SELECT qty FROM inventory WHERE user_id=? AND item_id=?", (user_id, item_id)).fetchone()
    return int(row[0]) if row else 0

def add_item(con, user_id: str, item_id: str, qty: int = 1) -> int:
    if qty <= 0:
        return quantity(con, user_id, item_id)
    con.execute(
        "INSERT INTO inventory(user_id, item_id, qty) VALUES(?,?,?) "
        "ON CONFLICT(user_id, item_id) DO UPDATE SET qty = qty + excluded.qty",
        (user_id, item_id, int(qty)),
    )
    return quantity(con, user_id, item_id)
