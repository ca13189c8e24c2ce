DDL = """
CREATE INDEX IF NOT EXISTS idx_ledger_user_ts ON ledger_entries(user_id, ts);
CREATE INDEX IF NOT EXISTS idx_accounts_level ON accounts(level DESC, xp DESC);
CREATE INDEX IF NOT EXISTS idx_accounts_worth ON accounts((wallet + safe_balance) DESC);
CREATE INDEX IF NOT EXISTS idx_cooldowns_expires ON cooldowns(expires_ts);
"""
def apply(con): con.executescript(DDL)
